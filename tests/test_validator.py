"""End-to-end tests for the module-level API and the default validator."""

from dataclasses import dataclass
from typing import Optional

import pytest

import tagvalidator
from tagvalidator import (
    ErrorOverride,
    FieldError,
    UnsupportedRecordError,
    tagged,
)


@dataclass
class User:
    Name: str = tagged("nonzero;len=7;mycheck", key="vd", default="")
    Age: int = tagged("nonzero;max=24", key="vd", default=0)
    Pics: list[str] = tagged("min=1", key="vd", default_factory=list)


@dataclass
class Gallery:
    Cover: Optional[list[str]] = tagged("min=1", default=None)


def mycheck(value, param):
    raise FieldError("mycheck error")


@pytest.fixture(autouse=True)
def fresh_default_validator():
    """Each test starts from an unconfigured default validator."""
    tagvalidator.reset_default_validator()
    yield
    tagvalidator.reset_default_validator()


class TestModuleLevelApi:
    """Test the process-wide convenience functions."""

    def test_user_example(self):
        tagvalidator.set_tag_name("vd")
        tagvalidator.set_overrides([
            ErrorOverride(field="Name", rule="nonzero", message="name must not be empty"),
            ErrorOverride(field="Name", rule="max", message="the length of name must be less than %v"),
            ErrorOverride(field="Age", rule="nonzero", message="age must not be zero"),
            ErrorOverride(field="Age", rule="max", message="age must be less than %v"),
            ErrorOverride(field="Pics", rule="min", message="the number of pictures must be more than %v"),
        ])
        tagvalidator.set_rule("mycheck", mycheck)

        result = tagvalidator.validate(User(Name="icepigss", Age=27))

        assert result.messages() == {
            "Name": "invalid length",
            "Age": "age must be less than 24",
            "Pics": "the number of pictures must be more than 1",
        }

    def test_default_tag_name(self):
        assert tagvalidator.default_validator().tag_name == "valid"
        assert tagvalidator.validate(User()).valid

    def test_empty_tag_name_is_noop(self):
        tagvalidator.set_tag_name("")
        assert tagvalidator.default_validator().tag_name == "valid"

    def test_removing_rule(self):
        tagvalidator.set_tag_name("vd")
        tagvalidator.set_rule("mycheck", mycheck)
        assert "Name" in tagvalidator.validate(User(Name="icepigs", Age=1, Pics=["a"]))

        tagvalidator.set_rule("mycheck", None)
        assert tagvalidator.validate(User(Name="icepigs", Age=1, Pics=["a"])).valid

    def test_reset_default_validator(self):
        tagvalidator.set_tag_name("vd")
        tagvalidator.reset_default_validator()
        assert tagvalidator.default_validator().tag_name == "valid"

    def test_optional_collection(self):
        assert tagvalidator.validate(Gallery()).valid
        assert "Cover" in tagvalidator.validate(Gallery(Cover=[]))
        assert tagvalidator.validate(Gallery(Cover=["a.png"])).valid

    def test_unsupported_record(self):
        with pytest.raises(UnsupportedRecordError):
            tagvalidator.validate({"Name": "icepigss"})
