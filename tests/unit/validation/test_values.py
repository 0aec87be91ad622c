"""Tests for runtime value inspection."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Annotated, Any, Optional

import pytest

from tagvalidator.validation.values import (
    FieldValue,
    Kind,
    TypeInfo,
    UInt,
    Unsigned,
    describe_annotation,
    describe_annotation_text,
)


class Color(str, Enum):
    RED = "red"


class Level(IntEnum):
    LOW = 1


@dataclass
class Inner:
    x: int = 0


class TestDescribeAnnotation:
    """Test annotation reduction."""

    def test_plain_types(self):
        assert describe_annotation(int) == TypeInfo()
        assert describe_annotation(str) == TypeInfo()
        assert describe_annotation(None) == TypeInfo()
        assert describe_annotation(Any) == TypeInfo()

    def test_optional_forms(self):
        assert describe_annotation(Optional[int]).optional is True
        assert describe_annotation(int | None).optional is True
        assert describe_annotation(None | str).optional is True

    def test_union_without_none_is_not_optional(self):
        assert describe_annotation(int | str).optional is False

    def test_unsigned_marker(self):
        assert describe_annotation(UInt).unsigned is True
        assert describe_annotation(Annotated[int, Unsigned()]).unsigned is True

    def test_optional_unsigned(self):
        info = describe_annotation(Optional[UInt])
        assert info.optional is True
        assert info.unsigned is True

    def test_metadata_outside_annotation(self):
        info = describe_annotation(int, [Unsigned])
        assert info.unsigned is True

    def test_float_annotation(self):
        assert describe_annotation(float).floating is True
        assert describe_annotation(Optional[float]).floating is True
        assert describe_annotation(int).floating is False
        assert describe_annotation(int | float).floating is False


class TestDescribeAnnotationText:
    """Test the fallback for annotations that cannot be evaluated."""

    @pytest.mark.parametrize("text", ["Optional[Missing]", "Missing | None", "None | Missing", "typing.Optional[list]"])
    def test_optional_text(self, text):
        assert describe_annotation_text(text).optional is True

    def test_plain_text(self):
        info = describe_annotation_text("Missing")
        assert info == TypeInfo()

    def test_unsigned_and_float_text(self):
        assert describe_annotation_text("Optional[UInt]").unsigned is True
        assert describe_annotation_text("float | None").floating is True
        assert describe_annotation_text("list[float]").floating is False


class TestFieldValueInspect:
    """Test kind classification."""

    @pytest.mark.parametrize("raw,kind", [
        ("abc", Kind.STRING),
        (Color.RED, Kind.STRING),
        (3, Kind.SIGNED_INT),
        (Level.LOW, Kind.SIGNED_INT),
        (2.5, Kind.FLOAT),
        (True, Kind.BOOLEAN),
        ([1, 2], Kind.COLLECTION),
        ((1,), Kind.COLLECTION),
        ({"a": 1}, Kind.COLLECTION),
        ({1, 2}, Kind.COLLECTION),
        (b"ab", Kind.COLLECTION),
        (Inner(), Kind.STRUCT),
        (object(), Kind.STRUCT),
        (None, Kind.INVALID),
    ])
    def test_kinds(self, raw, kind):
        assert FieldValue.inspect(raw).kind is kind

    def test_unsigned_int(self):
        value = FieldValue.inspect(7, TypeInfo(unsigned=True))
        assert value.kind is Kind.UNSIGNED_INT
        assert value.as_int() == 7

    def test_nil_pointer(self):
        value = FieldValue.inspect(None, TypeInfo(optional=True))
        assert value.kind is Kind.POINTER
        assert value.is_nil
        assert value.deref() is None

    def test_non_nil_pointer(self):
        value = FieldValue.inspect("abc", TypeInfo(optional=True))
        assert value.kind is Kind.POINTER
        assert not value.is_nil
        assert value.deref().kind is Kind.STRING
        assert value.deref().as_str() == "abc"

    def test_deref_of_non_pointer_is_self(self):
        value = FieldValue.inspect(5)
        assert value.deref() is value

    def test_size_counts_code_points(self):
        assert FieldValue.inspect("héllo").size() == 5
        assert FieldValue.inspect("日本語").size() == 3

    def test_size_of_collections(self):
        assert FieldValue.inspect([1, 2, 3]).size() == 3
        assert FieldValue.inspect({}).size() == 0

    def test_str_enum_as_str_uses_value(self):
        assert FieldValue.inspect(Color.RED).as_str() == "red"

    def test_int_in_float_field_is_float(self):
        value = FieldValue.inspect(1, TypeInfo(floating=True))
        assert value.kind is Kind.FLOAT
        assert value.as_float() == 1.0

    def test_int_in_optional_float_field(self):
        value = FieldValue.inspect(2, TypeInfo(optional=True, floating=True))
        assert value.deref().kind is Kind.FLOAT

    def test_bool_in_float_field_stays_boolean(self):
        assert FieldValue.inspect(True, TypeInfo(floating=True)).kind is Kind.BOOLEAN
