"""Record field iteration.

A record is a dataclass instance or a pydantic model instance. Tags live in
the field metadata (dataclasses) or in ``json_schema_extra`` (pydantic),
keyed by the tag name, so several tag keys can sit side by side.
"""

import dataclasses
import logging
import sys
import typing
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..config import DEFAULT_TAG_NAME
from ..errors import UnsupportedRecordError
from .tags import RuleSpec, format_tag
from .values import FieldValue, TypeInfo, describe_annotation, describe_annotation_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordField:
    """One declared field of a record as seen by the validator."""
    name: str
    tag: str
    value: FieldValue


def tagged(spec: str | list[RuleSpec], *, key: str = DEFAULT_TAG_NAME, **kwargs: Any) -> Any:
    """dataclasses.field() carrying a validation tag.

    Example:
        name: str = tagged("nonzero;len=7", default="")
    """
    if not isinstance(spec, str):
        spec = format_tag(spec)
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[key] = spec
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(obj: Any) -> bool:
    """True for dataclass and pydantic model instances (not classes)."""
    if isinstance(obj, type):
        return False
    return isinstance(obj, BaseModel) or dataclasses.is_dataclass(obj)


def _field_type_info(cls: type, f: dataclasses.Field) -> TypeInfo:
    """Resolve one field annotation; string annotations are evaluated alone
    so a single unresolvable field does not affect the others."""
    if not isinstance(f.type, str):
        return describe_annotation(f.type)

    def holder():
        pass

    holder.__annotations__ = {f.name: f.type}
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        hints = typing.get_type_hints(holder, globalns=globalns, localns=dict(vars(cls)), include_extras=True)
    except (NameError, TypeError, SyntaxError) as e:
        logger.debug(f"Could not resolve {cls.__name__}.{f.name} annotation {f.type!r}: {e}")
        return describe_annotation_text(f.type)
    return describe_annotation(hints.get(f.name))


def _iter_dataclass(record: Any, tag_name: str) -> Iterator[RecordField]:
    cls = type(record)
    for f in dataclasses.fields(record):
        info = _field_type_info(cls, f)
        yield RecordField(
            name=f.name,
            tag=f.metadata.get(tag_name, "") or "",
            value=FieldValue.inspect(getattr(record, f.name), info),
        )


def _iter_model(record: BaseModel, tag_name: str) -> Iterator[RecordField]:
    for name, info in type(record).model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        type_info = describe_annotation(info.annotation, info.metadata)
        yield RecordField(
            name=name,
            tag=extra.get(tag_name, "") or "",
            value=FieldValue.inspect(getattr(record, name), type_info),
        )


def iter_fields(record: Any, tag_name: str = DEFAULT_TAG_NAME) -> Iterator[RecordField]:
    """Yield the record's fields in declaration order.

    Raises:
        UnsupportedRecordError: If record is not struct-shaped
    """
    if isinstance(record, BaseModel):
        return _iter_model(record, tag_name)
    if is_record(record):
        return _iter_dataclass(record, tag_name)
    raise UnsupportedRecordError()
