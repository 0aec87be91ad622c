"""Runtime value inspection for rule functions.

Every field value is classified into one of a closed set of kinds before a
rule looks at it. The declared annotation of the field takes part in the
classification: ``Optional[...]`` marks a pointer field and
``Annotated[int, Unsigned]`` marks an unsigned integer.
"""

import numbers
import re
import types
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin


class Kind(str, Enum):
    """Semantic kinds a field value can have."""
    STRING = "string"
    SIGNED_INT = "signed_int"
    UNSIGNED_INT = "unsigned_int"
    FLOAT = "float"
    COLLECTION = "collection"
    POINTER = "pointer"
    BOOLEAN = "boolean"
    STRUCT = "struct"
    INVALID = "invalid"


class Unsigned:
    """Annotation marker for unsigned integer fields."""


UInt = Annotated[int, Unsigned]


@dataclass(frozen=True)
class TypeInfo:
    """What a field annotation says about its values."""
    optional: bool = False
    unsigned: bool = False
    floating: bool = False


def describe_annotation(annotation: Any, metadata: Sequence[Any] = ()) -> TypeInfo:
    """Reduce a field annotation to the facts value inspection needs.

    Args:
        annotation: The declared type, possibly None when unannotated
        metadata: Extra Annotated metadata stored outside the annotation
            (pydantic keeps it on the FieldInfo)
    """
    optional = False
    unsigned = any(_is_unsigned_marker(m) for m in metadata)

    while annotation is not None:
        origin = get_origin(annotation)
        if origin is Annotated:
            args = get_args(annotation)
            if any(_is_unsigned_marker(m) for m in args[1:]):
                unsigned = True
            annotation = args[0]
        elif origin is Union or origin is types.UnionType:
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) != len(get_args(annotation)):
                optional = True
            annotation = members[0] if len(members) == 1 else None
        else:
            break

    floating = isinstance(annotation, type) and issubclass(annotation, float)
    return TypeInfo(optional=optional, unsigned=unsigned, floating=floating)


_OPTIONAL_TEXT = re.compile(r"\bOptional\[|\|\s*None\b|\bNone\s*\|")
_FLOAT_TEXT = re.compile(r"^(?:Optional\[\s*float\s*\]|float(?:\s*\|\s*None)?|None\s*\|\s*float)$")
_UNSIGNED_TEXT = re.compile(r"\b(?:UInt|Unsigned)\b")


def describe_annotation_text(text: str) -> TypeInfo:
    """Best-effort TypeInfo for a string annotation that cannot be evaluated."""
    text = text.strip()
    return TypeInfo(
        optional=bool(_OPTIONAL_TEXT.search(text)),
        unsigned=bool(_UNSIGNED_TEXT.search(text)),
        floating=bool(_FLOAT_TEXT.match(text)),
    )


def _is_unsigned_marker(obj: Any) -> bool:
    return obj is Unsigned or isinstance(obj, Unsigned)


def _classify(raw: Any, info: TypeInfo) -> Kind:
    if raw is None:
        return Kind.INVALID
    if isinstance(raw, bool):
        return Kind.BOOLEAN
    if isinstance(raw, str):
        return Kind.STRING
    if isinstance(raw, numbers.Integral):
        if info.floating:
            return Kind.FLOAT
        return Kind.UNSIGNED_INT if info.unsigned else Kind.SIGNED_INT
    if isinstance(raw, numbers.Real):
        return Kind.FLOAT
    if isinstance(raw, (bytes, bytearray, memoryview, Mapping, Sequence, Set)):
        return Kind.COLLECTION
    return Kind.STRUCT


@dataclass(frozen=True)
class FieldValue:
    """A field's runtime value together with its kind.

    Pointer values carry their element in ``elem``; a nil pointer has
    ``elem`` set to None.
    """
    kind: Kind
    raw: Any = None
    elem: "FieldValue | None" = None

    @classmethod
    def inspect(cls, raw: Any, info: TypeInfo | None = None) -> "FieldValue":
        """Classify ``raw`` using the optional annotation facts."""
        info = info or TypeInfo()
        if info.optional:
            if raw is None:
                return cls(Kind.POINTER, None, None)
            return cls(Kind.POINTER, raw, cls(_classify(raw, info), raw))
        return cls(_classify(raw, info), raw)

    @property
    def is_nil(self) -> bool:
        return self.kind is Kind.POINTER and self.elem is None

    def deref(self) -> "FieldValue | None":
        """Return the pointed-to value, self for non-pointers, None for nil."""
        if self.kind is Kind.POINTER:
            return self.elem
        return self

    def as_str(self) -> str:
        if isinstance(self.raw, Enum):
            # str() of a (str, Enum) member is "Cls.NAME", not its value
            return str.__str__(self.raw)
        return self.raw

    def as_int(self) -> int:
        return int(self.raw)

    def as_float(self) -> float:
        return float(self.raw)

    def size(self) -> int:
        """Length in code points for strings, element count for collections."""
        if self.kind is Kind.STRING:
            return len(self.as_str())
        return len(self.raw)
