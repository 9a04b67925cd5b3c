"""Type descriptor entities handed over by the extraction layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(str, Enum):
    """Scalar data types understood by OpenAPI 3.0."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


class CompositeMode(str, Enum):
    """Schema composition keywords."""

    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"


class VariantStyle(str, Enum):
    """Payload shape of one enum variant."""

    UNIT = "unit"
    NEWTYPE = "newtype"
    TUPLE = "tuple"
    STRUCT = "struct"


@dataclass(frozen=True)
class Primitive:
    """Scalar value with an optional format such as int64 or date-time."""

    kind: PrimitiveKind
    format: str | None = None


@dataclass(frozen=True)
class Array:
    """Homogeneous sequence."""

    element: TypeDescriptor


@dataclass(frozen=True)
class Optional:
    """Nullable wrapper; presence in `required` is decided by the owning field."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class Map:
    """String-keyed dictionary with uniformly typed values."""

    value: TypeDescriptor


@dataclass(frozen=True)
class TupleItem:
    """One positional member of a tuple or tuple-style variant."""

    type: TypeDescriptor
    description: str | None = None


@dataclass(frozen=True)
class Tuple:
    """Fixed-length heterogeneous sequence."""

    items: tuple[TupleItem, ...]


@dataclass(frozen=True)
class AnyValue:
    """Unconstrained value, rendered as an empty schema."""


@dataclass(frozen=True)
class Composite:
    """Explicit allOf/anyOf/oneOf composition."""

    mode: CompositeMode
    members: tuple[TypeDescriptor, ...]


@dataclass(frozen=True)
class Field:  # pylint: disable=too-many-instance-attributes
    """Named member of an object or struct-like variant.

    `force_optional` removes the field from `required`; it is independent of
    whether the value itself is nullable. `inline` embeds a named field type
    instead of referencing it.
    """

    name: str
    type: TypeDescriptor
    description: str | None = None
    force_optional: bool = False
    nullable: bool = False
    format: str | None = None
    example: str | None = None
    skip: bool = False
    inline: bool = False

    @property
    def is_optional(self) -> bool:
        """Return True when the field may be absent from a serialized object."""
        return self.force_optional


@dataclass(frozen=True)
class Object:
    """Struct with ordered fields."""

    name: str | None
    fields: tuple[Field, ...]


@dataclass(frozen=True)
class ExternalTagging:
    """`{"<variant>": <payload>}`."""


@dataclass(frozen=True)
class InternalTagging:
    """`{"<tag_key>": "<variant>", ...payload fields}`."""

    tag_key: str


@dataclass(frozen=True)
class AdjacentTagging:
    """`{"<tag_key>": "<variant>", "<content_key>": <payload>}`."""

    tag_key: str
    content_key: str


@dataclass(frozen=True)
class Untagged:
    """Bare payload without a discriminator."""


EnumRepresentation = ExternalTagging | InternalTagging | AdjacentTagging | Untagged


@dataclass(frozen=True)
class Variant:
    """One enum variant with its final serialized name.

    `inline` embeds named payload types instead of referencing them.
    """

    name: str
    style: VariantStyle
    items: tuple[TupleItem, ...] = ()
    fields: tuple[Field, ...] = ()
    description: str | None = None
    skip: bool = False
    inline: bool = False

    @staticmethod
    def unit(name: str, *, description: str | None = None, skip: bool = False) -> Variant:
        return Variant(name=name, style=VariantStyle.UNIT, description=description, skip=skip)

    @staticmethod
    def newtype(
        name: str,
        payload: TypeDescriptor,
        *,
        description: str | None = None,
        skip: bool = False,
        inline: bool = False,
    ) -> Variant:
        return Variant(
            name=name,
            style=VariantStyle.NEWTYPE,
            items=(TupleItem(type=payload),),
            description=description,
            skip=skip,
            inline=inline,
        )

    @staticmethod
    def positional(
        name: str,
        *items: TupleItem,
        description: str | None = None,
        skip: bool = False,
        inline: bool = False,
    ) -> Variant:
        return Variant(
            name=name,
            style=VariantStyle.TUPLE,
            items=tuple(items),
            description=description,
            skip=skip,
            inline=inline,
        )

    @staticmethod
    def struct(
        name: str,
        fields: tuple[Field, ...],
        *,
        description: str | None = None,
        skip: bool = False,
        inline: bool = False,
    ) -> Variant:
        return Variant(
            name=name,
            style=VariantStyle.STRUCT,
            fields=tuple(fields),
            description=description,
            skip=skip,
            inline=inline,
        )

    @property
    def has_payload(self) -> bool:
        return self.style is not VariantStyle.UNIT


@dataclass(frozen=True)
class EnumType:
    """Sum type encoded according to its tagging representation."""

    name: str
    representation: EnumRepresentation
    variants: tuple[Variant, ...]
    description: str | None = None

    @property
    def serialized_variants(self) -> tuple[Variant, ...]:
        return tuple(variant for variant in self.variants if not variant.skip)


@dataclass(frozen=True)
class Named:
    """Caller-declared type with metadata; only `inline=False` is stored by name."""

    name: str
    underlying: TypeDescriptor
    description: str | None = None
    format_override: str | None = None
    example: str | None = None
    inline: bool = False


@dataclass(frozen=True)
class Reference:
    """Forward pointer to a registered named schema."""

    name: str


TypeDescriptor = (
    Primitive
    | Array
    | Optional
    | Map
    | Tuple
    | AnyValue
    | Composite
    | Object
    | EnumType
    | Named
    | Reference
)


def descriptor_display_name(descriptor: TypeDescriptor) -> str | None:
    """Return the declared name of a descriptor, looking through nullable wrappers."""
    if isinstance(descriptor, Named | Reference | EnumType | Object):
        return descriptor.name
    if isinstance(descriptor, Optional):
        return descriptor_display_name(descriptor.inner)
    return None
