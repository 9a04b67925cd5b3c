"""Type modeling exports."""

from .builtin_types import (
    BOOLEAN,
    DATE,
    DATE_TIME,
    DOUBLE,
    FLOAT,
    INT8,
    INT16,
    INT32,
    INT64,
    INTEGER,
    NUMBER,
    STRING,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UNIT,
    UUID,
    integer,
    number,
    string,
)
from .type_descriptors import (
    AdjacentTagging,
    AnyValue,
    Array,
    Composite,
    CompositeMode,
    EnumRepresentation,
    EnumType,
    ExternalTagging,
    Field,
    InternalTagging,
    Map,
    Named,
    Object,
    Optional,
    Primitive,
    PrimitiveKind,
    Reference,
    Tuple,
    TupleItem,
    TypeDescriptor,
    Untagged,
    Variant,
    VariantStyle,
    descriptor_display_name,
)

__all__ = [
    "AdjacentTagging",
    "AnyValue",
    "Array",
    "Composite",
    "CompositeMode",
    "EnumRepresentation",
    "EnumType",
    "ExternalTagging",
    "Field",
    "InternalTagging",
    "Map",
    "Named",
    "Object",
    "Optional",
    "Primitive",
    "PrimitiveKind",
    "Reference",
    "Tuple",
    "TupleItem",
    "TypeDescriptor",
    "Untagged",
    "Variant",
    "VariantStyle",
    "descriptor_display_name",
    "BOOLEAN",
    "DATE",
    "DATE_TIME",
    "DOUBLE",
    "FLOAT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "INTEGER",
    "NUMBER",
    "STRING",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UNIT",
    "UUID",
    "integer",
    "number",
    "string",
]
