"""Ready-made descriptors for common scalar types."""

from __future__ import annotations

from .type_descriptors import Named, Optional, Primitive, PrimitiveKind

STRING = Primitive(PrimitiveKind.STRING)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
INTEGER = Primitive(PrimitiveKind.INTEGER)
NUMBER = Primitive(PrimitiveKind.NUMBER)

INT8 = Primitive(PrimitiveKind.INTEGER, "int8")
UINT8 = Primitive(PrimitiveKind.INTEGER, "uint8")
INT16 = Primitive(PrimitiveKind.INTEGER, "int16")
UINT16 = Primitive(PrimitiveKind.INTEGER, "uint16")
INT32 = Primitive(PrimitiveKind.INTEGER, "int32")
UINT32 = Primitive(PrimitiveKind.INTEGER, "uint32")
INT64 = Primitive(PrimitiveKind.INTEGER, "int64")
UINT64 = Primitive(PrimitiveKind.INTEGER, "uint64")

FLOAT = Primitive(PrimitiveKind.NUMBER, "float")
DOUBLE = Primitive(PrimitiveKind.NUMBER, "double")

DATE = Primitive(PrimitiveKind.STRING, "date")
DATE_TIME = Primitive(PrimitiveKind.STRING, "date-time")

UUID = Named(
    name="Uuid",
    underlying=STRING,
    description="UUID ver. 4 [rfc](https://tools.ietf.org/html/rfc4122)",
    format_override="uuid",
    example="00000000-0000-0000-0000-000000000000",
    inline=True,
)

UNIT = Named(
    name="Unit",
    underlying=Optional(Primitive(PrimitiveKind.STRING, "null")),
    description="Always `null`",
    inline=True,
)


def integer(format_name: str | None = None) -> Primitive:
    """Return an integer descriptor with an arbitrary format such as `timestamp`."""
    return Primitive(PrimitiveKind.INTEGER, format_name)


def number(format_name: str | None = None) -> Primitive:
    return Primitive(PrimitiveKind.NUMBER, format_name)


def string(format_name: str | None = None) -> Primitive:
    return Primitive(PrimitiveKind.STRING, format_name)
