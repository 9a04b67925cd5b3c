"""Schema node entities and their OpenAPI rendering."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

SCHEMA_REFERENCE_PREFIX = "#/components/schemas/"


class SchemaKind(str, Enum):
    """Structural kind of a schema node."""

    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"
    ONE_OF = "oneOf"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    REF = "ref"
    ANY = "any"


_COMPOSITE_KINDS = (SchemaKind.ONE_OF, SchemaKind.ALL_OF, SchemaKind.ANY_OF)


@dataclass(frozen=True)
class SchemaNode:  # pylint: disable=too-many-instance-attributes
    """Normalized, immutable OpenAPI schema fragment.

    Object properties are kept sorted by name so that structural equality does
    not depend on declaration order; `required` keeps declaration order.
    """

    kind: SchemaKind
    type_name: str | None = None
    properties: tuple[tuple[str, SchemaNode], ...] = ()
    required: tuple[str, ...] = ()
    additional_properties: SchemaNode | None = None
    items: SchemaNode | None = None
    members: tuple[SchemaNode, ...] = ()
    ref_name: str | None = None
    description: str | None = None
    format: str | None = None
    example: str | None = None
    nullable: bool = False
    enum_values: tuple[str, ...] | None = None

    @staticmethod
    def primitive(
        type_name: str,
        *,
        format: str | None = None,  # pylint: disable=redefined-builtin
        enum_values: tuple[str, ...] | None = None,
        example: str | None = None,
        description: str | None = None,
    ) -> SchemaNode:
        return SchemaNode(
            kind=SchemaKind.PRIMITIVE,
            type_name=type_name,
            format=format,
            enum_values=enum_values,
            example=example,
            description=description,
        )

    @staticmethod
    def object(
        properties: Mapping[str, SchemaNode] | None = None,
        required: tuple[str, ...] = (),
        *,
        additional_properties: SchemaNode | None = None,
        description: str | None = None,
    ) -> SchemaNode:
        return SchemaNode(
            kind=SchemaKind.OBJECT,
            type_name="object",
            properties=tuple(sorted((properties or {}).items(), key=lambda entry: entry[0])),
            required=tuple(required),
            additional_properties=additional_properties,
            description=description,
        )

    @staticmethod
    def array(items: SchemaNode, *, description: str | None = None) -> SchemaNode:
        return SchemaNode(
            kind=SchemaKind.ARRAY, type_name="array", items=items, description=description
        )

    @staticmethod
    def composite(
        kind: SchemaKind, members: tuple[SchemaNode, ...], *, description: str | None = None
    ) -> SchemaNode:
        if kind not in _COMPOSITE_KINDS:
            raise ValueError(f"{kind.value} is not a composition kind.")
        return SchemaNode(kind=kind, members=tuple(members), description=description)

    @staticmethod
    def one_of(members: tuple[SchemaNode, ...], *, description: str | None = None) -> SchemaNode:
        return SchemaNode.composite(SchemaKind.ONE_OF, members, description=description)

    @staticmethod
    def ref(name: str) -> SchemaNode:
        return SchemaNode(kind=SchemaKind.REF, ref_name=name)

    @staticmethod
    def any() -> SchemaNode:
        return SchemaNode(kind=SchemaKind.ANY)

    @property
    def is_ref(self) -> bool:
        return self.kind is SchemaKind.REF

    @property
    def property_map(self) -> dict[str, SchemaNode]:
        return dict(self.properties)

    def with_overrides(
        self,
        *,
        description: str | None = None,
        format: str | None = None,  # pylint: disable=redefined-builtin
        example: str | None = None,
        nullable: bool = False,
    ) -> SchemaNode:
        """Return a copy carrying the given metadata.

        A reference is wrapped in a single-member `allOf` so the shared schema
        it points to stays untouched.
        """
        if description is None and format is None and example is None and not nullable:
            return self
        if self.is_ref:
            return SchemaNode(
                kind=SchemaKind.ALL_OF,
                members=(self,),
                description=description,
                format=format,
                example=example,
                nullable=nullable,
            )
        return replace(
            self,
            description=description if description is not None else self.description,
            format=format if format is not None else self.format,
            example=example if example is not None else self.example,
            nullable=self.nullable or nullable,
        )

    def iter_references(self) -> Iterator[str]:
        """Yield every schema name referenced from this node, depth first."""
        if self.ref_name is not None:
            yield self.ref_name
        for _, child in self.properties:
            yield from child.iter_references()
        if self.additional_properties is not None:
            yield from self.additional_properties.iter_references()
        if self.items is not None:
            yield from self.items.iter_references()
        for member in self.members:
            yield from member.iter_references()

    def to_openapi(self) -> dict[str, Any]:
        """Render the node as an ordered OpenAPI Schema Object mapping."""
        if self.is_ref:
            return {"$ref": f"{SCHEMA_REFERENCE_PREFIX}{self.ref_name}"}

        rendered: dict[str, Any] = {}
        if self.description is not None:
            rendered["description"] = self.description
        if self.nullable:
            rendered["nullable"] = True
        if self.type_name is not None:
            rendered["type"] = self.type_name
        if self.enum_values is not None:
            rendered["enum"] = list(self.enum_values)
        if self.format is not None:
            rendered["format"] = self.format
        if self.example is not None:
            rendered["example"] = self.example
        if self.items is not None:
            rendered["items"] = self.items.to_openapi()
        if self.properties:
            ordered = sorted(self.properties, key=lambda entry: entry[0])
            rendered["properties"] = {name: child.to_openapi() for name, child in ordered}
        if self.additional_properties is not None:
            rendered["additionalProperties"] = self.additional_properties.to_openapi()
        if self.required:
            rendered["required"] = list(self.required)
        if self.kind in _COMPOSITE_KINDS:
            rendered[self.kind.value] = [member.to_openapi() for member in self.members]
        return rendered
