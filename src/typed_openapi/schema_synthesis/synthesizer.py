"""Type descriptor to schema node synthesis service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_openapi.type_modeling.type_descriptors import (
    AnyValue,
    Array,
    Composite,
    CompositeMode,
    EnumType,
    Field,
    Map,
    Named,
    Object,
    Optional,
    Primitive,
    Reference,
    Tuple,
    TupleItem,
    TypeDescriptor,
)

from .enum_tagging import synthesize_enum
from .schema_nodes import SchemaKind, SchemaNode

if TYPE_CHECKING:
    from typed_openapi.schema_registry.registry import SchemaRegistry

_COMPOSITE_KINDS = {
    CompositeMode.ALL_OF: SchemaKind.ALL_OF,
    CompositeMode.ANY_OF: SchemaKind.ANY_OF,
    CompositeMode.ONE_OF: SchemaKind.ONE_OF,
}


class UnsupportedShapeError(Exception):
    """Raised when a descriptor combination has no schema rule."""

    def __init__(self, path: tuple[str, ...], reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unsupported shape at {format_descriptor_path(path)}: {reason}")


def format_descriptor_path(path: tuple[str, ...]) -> str:
    return ".".join(path) if path else "<root>"


def synthesize(descriptor: TypeDescriptor, registry: SchemaRegistry) -> SchemaNode:
    """Lower one descriptor into a schema node, registering named sub-schemas."""
    return DescriptorSynthesizer(registry).synthesize(descriptor)


class DescriptorSynthesizer:
    """Recursive synthesizer bound to one registry and one descriptor path."""

    def __init__(self, registry: SchemaRegistry, path: tuple[str, ...] = ()) -> None:
        self._registry = registry
        self._path = path

    @property
    def path(self) -> tuple[str, ...]:
        return self._path

    def at(self, segment: str) -> DescriptorSynthesizer:
        return DescriptorSynthesizer(self._registry, (*self._path, segment))

    def fail(self, reason: str) -> UnsupportedShapeError:
        return UnsupportedShapeError(self._path, reason)

    def synthesize(self, descriptor: TypeDescriptor) -> SchemaNode:
        if isinstance(descriptor, Primitive):
            return SchemaNode.primitive(descriptor.kind.value, format=descriptor.format)
        if isinstance(descriptor, Array):
            return SchemaNode.array(self.at("[]").synthesize(descriptor.element))
        if isinstance(descriptor, Optional):
            return self.synthesize(descriptor.inner).with_overrides(nullable=True)
        if isinstance(descriptor, Map):
            return SchemaNode.object(
                additional_properties=self.at("{}").synthesize(descriptor.value)
            )
        if isinstance(descriptor, Tuple):
            return self.tuple_schema(descriptor.items)
        if isinstance(descriptor, AnyValue):
            return SchemaNode.any()
        if isinstance(descriptor, Composite):
            return self._composite_schema(descriptor)
        if isinstance(descriptor, Object):
            scope = self.at(descriptor.name) if descriptor.name and not self._path else self
            return scope.object_schema(descriptor.fields)
        if isinstance(descriptor, EnumType):
            scope = self.at(descriptor.name) if not self._path else self
            return synthesize_enum(descriptor, scope)
        if isinstance(descriptor, Named):
            return self._named_schema(descriptor)
        if isinstance(descriptor, Reference):
            return SchemaNode.ref(descriptor.name)
        raise self.fail(f"no schema rule for {type(descriptor).__name__}")

    def object_schema(
        self,
        fields: tuple[Field, ...],
        *,
        description: str | None = None,
        inline: bool = False,
    ) -> SchemaNode:
        """Build an object schema; `required` follows field declaration order.

        `inline` forces every field to embed named types instead of referencing them.
        """
        properties: dict[str, SchemaNode] = {}
        required: list[str] = []
        for field in fields:
            if field.skip:
                continue
            if field.name in properties:
                raise self.fail(f"field '{field.name}' is declared more than once")
            properties[field.name] = (
                self.at(field.name)
                .select(field.type, inline=inline or field.inline)
                .with_overrides(
                    description=field.description,
                    format=field.format,
                    example=field.example,
                    nullable=field.nullable,
                )
            )
            if not field.is_optional:
                required.append(field.name)
        return SchemaNode.object(properties, tuple(required), description=description)

    def tuple_schema(
        self,
        items: tuple[TupleItem, ...],
        *,
        description: str | None = None,
        inline: bool = False,
    ) -> SchemaNode:
        if not items:
            raise self.fail("tuples need at least one item")
        members = tuple(
            self.at(f"[{index}]")
            .select(item.type, inline=inline)
            .with_overrides(description=item.description)
            for index, item in enumerate(items)
        )
        return SchemaNode.array(SchemaNode.one_of(members), description=description)

    def select(self, descriptor: TypeDescriptor, *, inline: bool = False) -> SchemaNode:
        """Synthesize `descriptor`, embedding a named type when `inline` is set."""
        if inline:
            return self.inline_structure(descriptor)
        return self.synthesize(descriptor)

    def inline_structure(self, descriptor: TypeDescriptor) -> SchemaNode:
        """Return the concrete content of a descriptor instead of a reference to it.

        A `Reference` stays a `$ref`: its target may not be registered yet, and the
        result must not depend on the order in which declarations are synthesized.
        """
        if isinstance(descriptor, Named):
            return self._named_content(descriptor)
        if isinstance(descriptor, Optional):
            return self.inline_structure(descriptor.inner).with_overrides(nullable=True)
        if isinstance(descriptor, Reference):
            return SchemaNode.ref(descriptor.name)
        return self.synthesize(descriptor)

    def _composite_schema(self, descriptor: Composite) -> SchemaNode:
        if not descriptor.members:
            raise self.fail(f"{descriptor.mode.value} needs at least one member")
        members = tuple(
            self.at(f"{descriptor.mode.value}[{index}]").synthesize(member)
            for index, member in enumerate(descriptor.members)
        )
        return SchemaNode.composite(_COMPOSITE_KINDS[descriptor.mode], members)

    def _named_content(self, descriptor: Named) -> SchemaNode:
        scope = self.at(descriptor.name)
        inner = scope.inline_structure(descriptor.underlying)
        return inner.with_overrides(
            description=descriptor.description,
            format=descriptor.format_override,
            example=descriptor.example,
        )

    def _named_schema(self, descriptor: Named) -> SchemaNode:
        scope = self.at(descriptor.name)
        inner = scope.synthesize(descriptor.underlying).with_overrides(
            description=descriptor.description,
            format=descriptor.format_override,
            example=descriptor.example,
        )
        if descriptor.inline:
            return inner
        self._registry.register(descriptor.name, inner)
        return SchemaNode.ref(descriptor.name)
