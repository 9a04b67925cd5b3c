"""Enum tagging strategy resolver.

Each tagging representation maps to one schema layout:

* unit-only enums collapse to a string enumeration regardless of tagging,
* external tagging becomes an object whose single free-form key holds the payload,
* internal tagging merges a one-value tag property into every object variant,
  or joins a tag object to a referenced payload through `allOf`,
* adjacent tagging becomes a fixed `{tag, content}` object,
* untagged enums become a plain `oneOf` of the payloads.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from typed_openapi.type_modeling.type_descriptors import (
    AdjacentTagging,
    EnumType,
    ExternalTagging,
    Field,
    InternalTagging,
    TupleItem,
    TypeDescriptor,
    Untagged,
    Variant,
    VariantStyle,
)

from .schema_nodes import SchemaKind, SchemaNode


class EnumPayloadSynthesizer(Protocol):
    """Callbacks the resolver needs from the descriptor synthesizer."""

    def at(self, segment: str) -> EnumPayloadSynthesizer: ...

    def fail(self, reason: str) -> Exception: ...

    def synthesize(self, descriptor: TypeDescriptor) -> SchemaNode: ...

    def object_schema(
        self,
        fields: tuple[Field, ...],
        *,
        description: str | None = None,
        inline: bool = False,
    ) -> SchemaNode: ...

    def tuple_schema(
        self,
        items: tuple[TupleItem, ...],
        *,
        description: str | None = None,
        inline: bool = False,
    ) -> SchemaNode: ...

    def select(self, descriptor: TypeDescriptor, *, inline: bool = False) -> SchemaNode: ...

    def inline_structure(self, descriptor: TypeDescriptor) -> SchemaNode: ...


def synthesize_enum(enum: EnumType, synthesizer: EnumPayloadSynthesizer) -> SchemaNode:
    """Return the schema for `enum` according to its tagging representation."""
    variants = enum.serialized_variants
    if not variants:
        raise synthesizer.fail(f"enum '{enum.name}' has no serializable variants")
    _reject_duplicate_names(variants, synthesizer)

    if not any(variant.has_payload for variant in variants):
        return _string_enumeration(enum, variants)

    representation = enum.representation
    if isinstance(representation, ExternalTagging):
        return _externally_tagged(enum, variants, synthesizer)
    if isinstance(representation, InternalTagging):
        return _internally_tagged(enum, variants, representation.tag_key, synthesizer)
    if isinstance(representation, AdjacentTagging):
        return _adjacently_tagged(enum, variants, representation, synthesizer)
    if isinstance(representation, Untagged):
        return _untagged(enum, variants, synthesizer)
    raise synthesizer.fail(f"unknown enum representation {type(representation).__name__}")


def _string_enumeration(enum: EnumType, variants: tuple[Variant, ...]) -> SchemaNode:
    names = tuple(variant.name for variant in variants)
    return SchemaNode.primitive(
        "string", enum_values=names, example=names[0], description=enum.description
    )


def _externally_tagged(
    enum: EnumType, variants: tuple[Variant, ...], synthesizer: EnumPayloadSynthesizer
) -> SchemaNode:
    branches = tuple(
        (
            SchemaNode.primitive(
                "string",
                enum_values=(variant.name,),
                example=variant.name,
                description=variant.description,
            )
            if not variant.has_payload
            else _variant_payload(variant, synthesizer)
        )
        for variant in variants
    )
    return SchemaNode.object(
        additional_properties=SchemaNode.one_of(branches, description=enum.description),
        description=enum.description,
    )


def _internally_tagged(
    enum: EnumType,
    variants: tuple[Variant, ...],
    tag_key: str,
    synthesizer: EnumPayloadSynthesizer,
) -> SchemaNode:
    branches = []
    for variant in variants:
        scope = synthesizer.at(variant.name)
        base = _internal_variant_object(variant, scope)
        tag_property = _tag_property(enum, (variant.name,))
        if base.kind is SchemaKind.ALL_OF:
            tag_object = SchemaNode.object({tag_key: tag_property}, (tag_key,))
            branches.append(
                replace(
                    base,
                    members=(*base.members, tag_object),
                    description=variant.description or base.description,
                )
            )
            continue
        properties = base.property_map
        if tag_key in properties:
            raise scope.fail(f"payload already defines the tag property '{tag_key}'")
        properties[tag_key] = tag_property
        branches.append(
            replace(
                base,
                properties=tuple(sorted(properties.items(), key=lambda entry: entry[0])),
                required=(*base.required, tag_key),
                description=variant.description or base.description,
            )
        )
    return SchemaNode.one_of(tuple(branches), description=enum.description)


def _internal_variant_object(variant: Variant, scope: EnumPayloadSynthesizer) -> SchemaNode:
    """Return the object the tag merges into, or an allOf the tag object joins."""
    if variant.style is VariantStyle.UNIT:
        return SchemaNode.object()
    if variant.style is VariantStyle.STRUCT:
        return scope.object_schema(variant.fields, inline=variant.inline)
    if variant.style is VariantStyle.NEWTYPE or len(variant.items) == 1:
        payload = scope.inline_structure(variant.items[0].type)
        if payload.is_ref:
            return SchemaNode.composite(SchemaKind.ALL_OF, (payload,))
        if payload.kind not in (SchemaKind.OBJECT, SchemaKind.ALL_OF):
            raise scope.fail("internally tagged variants need an object payload")
        return payload
    raise scope.fail("internally tagged enums cannot encode tuple variants")


def _adjacently_tagged(
    enum: EnumType,
    variants: tuple[Variant, ...],
    representation: AdjacentTagging,
    synthesizer: EnumPayloadSynthesizer,
) -> SchemaNode:
    tag_key = representation.tag_key
    content_key = representation.content_key
    if tag_key == content_key:
        raise synthesizer.fail("adjacent tagging needs distinct tag and content keys")

    names = tuple(variant.name for variant in variants)
    payloads = tuple(
        _variant_payload(variant, synthesizer) for variant in variants if variant.has_payload
    )
    return SchemaNode.object(
        {
            tag_key: _tag_property(enum, names),
            content_key: SchemaNode.one_of(payloads, description=enum.description),
        },
        (tag_key, content_key),
        description=enum.description,
    )


def _untagged(
    enum: EnumType, variants: tuple[Variant, ...], synthesizer: EnumPayloadSynthesizer
) -> SchemaNode:
    for variant in variants:
        if not variant.has_payload:
            raise synthesizer.at(variant.name).fail(
                "untagged enums cannot mix unit variants with payload variants"
            )
    branches = tuple(_variant_payload(variant, synthesizer) for variant in variants)
    return SchemaNode.one_of(branches, description=enum.description)


def _variant_payload(variant: Variant, synthesizer: EnumPayloadSynthesizer) -> SchemaNode:
    scope = synthesizer.at(variant.name)
    if variant.style is VariantStyle.STRUCT:
        return scope.object_schema(
            variant.fields, description=variant.description, inline=variant.inline
        )
    if not variant.items:
        raise scope.fail("payload variants need at least one item")
    if variant.style is VariantStyle.NEWTYPE or len(variant.items) == 1:
        item = variant.items[0]
        return scope.select(item.type, inline=variant.inline).with_overrides(
            description=variant.description or item.description
        )
    return scope.tuple_schema(
        variant.items, description=variant.description, inline=variant.inline
    )


def _tag_property(enum: EnumType, names: tuple[str, ...]) -> SchemaNode:
    return SchemaNode.primitive(
        "string",
        enum_values=names,
        example=names[0],
        description=f"{enum.name} type variant",
    )


def _reject_duplicate_names(
    variants: tuple[Variant, ...], synthesizer: EnumPayloadSynthesizer
) -> None:
    seen: set[str] = set()
    for variant in variants:
        if variant.name in seen:
            raise synthesizer.fail(f"variant name '{variant.name}' is used more than once")
        seen.add(variant.name)
