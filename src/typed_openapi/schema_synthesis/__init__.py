"""Schema synthesis exports."""

from .enum_tagging import EnumPayloadSynthesizer, synthesize_enum
from .schema_nodes import SCHEMA_REFERENCE_PREFIX, SchemaKind, SchemaNode
from .synthesizer import (
    DescriptorSynthesizer,
    UnsupportedShapeError,
    format_descriptor_path,
    synthesize,
)

__all__ = [
    "SCHEMA_REFERENCE_PREFIX",
    "DescriptorSynthesizer",
    "EnumPayloadSynthesizer",
    "SchemaKind",
    "SchemaNode",
    "UnsupportedShapeError",
    "format_descriptor_path",
    "synthesize",
    "synthesize_enum",
]
