"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from typed_openapi.document_assembly.openapi_document import (
    AssemblyOptions,
    SecurityReferencePolicy,
)


class OutputFormat(str, Enum):
    """Serialization formats for the rendered document."""

    YAML = "yaml"
    JSON = "json"


@dataclass(frozen=True)
class DeclarationSettings:
    """Where the API declaration is imported from."""

    target: str
    base_path: Path


@dataclass(frozen=True)
class OutputSettings:
    path: Path
    format: OutputFormat


@dataclass(frozen=True)
class AssemblySettings:
    """Assembly behavior knobs."""

    unknown_security_schemes: SecurityReferencePolicy
    default_response_description: str

    def to_options(self) -> AssemblyOptions:
        return AssemblyOptions(
            unknown_security_schemes=self.unknown_security_schemes,
            default_response_description=self.default_response_description,
        )


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    declaration: DeclarationSettings
    output: OutputSettings
    assembly: AssemblySettings
