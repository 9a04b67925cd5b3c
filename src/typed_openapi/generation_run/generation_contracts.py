"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from typed_openapi.configuration.runtime_settings import Configuration
from typed_openapi.document_assembly.api_declarations import ApiDeclaration


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for generating one document."""

    config_path: str
    output_path: str | None = None
    dry_run: bool = False


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation."""

    output_path: Path
    schema_count: int
    path_count: int
    dry_run: bool


@dataclass(frozen=True)
class GenerationArtifacts:
    """Loaded inputs required during a generation run."""

    configuration: Configuration
    declaration: ApiDeclaration
