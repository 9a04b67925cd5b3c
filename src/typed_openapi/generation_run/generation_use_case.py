"""Generation run use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from typed_openapi.configuration import ConfigurationError, load_configuration
from typed_openapi.declaration_loading import DeclarationLoadError, load_api_declaration
from typed_openapi.document_assembly import AssemblyError, OpenApiDocument, assemble_declaration
from typed_openapi.document_output import DocumentOutputError, write_document
from typed_openapi.schema_registry import RegistryError, SchemaRegistry
from typed_openapi.schema_synthesis import UnsupportedShapeError

from .generation_contracts import GenerationArtifacts, GenerationOutcome, GenerationRequest

_LOGGER = logging.getLogger("typed_openapi.generation")
_LOGGER.addHandler(logging.NullHandler())


class GenerationRunError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_generation_run(request: GenerationRequest) -> GenerationOutcome:
    """Load, assemble and write one OpenAPI document.

    With `dry_run` the document is fully assembled and validated but not written.
    """
    artifacts = _load_generation_artifacts(request.config_path)
    configuration = artifacts.configuration
    registry = SchemaRegistry()
    document = _assemble_document(artifacts, registry)

    output_path = (
        Path(request.output_path).resolve()
        if request.output_path
        else configuration.output.path
    )
    if request.dry_run:
        _LOGGER.info("dry run: skipping write of %s", output_path)
    else:
        try:
            output_path = write_document(document, output_path, configuration.output.format)
        except DocumentOutputError as exc:
            raise GenerationRunError(str(exc)) from exc
        _LOGGER.info("wrote %s", output_path)

    return GenerationOutcome(
        output_path=output_path,
        schema_count=len(registry),
        path_count=len(document.path_keys),
        dry_run=request.dry_run,
    )


def _load_generation_artifacts(config_path: str) -> GenerationArtifacts:
    try:
        configuration = load_configuration(config_path)
        declaration = load_api_declaration(
            configuration.declaration.target, configuration.declaration.base_path
        )
    except (ConfigurationError, DeclarationLoadError, OSError) as exc:
        raise GenerationRunError(str(exc)) from exc
    _LOGGER.debug("loaded declaration %s", configuration.declaration.target)
    return GenerationArtifacts(configuration=configuration, declaration=declaration)


def _assemble_document(
    artifacts: GenerationArtifacts, registry: SchemaRegistry
) -> OpenApiDocument:
    try:
        return assemble_declaration(
            artifacts.declaration,
            registry,
            options=artifacts.configuration.assembly.to_options(),
        )
    except (UnsupportedShapeError, RegistryError, AssemblyError) as exc:
        raise GenerationRunError(str(exc)) from exc
