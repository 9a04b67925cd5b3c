"""Document serialization and file output."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from typed_openapi.configuration.runtime_settings import OutputFormat
from typed_openapi.document_assembly.openapi_document import OpenApiDocument


class DocumentOutputError(Exception):
    """Raised when the document cannot be serialized or written."""


def render_document(document: OpenApiDocument, output_format: OutputFormat | str) -> str:
    """Serialize the document keeping its key order."""
    try:
        resolved_format = OutputFormat(output_format)
    except ValueError as exc:
        raise DocumentOutputError(f"Unsupported output format: {output_format}") from exc

    payload = document.to_dict()
    if resolved_format is OutputFormat.JSON:
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True, default_flow_style=False)


def write_document(
    document: OpenApiDocument,
    output_path: Path | str,
    output_format: OutputFormat | str = OutputFormat.YAML,
) -> Path:
    """Write the rendered document, creating parent directories as needed.

    Returns:
      The resolved destination path.
    """
    text = render_document(document, output_format)
    destination = Path(output_path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DocumentOutputError(f"Failed to write document to {destination}: {exc}") from exc
    return destination.resolve()
