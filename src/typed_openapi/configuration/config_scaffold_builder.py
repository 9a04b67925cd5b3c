"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "typed-openapi.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration template for typed-openapi.
# Replace every <REQUIRED> placeholder before running render.
# Remove <OPTIONAL> entries you do not need; their defaults are shown in comments.

declaration:
  # Importable module or a .py file relative to this config, then ':' and the attribute.
  # The attribute is an ApiDeclaration or a zero-argument callable returning one.
  target: "<REQUIRED>"

output:
  # Relative paths resolve against this config file (default: openapi.yaml).
  # path: "<OPTIONAL>"
  # yaml or json (default: yaml).
  # format: "<OPTIONAL>"

assembly:
  # pass-through or error (default: pass-through).
  # unknown_security_schemes: "<OPTIONAL>"
  # Used for responses declared without a description (default: OK).
  # default_response_description: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
