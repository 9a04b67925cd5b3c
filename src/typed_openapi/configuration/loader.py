"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from typed_openapi.document_assembly.openapi_document import SecurityReferencePolicy

from .runtime_settings import (
    AssemblySettings,
    Configuration,
    DeclarationSettings,
    OutputFormat,
    OutputSettings,
)

_EnumT = TypeVar("_EnumT", bound=Enum)

_DEFAULT_OUTPUT_NAMES = {OutputFormat.YAML: "openapi.yaml", OutputFormat.JSON: "openapi.json"}


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    declaration = _parse_declaration_section(parsed.get("declaration"), base_path)
    output = _parse_output_section(parsed.get("output"), base_path)
    assembly = _parse_assembly_section(parsed.get("assembly"))

    return Configuration(
        path=path,
        declaration=declaration,
        output=output,
        assembly=assembly,
    )


def _parse_declaration_section(value: Any, base_path: Path) -> DeclarationSettings:
    section = _require_mapping(value, "declaration")
    target = _require_non_empty_string(section.get("target"), "declaration.target")
    if ":" not in target:
        raise ConfigurationError(
            "declaration.target must have the form 'module:attribute' or 'file.py:attribute'."
        )
    return DeclarationSettings(target=target, base_path=base_path)


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    output_format = _parse_enum(
        section.get("format", OutputFormat.YAML.value), OutputFormat, "output.format"
    )
    raw_path = _optional_string(section.get("path"), "output.path")
    path = _resolve_path(base_path, raw_path or _DEFAULT_OUTPUT_NAMES[output_format])
    return OutputSettings(path=path, format=output_format)


def _parse_assembly_section(value: Any) -> AssemblySettings:
    section = _optional_mapping(value, "assembly")
    policy = _parse_enum(
        section.get("unknown_security_schemes", SecurityReferencePolicy.PASS_THROUGH.value),
        SecurityReferencePolicy,
        "assembly.unknown_security_schemes",
    )
    description = _require_non_empty_string(
        section.get("default_response_description", "OK"),
        "assembly.default_response_description",
    )
    return AssemblySettings(
        unknown_security_schemes=policy,
        default_response_description=description,
    )


def _parse_enum(value: Any, enum_type: type[_EnumT], field_name: str) -> _EnumT:
    raw = _require_non_empty_string(value, field_name).lower()
    try:
        return enum_type(raw)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
