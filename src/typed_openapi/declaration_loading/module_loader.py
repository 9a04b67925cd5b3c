"""API declaration loading service."""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from typed_openapi.document_assembly.api_declarations import ApiDeclaration


class DeclarationLoadError(Exception):
    """Raised when the configured API declaration cannot be loaded."""


def load_api_declaration(target: str, base_path: Path | str = ".") -> ApiDeclaration:
    """Import `target` and return the ApiDeclaration it names.

    `target` is `package.module:ATTR` or `relative/file.py:ATTR`; file paths
    resolve against `base_path`. `ATTR` may be an ApiDeclaration or a
    zero-argument callable returning one.
    """
    module_ref, separator, attribute = target.rpartition(":")
    if not separator or not module_ref or not attribute:
        raise DeclarationLoadError(
            f"Declaration target '{target}' must have the form 'module:attribute'."
        )

    module = _load_module(module_ref, Path(base_path))
    try:
        value: Any = getattr(module, attribute)
    except AttributeError as exc:
        raise DeclarationLoadError(
            f"Module '{module_ref}' has no attribute '{attribute}'."
        ) from exc

    if callable(value) and not isinstance(value, ApiDeclaration):
        try:
            value = value()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise DeclarationLoadError(
                f"Declaration factory '{target}' failed: {exc}"
            ) from exc

    if not isinstance(value, ApiDeclaration):
        raise DeclarationLoadError(
            f"Declaration target '{target}' resolved to {type(value).__name__}, "
            "expected ApiDeclaration."
        )
    return value


def _load_module(module_ref: str, base_path: Path) -> ModuleType:
    if module_ref.endswith(".py"):
        return _load_module_from_file(_resolve_path(base_path, module_ref))
    try:
        return importlib.import_module(module_ref)
    except ImportError as exc:
        raise DeclarationLoadError(f"Cannot import module '{module_ref}': {exc}") from exc


def _load_module_from_file(path: Path) -> ModuleType:
    if not path.exists():
        raise DeclarationLoadError(f"Declaration file not found: {path}")
    spec = importlib.util.spec_from_file_location(f"_typed_openapi_declaration_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise DeclarationLoadError(f"Cannot load declaration file: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        sys.modules.pop(spec.name, None)
        raise DeclarationLoadError(f"Failed to execute declaration file {path}: {exc}") from exc
    return module


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate
