"""Assembled document entities and assembly options."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

OPENAPI_VERSION = "3.0.3"
JSON_MEDIA_TYPE = "application/json"


class SecurityReferencePolicy(str, Enum):
    """What to do with operation security names that no scheme defines."""

    PASS_THROUGH = "pass-through"
    ERROR = "error"


@dataclass(frozen=True)
class AssemblyOptions:
    unknown_security_schemes: SecurityReferencePolicy = SecurityReferencePolicy.PASS_THROUGH
    default_response_description: str = "OK"


@dataclass(frozen=True)
class OpenApiDocument:
    """In-memory OpenAPI 3.0 document with deterministic key order."""

    content: Mapping[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return a deep, mutable copy suitable for external serializers."""
        return copy.deepcopy(dict(self.content))

    @property
    def path_keys(self) -> tuple[str, ...]:
        return tuple(self.content.get("paths", {}))

    @property
    def schema_names(self) -> tuple[str, ...]:
        return tuple(self.content.get("components", {}).get("schemas", {}))
