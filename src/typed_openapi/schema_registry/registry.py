"""Named schema registry with collision and dangling-reference detection."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from typed_openapi.schema_synthesis.schema_nodes import SchemaNode

_LOGGER = logging.getLogger("typed_openapi.registry")
_LOGGER.addHandler(logging.NullHandler())


class RegistryError(Exception):
    """Base error for schema registry failures."""


class SchemaCollisionError(RegistryError):
    """Raised when one name is registered with two different shapes."""

    def __init__(self, name: str, existing: SchemaNode, incoming: SchemaNode) -> None:
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Schema '{name}' is already registered with a different shape: "
            f"existing={_compact(existing)} incoming={_compact(incoming)}"
        )


class DanglingReferenceError(RegistryError):
    """Raised when a reference points at a schema that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Schema reference '{name}' has no registered definition.")


class SchemaNotFoundError(RegistryError):
    """Raised when resolving an unknown schema name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Schema '{name}' is not registered.")


class RegistryFrozenError(RegistryError):
    """Raised when registering after the registry has been frozen."""


class SchemaRegistry:
    """Owns the named, shareable schemas of one document build.

    Entries remember insertion order; `all()` returns them sorted by name.
    """

    def __init__(self) -> None:
        self._entries: dict[str, SchemaNode] = {}
        self._frozen = False

    def register(self, name: str, node: SchemaNode) -> None:
        """Store `node` under `name`; re-registering an equal node is a no-op."""
        existing = self._entries.get(name)
        if existing is not None:
            if existing == node:
                return
            raise SchemaCollisionError(name, existing, node)
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register schema '{name}' on a frozen registry.")
        if node.is_ref and node.ref_name == name:
            raise RegistryError(f"Schema '{name}' cannot be defined as a reference to itself.")
        self._entries[name] = node
        _LOGGER.debug("registered schema %s (%s)", name, node.kind.value)

    def resolve(self, name: str) -> SchemaNode:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise SchemaNotFoundError(name) from exc

    def all(self) -> list[tuple[str, SchemaNode]]:
        """Return every entry sorted lexicographically by name."""
        return sorted(self._entries.items(), key=lambda entry: entry[0])

    def names_in_insertion_order(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def verify_references(self, extra_nodes: Iterable[SchemaNode] = ()) -> None:
        """Raise DanglingReferenceError for the first unresolved reference name.

        Checks every registered schema plus any `extra_nodes` that live outside
        the registry (inline path and operation schemas).
        """
        referenced: set[str] = set()
        for node in self._entries.values():
            referenced.update(node.iter_references())
        for node in extra_nodes:
            referenced.update(node.iter_references())
        missing = sorted(name for name in referenced if name not in self._entries)
        if missing:
            _LOGGER.debug("dangling schema references: %s", ", ".join(missing))
            raise DanglingReferenceError(missing[0])

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _compact(node: SchemaNode) -> str:
    return json.dumps(node.to_openapi(), sort_keys=True, separators=(",", ":"))
