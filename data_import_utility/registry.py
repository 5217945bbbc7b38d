"""Type registry for rules, value transformations and comparison operations.

Every serializable engine type carries a stable ``type_id``. The registry maps
that id to the concrete class so serialized payloads can be turned back into
objects without hard-coded type switches, and so hosts can plug in their own
classes.

Registration is append-only: an id can be registered once per registry and is
never replaced or removed.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

from .constants import Messages
from .exceptions import TypeRegistrationError, TypeResolutionError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .comparisons.base import ComparisonOperation


class TypeRegistry:
    """Registry mapping type ids to classes."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()
        self._types: Mapping[str, type] = MappingProxyType({})

    def register_type(self, type_id: str, cls: type) -> None:
        """Register ``cls`` under ``type_id``.

        Raises:
            TypeRegistrationError: If the id is blank or already registered.
        """
        if not type_id or not type_id.strip():
            raise TypeRegistrationError("TypeId cannot be null or whitespace.")
        with self._lock:
            if type_id in self._types:
                raise TypeRegistrationError(
                    Messages.TYPE_ALREADY_REGISTERED.format(type_id=type_id)
                )
            # Readers hold the previous snapshot; writers swap in a new one.
            self._types = MappingProxyType({**self._types, type_id: cls})

    def register(self, cls: type) -> type:
        """Register a class under its own ``type_id`` attribute.

        Usable as a class decorator.
        """
        self.register_type(getattr(cls, "type_id", ""), cls)
        return cls

    def resolve_type(self, type_id: str) -> type | None:
        return self._types.get(type_id)

    def try_resolve_type(self, type_id: str) -> tuple[bool, type | None]:
        cls = self._types.get(type_id)
        return cls is not None, cls

    def resolve_comparison_operation(self, type_id: str) -> ComparisonOperation:
        """Instantiate the comparison operation registered under ``type_id``."""
        from .comparisons.base import ComparisonOperation

        cls = self.resolve_type(type_id)
        if cls is None:
            raise TypeResolutionError(f"Unknown comparison operation '{type_id}'.")
        if not issubclass(cls, ComparisonOperation):
            raise TypeResolutionError(
                f"Type '{type_id}' is not a comparison operation."
            )
        return cls()

    def get_all_registered_types(self) -> dict[str, type]:
        return dict(self._types)

    def get_all_type_ids(self) -> list[str]:
        return list(self._types)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)


_registry = TypeRegistry()


def get_registry() -> TypeRegistry:
    """Get the process-wide registry holding the built-in types."""
    return _registry


def register_type(type_id: str, cls: type) -> None:
    _registry.register_type(type_id, cls)


def resolve_type(type_id: str) -> type | None:
    return _registry.resolve_type(type_id)
