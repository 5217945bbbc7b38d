"""Discriminated (de)serialization of engine objects.

Each rule, value transformation and comparison operation serializes to a
plain dict holding a ``typeId`` discriminator plus its own configuration.
Reading accepts ``typeId`` or ``TypeId``, resolves the id through the type
registry and lets the concrete class rebuild itself from the payload. Nested
objects follow the same convention recursively.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Any, Protocol, cast

from .exceptions import TypeResolutionError
from .registry import TypeRegistry, get_registry

TYPE_ID_KEYS = ("typeId", "TypeId")


class Serializable(Protocol):
    type_id: str

    def to_dict(self) -> dict[str, object]: ...


def get_type_id(payload: Mapping[str, object]) -> str:
    """Extract the discriminator from ``payload``.

    Raises:
        TypeResolutionError: If the discriminator is missing or blank.
    """
    for key in TYPE_ID_KEYS:
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise TypeResolutionError(f"'{key}' must be a non-empty string.")
        return value
    raise TypeResolutionError("Missing 'typeId' discriminator in payload.")


def to_dict(obj: Serializable) -> dict[str, object]:
    payload = obj.to_dict()
    payload["typeId"] = obj.type_id
    return payload


def from_dict[T](
    payload: Mapping[str, object],
    base: type[T],
    *,
    registry: TypeRegistry | None = None,
) -> T:
    """Rebuild an object from its serialized payload.

    Args:
        payload: Serialized object holding a ``typeId`` discriminator
        base: Class the resolved type must derive from
        registry: Registry to resolve the discriminator with (default: the
            process-wide registry)

    Raises:
        TypeResolutionError: If the discriminator is missing, unknown, or
            resolves to a class that does not derive from ``base``.
    """
    if not isinstance(payload, Mapping):
        raise TypeResolutionError(
            f"Expected an object payload, got {type(payload).__name__}"
        )
    type_id = get_type_id(payload)
    cls = (registry or get_registry()).resolve_type(type_id)
    if cls is None:
        raise TypeResolutionError(f"Unknown typeId '{type_id}'.")
    if not issubclass(cls, base):
        raise TypeResolutionError(
            f"Type '{type_id}' is not a {base.__name__}."
        )
    return cast("T", cls.from_dict(payload))  # type: ignore[attr-defined]


def optional_from_dict[T](payload: object, base: type[T]) -> T | None:
    if payload is None:
        return None
    return from_dict(cast("Mapping[str, object]", payload), base)


def get_field(payload: Mapping[str, object], name: str, default: Any = None) -> Any:
    """Read a camelCase field, also accepting its PascalCase spelling."""
    if name in payload:
        return payload[name]
    pascal = name[:1].upper() + name[1:]
    return payload.get(pascal, default)


def dumps(obj: Serializable, **kwargs: Any) -> str:
    return json.dumps(to_dict(obj), **kwargs)


def loads[T](text: str, base: type[T]) -> T:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise TypeResolutionError(f"Invalid JSON payload: {e}") from e
    return from_dict(payload, base)
