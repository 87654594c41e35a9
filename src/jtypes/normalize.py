"""Infer the structural type of a JSON value and register its shapes.

Primitives map to their tag and are never registered. Objects are registered
under the hash of their sorted key -> type mapping, so two objects with the
same shape share one alias. Arrays take the type of their first element only:
`[1, "a"]` is `number[]`. Empty arrays have nothing to inspect, so each one gets
its own `unknown[]` alias that can be fixed by hand later.
"""

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Any

from jtypes.cache import StructuralType, TypeCache, TypeDeclaration

UNKNOWN_ARRAY = "unknown[]"

IDENTIFIER_RE = re.compile(r"^[$_a-z][$_a-z0-9]*$", re.IGNORECASE | re.ASCII)
ALIAS_RE = re.compile(r"T\d+")


class UnsupportedValueKindError(TypeError):
    """The value is not something a JSON parser would produce."""

    def __init__(self, value: Any, context: str) -> None:
        super().__init__(
            f"{context}: unsupported value of type {type(value).__name__!r}"
        )
        self.value = value
        self.context = context


@dataclass(frozen=True)
class Normalized:
    alias: str
    cache: TypeCache


def is_identifier(key: str) -> bool:
    """Whether `key` can be written as a bare property name."""
    return IDENTIFIER_RE.fullmatch(key) is not None


def type_alias(id: int) -> str:
    return f"T{id}"


def is_alias(ref: str) -> bool:
    """Whether `ref` names a declaration, as opposed to a primitive or array type."""
    return ALIAS_RE.fullmatch(ref) is not None


def origin_label(file: str | None = None) -> str:
    return f"{file}:root" if file else "root"


def hash_type(type_: StructuralType) -> str:
    encoded = json.dumps(type_, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(encoded.encode()).hexdigest()


def register(
    cache: TypeCache, type_: StructuralType, context: str, unique: bool = False
) -> str:
    """Return the alias for `type_`, creating a declaration if it's new.

    If `unique`, the lookup is skipped and the type always gets a fresh alias.
    """
    key = hash_type(type_)
    if not unique and (existing := cache.lookup(key)) is not None:
        existing.contexts.append(context)
        return type_alias(existing.id)

    id = cache.next_id()
    if unique:
        key = f"{key}#{id}"

    cache.insert(key, TypeDeclaration(id=id, contexts=[context], type=type_))
    return type_alias(id)


def _property_context(context: str, key: str) -> str:
    if is_identifier(key):
        return f"{context}.{key}"
    return f"{context}[{json.dumps(key)}]"


def _normalize(cache: TypeCache, value: Any, context: str) -> str:
    match value:
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case None:
            return "null"
        case list() if value:
            return _normalize(cache, value[0], f"{context}[0]") + "[]"
        case list():
            return register(cache, UNKNOWN_ARRAY, context, unique=True)
        case dict():
            if bad_keys := [k for k in value if not isinstance(k, str)]:
                raise UnsupportedValueKindError(bad_keys[0], context)

            properties: dict[str, str] = {}
            for key in sorted(value):
                properties[key] = _normalize(
                    cache, value[key], _property_context(context, key)
                )
            return register(cache, properties, context)
        case _:
            raise UnsupportedValueKindError(value, context)


def normalize(cache: TypeCache, value: Any, origin: str = "root") -> Normalized:
    """Infer the type of `value`, registering new shapes in `cache`.

    The returned alias is a primitive tag, an array type string or `T<id>`.
    `cache` is updated in place and also returned.
    """
    return Normalized(alias=_normalize(cache, value, origin), cache=cache)
