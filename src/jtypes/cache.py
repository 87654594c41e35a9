"""Content-addressed store of the type declarations found during a run."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

StructuralType: TypeAlias = str | dict[str, str]


class DuplicateRegistrationError(KeyError):
    """A key was inserted twice without going through the reuse path."""


@dataclass
class TypeDeclaration:
    id: int
    contexts: list[str]
    type: StructuralType


class TypeCache:
    """Maps structural hashes to declarations and hands out dense ids.

    One instance per generation run. Not thread-safe: the lookup/insert pair in
    `jtypes.normalize.register` must be serialized by the caller.
    """

    def __init__(self) -> None:
        self._entries: dict[str, TypeDeclaration] = {}
        self._next_id = 0

    def next_id(self) -> int:
        id = self._next_id
        self._next_id += 1
        return id

    def lookup(self, key: str) -> TypeDeclaration | None:
        return self._entries.get(key)

    def insert(self, key: str, declaration: TypeDeclaration) -> None:
        if key in self._entries:
            raise DuplicateRegistrationError(key)
        self._entries[key] = declaration

    def declarations(self) -> list[TypeDeclaration]:
        """All declarations in first-seen (id) order."""
        return sorted(self._entries.values(), key=lambda d: d.id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


def create_cache() -> TypeCache:
    return TypeCache()
