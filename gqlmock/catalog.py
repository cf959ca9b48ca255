# File: gqlmock/catalog.py
"""
gqlmock - Type Catalog
=======================
Single pass over the schema definitions that records every enum, union and
scalar declaration by name. The first declaration of a name wins.

The catalog also resolves a terminal type name into a closed variant so the
value generator never has to infer "object type" from a failed lookup:

    BuiltinScalar   — String, Int, Float, Boolean, ID
    CatalogEntry    — enum / union / custom scalar
    ObjectReference — anything else (an object or input type)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from gqlmock.models import CatalogEntry, DefinitionKind, TypeDefinition, TypeKind

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.catalog")

BUILTIN_SCALARS: FrozenSet[str] = frozenset({"String", "Int", "Float", "Boolean", "ID"})

_CATALOG_KINDS: Dict[DefinitionKind, TypeKind] = {
    DefinitionKind.ENUM: TypeKind.ENUM,
    DefinitionKind.UNION: TypeKind.UNION,
    DefinitionKind.SCALAR: TypeKind.SCALAR,
}


# ---------------------------------------------------------------------------
# Resolution variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BuiltinScalar:
    """One of the five scalars every GraphQL schema has."""

    name: str


@dataclass(frozen=True, slots=True)
class ObjectReference:
    """A name that is neither builtin nor catalogued: another factory type."""

    name: str


ResolvedType = Union[BuiltinScalar, CatalogEntry, ObjectReference]


# ---------------------------------------------------------------------------
# Catalog construction
# ---------------------------------------------------------------------------


def build_catalog(definitions: Iterable[TypeDefinition]) -> List[CatalogEntry]:
    """
    Record every enum, union and scalar definition, first occurrence wins.

    Enum values and union members keep their declaration order: the first
    of each is the representative mock value later on.

    Complexity: O(D) where D = number of definitions.
    """
    entries: List[CatalogEntry] = []
    seen: Dict[str, CatalogEntry] = {}

    for definition in definitions:
        kind: Optional[TypeKind] = _CATALOG_KINDS.get(definition.kind)
        if kind is None:
            continue
        if definition.name in seen:
            logger.debug(
                "Duplicate %s declaration '%s' ignored (already recorded as %s).",
                kind.value,
                definition.name,
                seen[definition.name].kind.value,
            )
            continue

        entry: CatalogEntry = CatalogEntry(
            name=definition.name,
            kind=kind,
            values=list(definition.values) if kind is TypeKind.ENUM else [],
            member_types=list(definition.member_types) if kind is TypeKind.UNION else [],
        )
        seen[entry.name] = entry
        entries.append(entry)

    logger.debug("Catalog built with %d entries.", len(entries))
    return entries


class TypeCatalog:
    """
    Read-only index over catalog entries with O(1) lookup by name.

    Usage::

        catalog = TypeCatalog.from_definitions(schema.definitions)
        catalog.resolve("Status")   # CatalogEntry(kind=enum)
        catalog.resolve("User")     # ObjectReference("User")
    """

    __slots__ = ("_entries", "_by_name")

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._entries: List[CatalogEntry] = []
        self._by_name: Dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.name not in self._by_name:
                self._by_name[entry.name] = entry
                self._entries.append(entry)

    @classmethod
    def from_definitions(cls, definitions: Iterable[TypeDefinition]) -> "TypeCatalog":
        return cls(build_catalog(definitions))

    def get(self, name: str) -> Optional[CatalogEntry]:
        return self._by_name.get(name)

    def resolve(self, name: str) -> ResolvedType:
        """Classify a terminal type name."""
        if name in BUILTIN_SCALARS:
            return BuiltinScalar(name)
        entry: Optional[CatalogEntry] = self._by_name.get(name)
        if entry is not None:
            return entry
        return ObjectReference(name)

    @property
    def entries(self) -> List[CatalogEntry]:
        return list(self._entries)

    @property
    def import_names(self) -> List[str]:
        """Enum and union names in catalog order; scalars are never imported."""
        return [e.name for e in self._entries if e.kind is not TypeKind.SCALAR]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<TypeCatalog {len(self._entries)} entries>"


__all__: List[str] = [
    "BUILTIN_SCALARS",
    "BuiltinScalar",
    "ObjectReference",
    "ResolvedType",
    "build_catalog",
    "TypeCatalog",
]
