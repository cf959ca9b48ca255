# File: gqlmock/values.py
"""
gqlmock - Deterministic Value Generator
========================================
Turns a field's declared ``TypeRef`` into a Python expression producing a
realistic placeholder value.

Algorithm (recursive descent over the type reference)::

    NonNull(inner) → value of inner (the generator never emits None)
    List(inner)    → [value of inner]
    Named(name)    → reseed Faker from hash(enclosing type + field name),
                     then dispatch on what the catalog says ``name`` is.

Determinism contract: the pseudo-random stream depends only on the
(enclosing type, field name) pair. Field order, unrelated schema changes
and earlier draws never leak into a field's value.

Nested object types are handed to ``CircularRelationshipGuard``, which
either emits an eager factory call or a call guarded by the visited set
threaded through the generated factories.
"""

from __future__ import annotations

import json
import keyword
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from faker import Faker

from gqlmock.catalog import BuiltinScalar, ObjectReference, TypeCatalog
from gqlmock.models import (
    CatalogEntry,
    GenerationConfig,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    ScalarMapping,
    TypeKind,
)
from gqlmock.utils import convert_name, mock_name, update_text_case, with_types_prefix, wrap_in_quotes

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.values")

# Name of the visited-set parameter in generated factories.
VISITED_SET_NAME: str = "relationships_to_omit"

# Upper bound for synthesised timestamps (2033-05-18). Fixed so that the
# ``Date`` default does not drift with the current time.
_MAX_UNIX_TIME: int = 2_000_000_000

# Faker attributes that are not data providers.
_RESERVED_GENERATORS: FrozenSet[str] = frozenset(
    {"seed", "seed_instance", "seed_locale", "random", "locales", "weights", "factories"}
)

TypeRefNode = Union[NamedTypeRef, NonNullTypeRef, ListTypeRef]


class UnknownTypeKindError(ValueError):
    """A catalog entry has a kind other than enum, union or scalar."""

    def __init__(self, type_name: str, kind: Any) -> None:
        self.type_name: str = type_name
        self.kind: Any = kind
        super().__init__(
            f"Unknown type kind for '{type_name}': {getattr(kind, 'value', kind)}"
        )


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


def hashed_string(value: str) -> int:
    """
    Deterministic signed 32-bit string hash (``h = h * 31 + unit``).

    Iterates over UTF-16 code units so the seed for a given name matches
    the classic JavaScript/Java string hash.

        >>> hashed_string("")
        0
        >>> hashed_string("hello")
        99162322
    """
    hash_: int = 0
    data: bytes = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit: int = data[i] | (data[i + 1] << 8)
        hash_ = (hash_ * 31 + unit) & 0xFFFFFFFF
    return hash_ - 0x100000000 if hash_ & 0x80000000 else hash_


# ---------------------------------------------------------------------------
# Literal rendering
# ---------------------------------------------------------------------------


def render_literal(value: Any) -> str:
    """
    Render a generated Python value as source text.

    Strings are quoted, numbers and booleans are emitted raw, date/time
    values become ISO strings, and structured values are normalised through
    JSON before being rendered as a Python literal.
    """
    if isinstance(value, str):
        return wrap_in_quotes(value)
    if value is None or isinstance(value, (bool, int, float)):
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return wrap_in_quotes(value.isoformat())
    return repr(json.loads(json.dumps(value, default=str)))


def iso_timestamp(fake: Faker) -> str:
    """An ISO-8601 UTC timestamp with millisecond precision."""
    moment: datetime = datetime.fromtimestamp(
        fake.random_int(min=0, max=_MAX_UNIX_TIME), tz=timezone.utc
    ).replace(microsecond=fake.random_int(min=0, max=999) * 1000)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _builtin_value(name: str, fake: Faker) -> str:
    if name == "String":
        return wrap_in_quotes(fake.word())
    if name == "Int":
        return str(fake.random_int(min=0, max=9999))
    if name == "Float":
        return repr(round(fake.random.uniform(0, 10), 2))
    if name == "Boolean":
        return repr(fake.pybool())
    if name == "ID":
        return wrap_in_quotes(fake.uuid4())
    raise ValueError(f"'{name}' is not a builtin scalar.")


def _normalize_arguments(arguments: Any) -> Tuple[List[Any], Dict[str, Any]]:
    if arguments is None:
        return [], {}
    if isinstance(arguments, (list, tuple)):
        return list(arguments), {}
    if isinstance(arguments, dict):
        return [], dict(arguments)
    return [arguments], {}


# ---------------------------------------------------------------------------
# Circular relationship guard
# ---------------------------------------------------------------------------


class CircularRelationshipGuard:
    """
    Renders the expression for a field that references another factory type.

    Non-terminating mode emits ``aUser()``. Terminating mode emits a check
    against the visited set that short-circuits to an empty placeholder
    once the referenced type has already been entered in this expansion.
    """

    __slots__ = ("_config",)

    def __init__(self, config: GenerationConfig) -> None:
        self._config: GenerationConfig = config

    @property
    def terminating(self) -> bool:
        return self._config.terminate_circular_relationships

    def factory_name(self, type_name: str) -> str:
        cased: str = convert_name(self._config.typenames, type_name)
        return mock_name(type_name, cased, self._config.prefix, self._config.types_prefix)

    def render(self, reference: ObjectReference) -> str:
        factory: str = self.factory_name(reference.name)
        if not self.terminating:
            return f"{factory}()"

        annotation: str = with_types_prefix(
            convert_name(self._config.typenames, reference.name),
            self._config.types_prefix,
        )
        return (
            f'(cast("{annotation}", {{}}) '
            f'if "{reference.name}" in {VISITED_SET_NAME} '
            f"else {factory}({{}}, {VISITED_SET_NAME}))"
        )


# ---------------------------------------------------------------------------
# Value generator
# ---------------------------------------------------------------------------


class MockValueGenerator:
    """
    Produces literal expressions for fields.

    One Faker instance is owned per generator and reseeded at the start of
    every terminal resolution, then passed explicitly to the helpers that
    draw from it.
    """

    def __init__(
        self,
        catalog: TypeCatalog,
        config: Optional[GenerationConfig] = None,
        guard: Optional[CircularRelationshipGuard] = None,
    ) -> None:
        self._catalog: TypeCatalog = catalog
        self._config: GenerationConfig = config or GenerationConfig()
        self._guard: CircularRelationshipGuard = guard or CircularRelationshipGuard(self._config)
        try:
            self._faker: Faker = Faker(self._config.locale)
        except AttributeError as exc:
            raise ValueError(f"Unsupported Faker locale: {self._config.locale!r}") from exc

    @property
    def guard(self) -> CircularRelationshipGuard:
        return self._guard

    def seeded_faker(self, type_name: str, field_name: str) -> Faker:
        self._faker.seed_instance(hashed_string(type_name + field_name))
        return self._faker

    def generate_value(self, type_name: str, field_name: str, type_ref: TypeRefNode) -> str:
        """Expression for *field_name* of *type_name* declared as *type_ref*."""
        if isinstance(type_ref, NonNullTypeRef):
            return self.generate_value(type_name, field_name, type_ref.of_type)
        if isinstance(type_ref, ListTypeRef):
            return f"[{self.generate_value(type_name, field_name, type_ref.of_type)}]"
        return self._named_value(type_name, field_name, type_ref)

    def _named_value(self, type_name: str, field_name: str, ref: NamedTypeRef) -> str:
        fake: Faker = self.seeded_faker(type_name, field_name)
        resolved = self._catalog.resolve(ref.name)

        if isinstance(resolved, BuiltinScalar):
            return _builtin_value(resolved.name, fake)
        if isinstance(resolved, ObjectReference):
            return self._guard.render(resolved)
        return self._catalog_value(type_name, field_name, resolved, fake)

    def _catalog_value(
        self,
        type_name: str,
        field_name: str,
        entry: CatalogEntry,
        fake: Faker,
    ) -> str:
        if entry.kind == TypeKind.ENUM:
            return self._enum_value(entry)
        if entry.kind == TypeKind.UNION:
            if not entry.member_types:
                logger.warning("Union '%s' has no members; emitting None.", entry.name)
                return "None"
            return self._named_value(type_name, field_name, entry.member_types[0])
        if entry.kind == TypeKind.SCALAR:
            return self._scalar_value(entry.name, fake)
        raise UnknownTypeKindError(entry.name, entry.kind)

    def _enum_value(self, entry: CatalogEntry) -> str:
        enum_name: str = with_types_prefix(
            convert_name(self._config.typenames, entry.name),
            self._config.types_prefix,
        )
        if not entry.values:
            logger.warning("Enum '%s' declares no values.", entry.name)
            return enum_name
        member: str = update_text_case(entry.values[0], self._config.enum_values)
        if keyword.iskeyword(member) or not member.isidentifier():
            return f"getattr({enum_name}, {wrap_in_quotes(member)})"
        return f"{enum_name}.{member}"

    def _scalar_value(self, scalar_name: str, fake: Faker) -> str:
        mapping: Optional[ScalarMapping] = self._config.scalars.get(scalar_name)

        if mapping is None or not mapping.generator:
            if scalar_name == "Date":
                return wrap_in_quotes(iso_timestamp(fake))
            return wrap_in_quotes(fake.word())

        provider: Any = None
        if mapping.generator not in _RESERVED_GENERATORS and not mapping.generator.startswith("_"):
            provider = getattr(fake, mapping.generator, None)
        if provider is None:
            # Not a Faker provider: assume a name the generated module defines.
            logger.debug(
                "Scalar '%s' maps to non-Faker generator '%s'; emitting it raw.",
                scalar_name,
                mapping.generator,
            )
            return mapping.generator

        args, kwargs = _normalize_arguments(mapping.arguments)
        try:
            value: Any = provider(*args, **kwargs) if callable(provider) else provider
        except Exception as exc:
            raise ValueError(
                f"Generator '{mapping.generator}' failed for scalar '{scalar_name}': {exc}"
            ) from exc
        return render_literal(value)


def generate_value(
    type_name: str,
    field_name: str,
    type_ref: TypeRefNode,
    catalog: TypeCatalog,
    config: Optional[GenerationConfig] = None,
) -> str:
    """One-shot form of :meth:`MockValueGenerator.generate_value`."""
    return MockValueGenerator(catalog, config).generate_value(type_name, field_name, type_ref)


__all__: List[str] = [
    "VISITED_SET_NAME",
    "UnknownTypeKindError",
    "hashed_string",
    "render_literal",
    "iso_timestamp",
    "CircularRelationshipGuard",
    "MockValueGenerator",
    "generate_value",
]
