# File: gqlmock/models.py
"""
gqlmock - Core Data Models
===========================
Pydantic V2 models describing the parsed GraphQL schema and the mock
generation configuration. These models are the single source of truth for
the whole pipeline: Schema Parsing → Catalog → Value Generation → Emission.

Type references are a closed, discriminated variant (``named`` /
``non_null`` / ``list``) so the value generator can walk them with plain
recursive descent.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.models")

# Root operation types never get a factory.
ROOT_OPERATION_TYPES: FrozenSet[str] = frozenset({"Query", "Mutation"})

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TypeKind(str, Enum):
    """Kinds of named types recorded in the type catalog."""

    ENUM = "enum"
    UNION = "union"
    SCALAR = "scalar"


class DefinitionKind(str, Enum):
    """Kinds of schema definitions the parser keeps."""

    OBJECT = "object"
    INPUT = "input"
    ENUM = "enum"
    UNION = "union"
    SCALAR = "scalar"


class NamingConvention(str, Enum):
    """Casing applied to type names and enum members in generated code."""

    UPPER_CASE = "upper-case#upperCase"
    PASCAL_CASE = "pascal-case#pascalCase"
    KEEP = "keep"

    @classmethod
    def parse(cls, value: Any) -> "NamingConvention":
        """Map any configured value to a convention, defaulting to PascalCase."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        if value is not None:
            logger.warning(
                "Unknown naming convention %r; falling back to %s.",
                value,
                cls.PASCAL_CASE.value,
            )
        return cls.PASCAL_CASE


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    frozen=False,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


class NamedTypeRef(BaseModel):
    """Terminal reference to a named type, e.g. ``String`` or ``User``."""

    model_config = _SHARED_CONFIG

    kind: Literal["named"] = "named"
    name: str = Field(..., min_length=1, description="Referenced type name.")

    def __str__(self) -> str:
        return self.name


class NonNullTypeRef(BaseModel):
    """Required wrapper (``T!``)."""

    model_config = _SHARED_CONFIG

    kind: Literal["non_null"] = "non_null"
    of_type: TypeRef = Field(..., description="Wrapped reference.")

    @model_validator(mode="after")
    def _no_nested_non_null(self) -> "NonNullTypeRef":
        if isinstance(self.of_type, NonNullTypeRef):
            raise ValueError("A non-null reference cannot wrap another non-null reference.")
        return self

    def __str__(self) -> str:
        return f"{self.of_type}!"


class ListTypeRef(BaseModel):
    """List wrapper (``[T]``)."""

    model_config = _SHARED_CONFIG

    kind: Literal["list"] = "list"
    of_type: TypeRef = Field(..., description="Wrapped reference.")

    def __str__(self) -> str:
        return f"[{self.of_type}]"


TypeRef = Annotated[
    Union[NamedTypeRef, NonNullTypeRef, ListTypeRef],
    Field(discriminator="kind"),
]

NonNullTypeRef.model_rebuild()
ListTypeRef.model_rebuild()


def named_type(ref: Union[NamedTypeRef, NonNullTypeRef, ListTypeRef]) -> NamedTypeRef:
    """Strip every wrapper and return the innermost named reference."""
    while not isinstance(ref, NamedTypeRef):
        ref = ref.of_type
    return ref


# ---------------------------------------------------------------------------
# Catalog & schema definitions
# ---------------------------------------------------------------------------


class CatalogEntry(BaseModel):
    """An enum, union or scalar declaration recorded by the type catalog."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Declared type name.")
    kind: TypeKind = Field(..., description="Declaration kind.")
    values: List[str] = Field(
        default_factory=list, description="Ordered enum values (enums only)."
    )
    member_types: List[NamedTypeRef] = Field(
        default_factory=list, description="Ordered union members (unions only)."
    )

    def __repr__(self) -> str:
        return f"<CatalogEntry {getattr(self.kind, 'value', self.kind)} {self.name}>"


class FieldSpec(BaseModel):
    """A single field of an object or input type."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1, description="Field name.")
    type_ref: TypeRef = Field(..., alias="type", description="Declared type.")
    description: Optional[str] = Field(default=None, description="Field docs.")

    def __repr__(self) -> str:
        return f"<Field {self.name}: {self.type_ref}>"


class TypeDefinition(BaseModel):
    """
    One named definition from the schema.

    Object and input definitions carry ``fields``; enums carry ``values``;
    unions carry ``member_types``; scalars carry only their name.
    """

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1, description="Type name.")
    kind: DefinitionKind = Field(..., description="Definition kind.")
    fields: List[FieldSpec] = Field(default_factory=list)
    values: List[str] = Field(default_factory=list)
    member_types: List[NamedTypeRef] = Field(default_factory=list)
    description: Optional[str] = Field(default=None)

    @computed_field  # type: ignore[misc]
    @property
    def is_factory_type(self) -> bool:
        """True for object/input types that get a factory."""
        return (
            self.kind in (DefinitionKind.OBJECT, DefinitionKind.INPUT)
            and self.name not in ROOT_OPERATION_TYPES
        )

    @model_validator(mode="after")
    def _payload_matches_kind(self) -> "TypeDefinition":
        if self.fields and self.kind not in (DefinitionKind.OBJECT, DefinitionKind.INPUT):
            raise ValueError(f"Definition '{self.name}' ({self.kind.value}) cannot have fields.")
        if self.values and self.kind != DefinitionKind.ENUM:
            raise ValueError(f"Definition '{self.name}' ({self.kind.value}) cannot have values.")
        if self.member_types and self.kind != DefinitionKind.UNION:
            raise ValueError(
                f"Definition '{self.name}' ({self.kind.value}) cannot have member types."
            )
        return self

    def __repr__(self) -> str:
        return f"<TypeDefinition {self.kind.value} {self.name}>"


class SchemaDefinition(BaseModel):
    """The ordered sequence of definitions parsed from one schema source."""

    model_config = _SHARED_CONFIG

    definitions: List[TypeDefinition] = Field(default_factory=list)
    source_file: Optional[str] = Field(default=None, description="Schema file path.")

    @computed_field  # type: ignore[misc]
    @property
    def factory_types(self) -> List[TypeDefinition]:
        return [d for d in self.definitions if d.is_factory_type]

    @computed_field  # type: ignore[misc]
    @property
    def type_names(self) -> List[str]:
        return [d.name for d in self.definitions]

    def get(self, name: str) -> Optional[TypeDefinition]:
        for definition in self.definitions:
            if definition.name == name:
                return definition
        return None

    def __repr__(self) -> str:
        return (
            f"<SchemaDefinition {len(self.definitions)} definitions, "
            f"{len(self.factory_types)} factory types>"
        )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ScalarMapping(BaseModel):
    """How to synthesise a value for one custom scalar."""

    model_config = _SHARED_CONFIG

    generator: str = Field(default="", description="Faker provider or raw expression.")
    arguments: Any = Field(default=None, description="Arguments for the provider.")


class GenerationConfig(BaseModel):
    """
    Options controlling mock generation.

    Accepts both snake_case names and the camelCase keys used by codegen
    configuration files (``typesFile``, ``enumValues``, ...). Unknown keys
    are ignored so a shared codegen config can be passed through unchanged.
    """

    model_config = ConfigDict(
        strict=False,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    types_file: Optional[str] = Field(
        default=None,
        alias="typesFile",
        description="Module path whose basename is the import source for types.",
    )
    enum_values: NamingConvention = Field(
        default=NamingConvention.PASCAL_CASE,
        alias="enumValues",
        description="Casing for enum member identifiers.",
    )
    typenames: NamingConvention = Field(
        default=NamingConvention.PASCAL_CASE,
        description="Casing for type names.",
    )
    add_typename: bool = Field(
        default=False,
        alias="addTypename",
        description="Inject a __typename discriminator into object factories.",
    )
    prefix: Optional[str] = Field(
        default=None,
        description="Static factory-name prefix; article naming when absent.",
    )
    scalars: Dict[str, ScalarMapping] = Field(
        default_factory=dict,
        description="Custom scalar name → generator mapping.",
    )
    terminate_circular_relationships: bool = Field(
        default=False,
        alias="terminateCircularRelationships",
        description="Guard nested factory calls with a visited set.",
    )
    types_prefix: str = Field(
        default="",
        alias="typesPrefix",
        description="Prefix for every referenced type name.",
    )
    locale: str = Field(default="en_US", description="Faker locale.")

    @field_validator("enum_values", "typenames", mode="before")
    @classmethod
    def _coerce_convention(cls, v: Any) -> NamingConvention:
        return NamingConvention.parse(v)

    @field_validator("scalars", mode="before")
    @classmethod
    def _coerce_scalars(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {
                name: {"generator": spec, "arguments": []} if isinstance(spec, str) else spec
                for name, spec in v.items()
            }
        return v

    @field_validator("types_prefix", mode="before")
    @classmethod
    def _none_prefix(cls, v: Any) -> Any:
        return "" if v is None else v


__all__: List[str] = [
    "ROOT_OPERATION_TYPES",
    "TypeKind",
    "DefinitionKind",
    "NamingConvention",
    "NamedTypeRef",
    "NonNullTypeRef",
    "ListTypeRef",
    "TypeRef",
    "named_type",
    "CatalogEntry",
    "FieldSpec",
    "TypeDefinition",
    "SchemaDefinition",
    "ScalarMapping",
    "GenerationConfig",
]

logger.debug("gqlmock.models loaded — %d public symbols.", len(__all__))
