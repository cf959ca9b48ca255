# File: gqlmock/__init__.py
"""
gqlmock — Deterministic Mock Factories for GraphQL Schemas
===========================================================

Reads a GraphQL schema (SDL or introspection result) and produces a Python
module with one factory function per object and input type. Every factory
returns the same realistic placeholder values on every run, and accepts
per-field overrides.

Architecture overview::

    ┌──────────────┐     ┌────────────────┐     ┌────────────────┐
    │  CLI / Entry │────▶│ MockGenerator  │────▶│ FactoryEmitter │
    │   (cli.py)   │     │ (generator.py) │     │  (emitter.py)  │
    └──────────────┘     └───────┬────────┘     └───────┬────────┘
                                 │                      │
                    ┌────────────┼────────────┐         ▼
                    ▼            ▼            ▼   ┌──────────────┐
             ┌──────────┐ ┌───────────┐ ┌─────────┐ │ values (.py) │
             │  parser  │ │  models   │ │ catalog │ │ Faker, guard │
             └──────────┘ └───────────┘ └─────────┘ └──────────────┘

Usage::

    # As a library
    from gqlmock import generate_mocks
    source = generate_mocks(sdl_text, {"typesFile": "types.py"})

    # From the command line
    python -m gqlmock --schema schema.graphql --output mocks.py -v

Public API:
    - generate_mocks     — Single-call entry point
    - MockGenerator      — Pipeline orchestrator with reports
    - GenerationConfig   — Generation settings model
    - SchemaDefinition   — Parsed schema model
    - TypeCatalog        — Enum / union / scalar index
    - FactoryEmitter     — Module renderer
    - MockValueGenerator — Per-field default expressions
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from gqlmock.models import (
    CatalogEntry,
    DefinitionKind,
    FieldSpec,
    GenerationConfig,
    ListTypeRef,
    NamedTypeRef,
    NamingConvention,
    NonNullTypeRef,
    ScalarMapping,
    SchemaDefinition,
    TypeDefinition,
    TypeKind,
)
from gqlmock.utils import convert_name, indefinite_article, mock_name, update_text_case
from gqlmock.parser import load_schema_file, parse_introspection, parse_schema
from gqlmock.catalog import BuiltinScalar, ObjectReference, TypeCatalog, build_catalog
from gqlmock.values import (
    CircularRelationshipGuard,
    MockValueGenerator,
    UnknownTypeKindError,
    generate_value,
    hashed_string,
)
from gqlmock.emitter import FactoryEmitter
from gqlmock.generator import GenerationReport, MockGenerator, generate_mocks

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__license__",
    # Entry points
    "generate_mocks",
    "MockGenerator",
    "GenerationReport",
    # Models
    "CatalogEntry",
    "DefinitionKind",
    "FieldSpec",
    "GenerationConfig",
    "ListTypeRef",
    "NamedTypeRef",
    "NamingConvention",
    "NonNullTypeRef",
    "ScalarMapping",
    "SchemaDefinition",
    "TypeDefinition",
    "TypeKind",
    # Parsing
    "parse_schema",
    "parse_introspection",
    "load_schema_file",
    # Catalog
    "BuiltinScalar",
    "ObjectReference",
    "TypeCatalog",
    "build_catalog",
    # Values
    "CircularRelationshipGuard",
    "MockValueGenerator",
    "UnknownTypeKindError",
    "generate_value",
    "hashed_string",
    # Emission
    "FactoryEmitter",
    # Naming
    "convert_name",
    "update_text_case",
    "indefinite_article",
    "mock_name",
]
