# File: gqlmock/parser.py
"""
gqlmock - Schema Parser
========================
Turns a GraphQL schema source into the ordered ``SchemaDefinition`` model.

Accepted sources:
    - SDL text (``type User { id: ID! }``)
    - a graphql-core ``DocumentNode``
    - a built ``GraphQLSchema`` (printed back to SDL, then parsed)
    - an introspection result (``{"data": {"__schema": ...}}``)

Only object, input, enum, union and scalar definitions are kept, in source
order. ``extend`` definitions are merged into the definition they extend.
Interfaces, directives and operations carry no mock data and are skipped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from graphql import (
    DefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    GraphQLError,
    GraphQLSchema,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    build_client_schema,
    parse,
    print_schema,
)

from gqlmock.models import (
    DefinitionKind,
    FieldSpec,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    SchemaDefinition,
    TypeDefinition,
)
from gqlmock.utils import read_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.parser")

SchemaSource = Union[str, DocumentNode, GraphQLSchema, SchemaDefinition]

SDL_SUFFIXES = (".graphql", ".graphqls", ".gql", ".sdl")

_DEFINITION_KINDS: Dict[type, DefinitionKind] = {
    ObjectTypeDefinitionNode: DefinitionKind.OBJECT,
    ObjectTypeExtensionNode: DefinitionKind.OBJECT,
    InputObjectTypeDefinitionNode: DefinitionKind.INPUT,
    InputObjectTypeExtensionNode: DefinitionKind.INPUT,
    EnumTypeDefinitionNode: DefinitionKind.ENUM,
    EnumTypeExtensionNode: DefinitionKind.ENUM,
    UnionTypeDefinitionNode: DefinitionKind.UNION,
    UnionTypeExtensionNode: DefinitionKind.UNION,
    ScalarTypeDefinitionNode: DefinitionKind.SCALAR,
}

_EXTENSION_NODES = (
    ObjectTypeExtensionNode,
    InputObjectTypeExtensionNode,
    EnumTypeExtensionNode,
    UnionTypeExtensionNode,
)


# ---------------------------------------------------------------------------
# AST → model conversion
# ---------------------------------------------------------------------------


def type_node_to_ref(node: TypeNode) -> Union[NamedTypeRef, NonNullTypeRef, ListTypeRef]:
    """Recursively convert a graphql-core type node into a ``TypeRef``."""
    if isinstance(node, NonNullTypeNode):
        return NonNullTypeRef(of_type=type_node_to_ref(node.type))
    if isinstance(node, ListTypeNode):
        return ListTypeRef(of_type=type_node_to_ref(node.type))
    if isinstance(node, NamedTypeNode):
        return NamedTypeRef(name=node.name.value)
    raise TypeError(f"Unexpected type node: {type(node).__name__}")


def _description(node: Any) -> Optional[str]:
    desc = getattr(node, "description", None)
    return desc.value if desc is not None else None


def _definition_from_node(node: DefinitionNode, kind: DefinitionKind) -> TypeDefinition:
    fields: List[FieldSpec] = []
    values: List[str] = []
    members: List[NamedTypeRef] = []

    if kind in (DefinitionKind.OBJECT, DefinitionKind.INPUT):
        fields = [
            FieldSpec(
                name=f.name.value,
                type_ref=type_node_to_ref(f.type),
                description=_description(f),
            )
            for f in (node.fields or ())  # type: ignore[attr-defined]
        ]
    elif kind is DefinitionKind.ENUM:
        values = [v.name.value for v in (node.values or ())]  # type: ignore[attr-defined]
    elif kind is DefinitionKind.UNION:
        members = [NamedTypeRef(name=t.name.value) for t in (node.types or ())]  # type: ignore[attr-defined]

    return TypeDefinition(
        name=node.name.value,  # type: ignore[attr-defined]
        kind=kind,
        fields=fields,
        values=values,
        member_types=members,
        description=_description(node),
    )


def _merge_extension(base: TypeDefinition, extension: TypeDefinition) -> None:
    """Append an extension's payload to the definition it extends."""
    if base.kind != extension.kind:
        logger.debug(
            "Ignoring extension of '%s': kind %s does not match %s.",
            base.name,
            extension.kind.value,
            base.kind.value,
        )
        return
    base.fields = [*base.fields, *extension.fields]
    base.values = [*base.values, *extension.values]
    base.member_types = [*base.member_types, *extension.member_types]
    logger.debug("Merged extension into '%s'.", base.name)


def _merge_base(extended: TypeDefinition, base: TypeDefinition) -> None:
    """Put a late base definition's payload ahead of earlier extensions."""
    extended.fields = [*base.fields, *extended.fields]
    extended.values = [*base.values, *extended.values]
    extended.member_types = [*base.member_types, *extended.member_types]
    if base.description:
        extended.description = base.description
    logger.debug("Merged base definition into extended '%s'.", base.name)


def parse_document(
    document: DocumentNode,
    source_file: Optional[str] = None,
) -> SchemaDefinition:
    """
    Walk a parsed document once and collect the definitions gqlmock uses.

    Complexity: O(D + F) where D = definitions, F = fields/values.
    """
    definitions: List[TypeDefinition] = []
    by_name: Dict[str, TypeDefinition] = {}
    # Names first seen through an extension, still waiting for a base.
    pending_bases: Set[str] = set()

    for node in document.definitions:
        kind: Optional[DefinitionKind] = _DEFINITION_KINDS.get(type(node))
        if kind is None:
            logger.debug("Skipping %s definition.", type(node).__name__)
            continue

        definition: TypeDefinition = _definition_from_node(node, kind)
        if isinstance(node, _EXTENSION_NODES) and definition.name in by_name:
            _merge_extension(by_name[definition.name], definition)
            continue

        existing: Optional[TypeDefinition] = by_name.get(definition.name)
        if (
            existing is not None
            and definition.name in pending_bases
            and existing.kind == definition.kind
        ):
            _merge_base(existing, definition)
            pending_bases.discard(definition.name)
            continue

        if isinstance(node, _EXTENSION_NODES):
            pending_bases.add(definition.name)

        definitions.append(definition)
        by_name.setdefault(definition.name, definition)

    schema: SchemaDefinition = SchemaDefinition(
        definitions=definitions, source_file=source_file
    )
    logger.info(
        "Parsed schema: %d definitions, %d factory types.",
        len(schema.definitions),
        len(schema.factory_types),
    )
    return schema


def parse_schema(source: SchemaSource, source_file: Optional[str] = None) -> SchemaDefinition:
    """
    Parse any supported schema source into a ``SchemaDefinition``.

    Raises:
        ValueError: If SDL text cannot be parsed.
        TypeError: If *source* is not a supported type.
    """
    if isinstance(source, SchemaDefinition):
        return source
    if isinstance(source, GraphQLSchema):
        return parse_document(parse(print_schema(source), no_location=True), source_file)
    if isinstance(source, DocumentNode):
        return parse_document(source, source_file)
    if isinstance(source, str):
        try:
            document: DocumentNode = parse(source, no_location=True)
        except GraphQLSyntaxError as exc:
            where: str = f" in {source_file}" if source_file else ""
            raise ValueError(f"Invalid GraphQL SDL{where}: {exc.message}") from exc
        return parse_document(document, source_file)
    raise TypeError(f"Unsupported schema source: {type(source).__name__}")


def parse_introspection(data: Dict[str, Any], source_file: Optional[str] = None) -> SchemaDefinition:
    """Build a schema from an introspection query result."""
    payload: Any = data.get("data", data)
    if not isinstance(payload, dict) or "__schema" not in payload:
        raise ValueError(
            "Introspection result must contain '__schema' "
            "(optionally under a top-level 'data' key)."
        )
    try:
        client_schema: GraphQLSchema = build_client_schema(payload)  # type: ignore[arg-type]
    except (GraphQLError, TypeError) as exc:
        raise ValueError(f"Invalid introspection result: {exc}") from exc
    return parse_schema(client_schema, source_file)


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def load_schema_file(path: Path) -> SchemaDefinition:
    """
    Load a schema from disk.

    ``.json`` files are read as introspection results; every other
    extension is read as SDL.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Schema path is not a file: {path}")

    text: str = read_file(path)
    suffix: str = path.suffix.lower()

    if suffix == ".json":
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected a JSON object at top level, got {type(data).__name__}."
            )
        return parse_introspection(data, source_file=str(path))

    if suffix not in SDL_SUFFIXES:
        logger.info("Unknown extension '%s' — reading %s as SDL.", suffix, path)
    return parse_schema(text, source_file=str(path))


__all__: List[str] = [
    "SchemaSource",
    "SDL_SUFFIXES",
    "type_node_to_ref",
    "parse_document",
    "parse_schema",
    "parse_introspection",
    "load_schema_file",
]
