"""
tests/test_emitter.py
Unit tests for gqlmock.emitter (FactoryEmitter).

Tests cover:
- Exact factory text (plain, terminating, __typename)
- Factory naming conventions
- Import manifest and header
- Full module rendering (valid Python via ast.parse)
"""

from __future__ import annotations

import ast
import textwrap
from typing import List, Tuple

import pytest

from gqlmock.catalog import TypeCatalog
from gqlmock.emitter import FactoryEmitter
from gqlmock.models import GenerationConfig, SchemaDefinition
from gqlmock.parser import parse_schema


def _emitter(schema: SchemaDefinition, **config: object) -> FactoryEmitter:
    return FactoryEmitter(TypeCatalog.from_definitions(schema.definitions), GenerationConfig(**config))


USER_FIELDS: List[Tuple[str, str]] = [("id", '"u-1"'), ("status", "Status.Active")]


# ===========================================================================
# Factory text
# ===========================================================================


class TestEmitFactory:
    def test_plain_factory(self, user_status_sdl: str) -> None:
        schema = parse_schema(user_status_sdl)
        result = _emitter(schema).emit_factory(schema.get("User"), USER_FIELDS)
        assert result == textwrap.dedent(
            '''\
            def aUser(overrides: Optional[Dict[str, Any]] = None) -> User:
                """Mock ``User`` with deterministic defaults."""
                return {
                    "id": overrides["id"] if overrides and "id" in overrides else "u-1",
                    "status": overrides["status"] if overrides and "status" in overrides else Status.Active,
                }'''
        )

    def test_terminating_factory(self, user_status_sdl: str) -> None:
        schema = parse_schema(user_status_sdl)
        emitter = _emitter(schema, terminateCircularRelationships=True)
        result = emitter.emit_factory(schema.get("User"), USER_FIELDS[:1])
        assert result == textwrap.dedent(
            '''\
            def aUser(overrides: Optional[Dict[str, Any]] = None, relationships_to_omit: Optional[Set[str]] = None) -> User:
                """Mock ``User`` with deterministic defaults."""
                if relationships_to_omit is None:
                    relationships_to_omit = set()
                relationships_to_omit.add("User")
                return {
                    "id": overrides["id"] if overrides and "id" in overrides else "u-1",
                }'''
        )

    def test_typename_first_for_objects(self, user_status_sdl: str) -> None:
        schema = parse_schema(user_status_sdl)
        lines = _emitter(schema, addTypename=True).emit_factory(schema.get("User"), USER_FIELDS).splitlines()
        assert lines[3] == '        "__typename": "User",'
        assert lines[4].startswith('        "id":')

    def test_typename_never_on_inputs(self, example_schema: SchemaDefinition) -> None:
        result = _emitter(example_schema, addTypename=True).emit_factory(example_schema.get("CreatePostInput"))
        assert "__typename" not in result

    def test_fields_in_declaration_order(self, example_schema: SchemaDefinition) -> None:
        emitter = _emitter(example_schema)
        pairs = emitter.field_expressions(example_schema.get("Post"))
        assert [name for name, _ in pairs] == [
            "id", "title", "score", "views", "published", "author", "attachment",
        ]
        assert dict(pairs)["author"] == "aUser()"
        assert dict(pairs)["attachment"] == "anImage()"

    def test_empty_type_is_valid_python(self) -> None:
        schema = parse_schema("type Empty")
        ast.parse(_emitter(schema).emit_factory(schema.get("Empty")))


class TestFactoryNames:
    @pytest.mark.parametrize(
        "config, expected",
        [
            ({}, "anAvatar"),
            ({"prefix": "mock"}, "mockAvatar"),
            ({"typesPrefix": "Gql"}, "aGqlAvatar"),
            ({"prefix": "build", "typesPrefix": "Gql"}, "buildGqlAvatar"),
            ({"typenames": "upper-case#upperCase"}, "anAVATAR"),
        ],
    )
    def test_factory_name(self, example_schema: SchemaDefinition, config: dict, expected: str) -> None:
        assert _emitter(example_schema, **config).factory_name("Avatar") == expected

    def test_definition_and_call_sites_agree(self) -> None:
        schema = parse_schema("type user_profile { friend: user_profile }")
        emitter = _emitter(schema)
        result = emitter.emit_factory(schema.get("user_profile"))
        assert result.startswith("def aUserProfile(")
        assert "else aUserProfile()," in result


# ===========================================================================
# Imports
# ===========================================================================


class TestImports:
    def test_import_names_order(self, example_schema: SchemaDefinition) -> None:
        assert _emitter(example_schema).import_names(example_schema) == [
            "User", "Avatar", "Post", "Image", "Video", "CreatePostInput", "Status", "Attachment",
        ]

    def test_import_names_deduplicated(self) -> None:
        schema = parse_schema("type user_a { id: ID } enum UserA { X }")
        assert _emitter(schema).import_names(schema) == ["UserA"]

    def test_header_without_types_file(self, example_schema: SchemaDefinition) -> None:
        assert _emitter(example_schema).emit_imports(example_schema) == (
            "from __future__ import annotations\n\nfrom typing import Any, Dict, Optional"
        )

    def test_terminating_header(self, example_schema: SchemaDefinition) -> None:
        header = _emitter(example_schema, terminateCircularRelationships=True).emit_imports(example_schema)
        assert "from typing import Any, Dict, Optional, Set, cast" in header

    def test_types_file_import(self, example_schema: SchemaDefinition) -> None:
        header = _emitter(example_schema, typesFile="./generated/schema_types.py").emit_imports(example_schema)
        assert header.splitlines()[-1] == (
            "from schema_types import Attachment, Avatar, CreatePostInput, Image, Post, Status, User, Video"
        )

    def test_types_file_import_prefixed(self, user_status_sdl: str) -> None:
        schema = parse_schema(user_status_sdl)
        header = _emitter(schema, typesFile="types.py", typesPrefix="Api").emit_imports(schema)
        assert header.splitlines()[-1] == "from types import ApiStatus, ApiUser"


# ===========================================================================
# Full module
# ===========================================================================


class TestGenerateAll:
    def test_module_layout(self, user_status_sdl: str) -> None:
        schema = parse_schema(user_status_sdl)
        module = _emitter(schema).generate_all(schema)
        assert module.startswith("from __future__ import annotations\n")
        assert module.endswith("}\n")
        assert "\n\n\ndef aUser(" in module

    def test_factories_separated_by_two_blank_lines(self, example_schema: SchemaDefinition) -> None:
        module = _emitter(example_schema).generate_all(example_schema)
        assert module.count("\n\n\ndef ") == len(example_schema.factory_types)

    def test_root_operations_skipped(self, example_schema: SchemaDefinition) -> None:
        module = _emitter(example_schema).generate_all(example_schema)
        assert "aQuery" not in module
        assert "aMutation" not in module

    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"terminateCircularRelationships": True},
            {"addTypename": True, "typesFile": "schema_types.py"},
            {"typenames": "keep", "enumValues": "upper-case#upperCase", "prefix": "mock"},
        ],
    )
    def test_module_is_valid_python(self, example_schema: SchemaDefinition, config: dict) -> None:
        ast.parse(_emitter(example_schema, **config).generate_all(example_schema))

    def test_keyword_enum_member_is_valid_python(self, run_module) -> None:
        schema = parse_schema("enum Visibility { NONE PUBLIC } type Post { id: ID! visibility: Visibility! }")
        module = _emitter(schema).generate_all(schema)
        assert 'else getattr(Visibility, "None"),' in module
        namespace = run_module(module, enums=("Visibility",))
        assert namespace["aPost"]()["visibility"] == "Visibility.None"
