"""
tests/conftest.py
Shared fixtures for the gqlmock test suite.

No external mocking libraries are used; real file I/O is performed inside
temporary directories managed by pytest's tmp_path fixtures. Generated
modules are executed with ``exec`` against stub enum classes so their
runtime behaviour (overrides, cycle termination) can be asserted.
"""

from __future__ import annotations

import ast
import logging
import pathlib
import textwrap
from typing import Any, Callable, Dict, Iterable, Iterator

import pytest

from gqlmock.catalog import TypeCatalog
from gqlmock.models import GenerationConfig, SchemaDefinition
from gqlmock.parser import parse_schema


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
SCHEMA_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "schema_example.graphql"
CONFIG_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "codegen_example.yaml"


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_gqlmock_logger() -> Iterator[None]:
    """The CLI installs its own handler; undo that so caplog keeps working."""
    yield
    root_logger = logging.getLogger("gqlmock")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


# ---------------------------------------------------------------------------
# Schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def example_sdl() -> str:
    """The reference schema_example.graphql, read once per session."""
    assert SCHEMA_EXAMPLE_PATH.exists(), (
        f"Reference schema not found at {SCHEMA_EXAMPLE_PATH}. "
        "Make sure schema_example.graphql is in the project root."
    )
    return SCHEMA_EXAMPLE_PATH.read_text(encoding="utf-8")


@pytest.fixture()
def example_schema(example_sdl: str) -> SchemaDefinition:
    return parse_schema(example_sdl, source_file=str(SCHEMA_EXAMPLE_PATH))


@pytest.fixture()
def example_catalog(example_schema: SchemaDefinition) -> TypeCatalog:
    return TypeCatalog.from_definitions(example_schema.definitions)


@pytest.fixture()
def user_status_sdl() -> str:
    """The smallest schema with an object type and an enum."""
    return textwrap.dedent(
        """
        enum Status { ACTIVE INACTIVE }
        type User {
          id: ID!
          name: String
          status: Status!
        }
        """
    )


@pytest.fixture()
def cyclic_sdl() -> str:
    """Self-reference plus a two-type cycle."""
    return textwrap.dedent(
        """
        type Node {
          id: ID!
          parent: Node
          children: [Node!]!
        }
        type User {
          id: ID!
          avatar: Avatar
          friends: [User]
        }
        type Avatar {
          url: String!
          owner: User!
        }
        """
    )


@pytest.fixture()
def schema_path(example_sdl: str, tmp_path: pathlib.Path) -> pathlib.Path:
    """Copy of the reference schema inside a temporary directory."""
    path = tmp_path / "schema.graphql"
    path.write_text(example_sdl, encoding="utf-8")
    return path


@pytest.fixture()
def default_config() -> GenerationConfig:
    return GenerationConfig()


# ---------------------------------------------------------------------------
# Generated-module helpers
# ---------------------------------------------------------------------------


class StubEnum:
    """Stands in for a generated enum class: ``Status.Active`` → ``"Status.Active"``."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __getattr__(self, member: str) -> str:
        if member.startswith("__"):
            raise AttributeError(member)
        return f"{self._name}.{member}"


@pytest.fixture()
def run_module() -> Callable[..., Dict[str, Any]]:
    """
    Return a helper that parses and executes generated source.

    ``run_module(source, enums=("Status",))`` returns the module namespace.
    The source must not import a types module.
    """

    def _run(source: str, enums: Iterable[str] = ()) -> Dict[str, Any]:
        ast.parse(source, filename="<generated>")
        namespace: Dict[str, Any] = {name: StubEnum(name) for name in enums}
        exec(compile(source, "<generated>", "exec"), namespace)
        return namespace

    return _run
