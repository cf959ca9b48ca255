# File: gqlmock/emitter.py
"""
gqlmock - Factory Emitter
==========================
Assembles the generated Python module: the import header and one factory
function per object/input type.

Each factory returns a ``dict`` literal. Every field reads from
``overrides`` when the caller supplied that key and falls back to the
deterministic default otherwise::

    def aUser(overrides: Optional[Dict[str, Any]] = None) -> User:
        \"\"\"Mock ``User`` with deterministic defaults.\"\"\"
        return {
            "id": overrides["id"] if overrides and "id" in overrides else "0550ff93-...",
        }

**Performance contract:** all text is assembled with ``List[str]`` +
``"\\n".join()``; the catalog and the value generator are built once per
emitter.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from gqlmock.catalog import TypeCatalog
from gqlmock.models import DefinitionKind, GenerationConfig, SchemaDefinition, TypeDefinition
from gqlmock.utils import build_import_block, convert_name, with_types_prefix, wrap_in_quotes
from gqlmock.values import VISITED_SET_NAME, CircularRelationshipGuard, MockValueGenerator

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.emitter")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_INDENT: str = "    "
_DOUBLE_INDENT: str = _INDENT * 2

FUTURE_IMPORT: str = "from __future__ import annotations"


class FactoryEmitter:
    """
    Renders factories for one catalog and configuration.

    Usage::

        catalog = TypeCatalog.from_definitions(schema.definitions)
        emitter = FactoryEmitter(catalog, config)
        module_text = emitter.generate_all(schema)
    """

    def __init__(
        self,
        catalog: TypeCatalog,
        config: Optional[GenerationConfig] = None,
        value_generator: Optional[MockValueGenerator] = None,
    ) -> None:
        self._catalog: TypeCatalog = catalog
        self._config: GenerationConfig = config or GenerationConfig()
        self._values: MockValueGenerator = value_generator or MockValueGenerator(
            catalog, self._config, CircularRelationshipGuard(self._config)
        )
        logger.debug(
            "FactoryEmitter initialised (typenames=%s, terminating=%s, %d catalog entries).",
            self._config.typenames.value,
            self._config.terminate_circular_relationships,
            len(catalog),
        )

    @property
    def config(self) -> GenerationConfig:
        return self._config

    # -----------------------------------------------------------------
    # Naming
    # -----------------------------------------------------------------

    def cased_name(self, type_name: str) -> str:
        return convert_name(self._config.typenames, type_name)

    def annotation(self, type_name: str) -> str:
        """Return type used in the factory signature (prefixed, cased)."""
        return with_types_prefix(self.cased_name(type_name), self._config.types_prefix)

    def factory_name(self, type_name: str) -> str:
        return self._values.guard.factory_name(type_name)

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------

    def field_expressions(self, definition: TypeDefinition) -> List[Tuple[str, str]]:
        """``(field name, default expression)`` pairs in declaration order."""
        return [
            (f.name, self._values.generate_value(definition.name, f.name, f.type_ref))
            for f in definition.fields
        ]

    def emit_factory(
        self,
        definition: TypeDefinition,
        field_expressions: Optional[List[Tuple[str, str]]] = None,
    ) -> str:
        """
        Render the factory function for one object or input type.

        *field_expressions* defaults to :meth:`field_expressions` for the
        definition.
        """
        if field_expressions is None:
            field_expressions = self.field_expressions(definition)

        terminating: bool = self._config.terminate_circular_relationships
        cased: str = self.cased_name(definition.name)

        params: List[str] = ["overrides: Optional[Dict[str, Any]] = None"]
        if terminating:
            params.append(f"{VISITED_SET_NAME}: Optional[Set[str]] = None")

        lines: List[str] = [
            f"def {self.factory_name(definition.name)}({', '.join(params)}) -> {self.annotation(definition.name)}:",
            f'{_INDENT}"""Mock ``{cased}`` with deterministic defaults."""',
        ]

        if terminating:
            lines.append(f"{_INDENT}if {VISITED_SET_NAME} is None:")
            lines.append(f"{_DOUBLE_INDENT}{VISITED_SET_NAME} = set()")
            lines.append(f"{_INDENT}{VISITED_SET_NAME}.add({wrap_in_quotes(definition.name)})")

        lines.append(f"{_INDENT}return {{")
        if self._config.add_typename and definition.kind is DefinitionKind.OBJECT:
            lines.append(f'{_DOUBLE_INDENT}"__typename": {wrap_in_quotes(cased)},')

        for field_name, expression in field_expressions:
            key: str = wrap_in_quotes(field_name)
            lines.append(
                f"{_DOUBLE_INDENT}{key}: overrides[{key}] "
                f"if overrides and {key} in overrides else {expression},"
            )
        lines.append(f"{_INDENT}}}")

        logger.debug(
            "Emitted factory '%s' (%d fields).",
            self.factory_name(definition.name),
            len(field_expressions),
        )
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Imports
    # -----------------------------------------------------------------

    def import_names(self, schema: SchemaDefinition) -> List[str]:
        """
        Cased names the generated module imports from the types module:
        factory types first, then catalog enums and unions.
        """
        names: List[str] = [self.cased_name(d.name) for d in schema.factory_types]
        names.extend(self.cased_name(name) for name in self._catalog.import_names)
        return list(dict.fromkeys(names))

    def emit_imports(self, schema: SchemaDefinition) -> str:
        typing_names: Set[str] = {"Any", "Dict", "Optional"}
        if self._config.terminate_circular_relationships:
            typing_names.update({"Set", "cast"})

        lines: List[str] = [FUTURE_IMPORT, "", build_import_block({"typing": typing_names})]

        if self._config.types_file:
            module: str = Path(self._config.types_file).stem
            prefixed: List[str] = [
                with_types_prefix(name, self._config.types_prefix)
                for name in self.import_names(schema)
            ]
            if prefixed:
                lines.append("")
                lines.append(build_import_block({module: set(prefixed)}))
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Aggregate
    # -----------------------------------------------------------------

    def generate_all(self, schema: SchemaDefinition) -> str:
        """
        Render the complete module.

        Complexity: O(T × F) where T = factory types, F = fields per type.
        """
        factories: List[str] = [self.emit_factory(d) for d in schema.factory_types]
        sections: List[str] = [self.emit_imports(schema), *factories]
        content: str = "\n\n\n".join(sections) + "\n"

        logger.info(
            "Module rendered: %d factories, %d import names.",
            len(factories),
            len(self.import_names(schema)) if self._config.types_file else 0,
        )
        return content


__all__: List[str] = [
    "FUTURE_IMPORT",
    "FactoryEmitter",
]

logger.debug("gqlmock.emitter loaded.")
