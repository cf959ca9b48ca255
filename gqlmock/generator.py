# File: gqlmock/generator.py
"""
gqlmock - Generation Pipeline (Orchestrator)
=============================================
Connects every phase together:

    Schema Source → Parse → Catalog → Emit → Write

The ``MockGenerator`` class provides both a programmatic API and the
backend for the CLI. ``generate_mocks`` is the single-call shortcut that
returns the module text and raises on failure.

Workflow::

    1. Load schema (SDL / introspection JSON) and optional config (YAML/JSON).
    2. Parse into ``SchemaDefinition`` + ``GenerationConfig`` (models.py).
    3. Build the type catalog once (catalog.py).
    4. Emit one factory per object/input type (emitter.py).
    5. Optionally write the module to disk (utils.write_file).
    6. Return a ``GenerationReport`` with metrics and status.

Error handling strategy:
    - Input, generation and write errors are recorded in the report rather
      than raised, each tagged by the step that failed.
    - The final report gives a clear pass/fail verdict; the CLI maps the
      failed step to an exit code.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from gqlmock.catalog import TypeCatalog
from gqlmock.emitter import FactoryEmitter
from gqlmock.models import GenerationConfig, SchemaDefinition
from gqlmock.parser import SchemaSource, load_schema_file, parse_schema
from gqlmock.utils import Timer, count_lines, read_file, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.generator")

ConfigSource = Union[GenerationConfig, Mapping[str, Any], None]

_CONFIG_KEYS = ("config", "generation_config")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``MockGenerator.generate()``.

    ``content`` holds the generated module whenever emission succeeded,
    even if writing it afterwards failed.
    """

    success: bool = False
    schema_file: str = ""
    output_path: str = ""
    content: str = ""

    # Metrics
    total_factories: int = 0
    total_lines: int = 0
    total_bytes: int = 0
    total_elapsed_seconds: float = 0.0

    # Sub-reports
    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    input_errors: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)
    write_errors: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [*self.input_errors, *self.generation_errors, *self.write_errors]

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "SUCCESS" if self.success else "FAILED"
        lines.append("=" * 60)
        lines.append("  gqlmock - Generation Report")
        lines.append("=" * 60)
        lines.append(f"  Status:           {status}")
        lines.append(f"  Schema:           {self.schema_file or '<in-memory>'}")
        lines.append(f"  Output:           {self.output_path or '<stdout>'}")
        lines.append(f"  Factories:        {self.total_factories}")
        lines.append(f"  Total lines:      {self.total_lines:,}")
        lines.append(f"  Total bytes:      {self.total_bytes:,}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append("-" * 60)

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        for title, errors in (
            ("Input Errors", self.input_errors),
            ("Generation Errors", self.generation_errors),
            ("Write Errors", self.write_errors),
        ):
            if errors:
                lines.append("-" * 60)
                lines.append(f"  {title} ({len(errors)}):")
                for err in errors:
                    lines.append(f"    ✗ {err}")

        lines.append("=" * 60)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Config loader helpers
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(read_file(path))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at top level, got {type(data).__name__}.")
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. An empty document is an empty mapping."""
    try:
        data: Any = yaml.safe_load(read_file(path))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at top level, got {type(data).__name__}.")
    return data


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Load generation options from a YAML or JSON file.

    Options are read from a top-level ``config`` mapping when present (the
    layout codegen configuration files use), otherwise from the top level.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Config path is not a file: {path}")

    suffix: str = path.suffix.lower()
    raw: Dict[str, Any] = _load_json_file(path) if suffix == ".json" else _load_yaml_file(path)

    for key in _CONFIG_KEYS:
        if key in raw:
            section: Any = raw[key]
            if section is None:
                return {}
            if not isinstance(section, dict):
                raise ValueError(
                    f"'{key}' in {path} must be a mapping, got {type(section).__name__}."
                )
            return dict(section)
    return raw


def parse_raw_config(raw: ConfigSource) -> GenerationConfig:
    """
    Validate a raw mapping into a ``GenerationConfig``.

    Raises:
        ValueError: If validation fails.
    """
    if raw is None:
        return GenerationConfig()
    if isinstance(raw, GenerationConfig):
        return raw
    try:
        return GenerationConfig.model_validate(dict(raw))
    except ValidationError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc


# ---------------------------------------------------------------------------
# MockGenerator - pipeline orchestrator
# ---------------------------------------------------------------------------


class MockGenerator:
    """
    Pipeline orchestrator for mock factory generation.

    Usage::

        generator = MockGenerator()

        # From files
        report = generator.generate_from_file(
            schema_path=Path("schema.graphql"),
            config_path=Path("codegen.yaml"),
            output_path=Path("mocks.py"),
        )

        # From in-memory objects
        report = generator.generate(schema_text, {"addTypename": True})

        print(report.summary())

    The generator is reusable: create once, call generate() many times.
    """

    def __init__(self, *, atomic_writes: bool = True) -> None:
        self._atomic_writes: bool = atomic_writes
        logger.debug("MockGenerator initialised: atomic_writes=%s.", atomic_writes)

    # -----------------------------------------------------------------
    # Public: generate from files
    # -----------------------------------------------------------------

    def generate_from_file(
        self,
        schema_path: Path,
        config_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        *,
        config_overrides: Optional[Dict[str, Any]] = None,
    ) -> GenerationReport:
        """
        Full pipeline: load files → parse → emit → write.

        *config_overrides* are applied over the values read from
        *config_path*.
        """
        report: GenerationReport = GenerationReport(schema_file=str(schema_path))
        pipeline_start: float = time.perf_counter()

        # Step 1: Load config
        with Timer("load_config") as t_config:
            try:
                raw_config: Dict[str, Any] = (
                    load_config_file(config_path) if config_path is not None else {}
                )
                raw_config.update(config_overrides or {})
                config: GenerationConfig = parse_raw_config(raw_config)
            except (FileNotFoundError, ValueError) as exc:
                config_error: Optional[Exception] = exc
            else:
                config_error = None

        if config_error is not None:
            return self._fail_input(report, "Load Config", t_config.elapsed, config_error, pipeline_start)
        report.step_metrics.append(GenerationStepMetric(
            step_name="Load Config",
            success=True,
            elapsed_seconds=t_config.elapsed,
            detail=f"from {config_path.name}" if config_path is not None else "defaults",
        ))

        # Step 2: Load + parse schema
        with Timer("load_schema") as t_schema:
            try:
                schema: SchemaDefinition = load_schema_file(schema_path)
            except (FileNotFoundError, ValueError) as exc:
                schema_error: Optional[Exception] = exc
            else:
                schema_error = None

        if schema_error is not None:
            return self._fail_input(report, "Load Schema", t_schema.elapsed, schema_error, pipeline_start)
        report.step_metrics.append(GenerationStepMetric(
            step_name="Load Schema",
            success=True,
            elapsed_seconds=t_schema.elapsed,
            detail=f"{len(schema.definitions)} definitions from {schema_path.name}",
        ))

        return self._run_pipeline(schema, config, output_path, report, pipeline_start)

    # -----------------------------------------------------------------
    # Public: generate from in-memory objects
    # -----------------------------------------------------------------

    def generate(
        self,
        schema: SchemaSource,
        config: ConfigSource = None,
        output_path: Optional[Path] = None,
    ) -> GenerationReport:
        """Full pipeline from an in-memory schema source and config."""
        report: GenerationReport = GenerationReport()
        pipeline_start: float = time.perf_counter()

        with Timer("parse_input") as t_parse:
            try:
                parsed_config: GenerationConfig = parse_raw_config(config)
                parsed: SchemaDefinition = parse_schema(schema)
            except (TypeError, ValueError) as exc:
                parse_error: Optional[Exception] = exc
            else:
                parse_error = None

        if parse_error is not None:
            return self._fail_input(report, "Parse Input", t_parse.elapsed, parse_error, pipeline_start)

        report.schema_file = parsed.source_file or ""
        report.step_metrics.append(GenerationStepMetric(
            step_name="Parse Input",
            success=True,
            elapsed_seconds=t_parse.elapsed,
            detail=f"{len(parsed.definitions)} definitions",
        ))
        return self._run_pipeline(parsed, parsed_config, output_path, report, pipeline_start)

    # -----------------------------------------------------------------
    # Internal: master pipeline
    # -----------------------------------------------------------------

    def _run_pipeline(
        self,
        schema: SchemaDefinition,
        config: GenerationConfig,
        output_path: Optional[Path],
        report: GenerationReport,
        pipeline_start: float,
    ) -> GenerationReport:
        if not self._step_generate(schema, config, report):
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        if output_path is not None:
            self._step_write(output_path, report)

        return self._finalise_report(report, time.perf_counter() - pipeline_start)

    # -----------------------------------------------------------------
    # Pipeline step: Catalog + emission
    # -----------------------------------------------------------------

    def _step_generate(
        self,
        schema: SchemaDefinition,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> bool:
        with Timer("code_generation") as t:
            try:
                catalog: TypeCatalog = TypeCatalog.from_definitions(schema.definitions)
                content: str = FactoryEmitter(catalog, config).generate_all(schema)
            except ValueError as exc:
                error_msg: str = f"Fatal generation error: {type(exc).__name__}: {exc}"
                report.generation_errors.append(error_msg)
                logger.error(error_msg, exc_info=True)
                content = ""

        success: bool = not report.generation_errors
        if success:
            report.content = content
            report.total_factories = len(schema.factory_types)
            report.total_lines = count_lines(content)
            report.total_bytes = len(content.encode("utf-8"))

        detail_str: str = (
            f"{report.total_factories} factories, ~{report.total_lines:,} lines"
            if success
            else "aborted"
        )
        report.step_metrics.append(GenerationStepMetric(
            step_name="Code Generation",
            success=success,
            elapsed_seconds=t.elapsed,
            detail=detail_str,
        ))
        logger.info("Code generation finished: %s in %.3fs.", detail_str, t.elapsed)
        return success

    # -----------------------------------------------------------------
    # Pipeline step: Write
    # -----------------------------------------------------------------

    def _step_write(self, output_path: Path, report: GenerationReport) -> None:
        report.output_path = str(output_path)
        with Timer("write_output") as t:
            try:
                written: int = write_file(output_path, report.content, atomic=self._atomic_writes)
            except OSError as exc:
                error_msg: str = f"Failed to write {output_path}: {exc}"
                report.write_errors.append(error_msg)
                logger.error(error_msg)
                written = 0

        report.step_metrics.append(GenerationStepMetric(
            step_name="Write Output",
            success=not report.write_errors,
            elapsed_seconds=t.elapsed,
            detail=f"{written:,} bytes to {output_path.name}",
        ))

    # -----------------------------------------------------------------
    # Internal: failures & final report
    # -----------------------------------------------------------------

    def _fail_input(
        self,
        report: GenerationReport,
        step_name: str,
        elapsed: float,
        exc: Exception,
        pipeline_start: float,
    ) -> GenerationReport:
        report.input_errors.append(str(exc))
        report.step_metrics.append(GenerationStepMetric(
            step_name=step_name,
            success=False,
            elapsed_seconds=elapsed,
            detail=str(exc),
        ))
        logger.error("%s failed: %s", step_name, exc)
        return self._finalise_report(report, time.perf_counter() - pipeline_start)

    def _finalise_report(
        self,
        report: GenerationReport,
        total_elapsed: float,
    ) -> GenerationReport:
        """Set final status and timing on the report."""
        report.total_elapsed_seconds = total_elapsed
        report.success = not report.errors
        return report


# ---------------------------------------------------------------------------
# Single-call entry point
# ---------------------------------------------------------------------------


def generate_mocks(schema: SchemaSource, config: ConfigSource = None) -> str:
    """
    Generate the mock module for *schema* and return its text.

    Unlike :class:`MockGenerator`, errors propagate to the caller.

    Raises:
        ValueError: If the schema or config is invalid, or generation fails.
        TypeError: If *schema* is not a supported source.
    """
    parsed_config: GenerationConfig = parse_raw_config(config)
    parsed: SchemaDefinition = parse_schema(schema)
    catalog: TypeCatalog = TypeCatalog.from_definitions(parsed.definitions)
    return FactoryEmitter(catalog, parsed_config).generate_all(parsed)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "MockGenerator",
    "GenerationReport",
    "GenerationStepMetric",
    "load_config_file",
    "parse_raw_config",
    "generate_mocks",
]

logger.debug("gqlmock.generator loaded.")
