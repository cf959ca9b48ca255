"""
tests/test_values.py
Unit tests for gqlmock.values (seeding, literal rendering, value generation
and the circular relationship guard).

Tests cover:
- hashed_string against known 32-bit string hashes
- Determinism and seed sensitivity per (type, field)
- Builtin scalars, enums, unions, custom scalars, object references
- List / required unwrapping
- Error mapping for bad catalog entries and failing providers
"""

from __future__ import annotations

import ast
import logging
import re
from datetime import date, datetime
from decimal import Decimal

import pytest

from gqlmock.catalog import ObjectReference, TypeCatalog
from gqlmock.models import (
    CatalogEntry,
    GenerationConfig,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    TypeKind,
)
from gqlmock.values import (
    CircularRelationshipGuard,
    MockValueGenerator,
    UnknownTypeKindError,
    generate_value,
    hashed_string,
    iso_timestamp,
    render_literal,
)


def _named(name: str) -> NamedTypeRef:
    return NamedTypeRef(name=name)


def _generator(catalog: TypeCatalog, **config: object) -> MockValueGenerator:
    return MockValueGenerator(catalog, GenerationConfig(**config))


ISO_TIMESTAMP_RE = re.compile(r'^"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z"$')


# ===========================================================================
# Seeding
# ===========================================================================


class TestHashedString:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("", 0),
            ("a", 97),
            ("ab", 3105),
            ("hello", 99162322),
            ("polygenelubricants", -2147483648),
            ("\U0001F600", 1772899),
        ],
    )
    def test_known_values(self, value: str, expected: int) -> None:
        assert hashed_string(value) == expected

    def test_result_is_signed_32_bit(self) -> None:
        for value in ("UserfirstName", "a" * 100, "ÆØÅ"):
            assert -(2**31) <= hashed_string(value) < 2**31


# ===========================================================================
# Literal rendering
# ===========================================================================


class TestRenderLiteral:
    def test_strings_quoted(self) -> None:
        assert render_literal('say "hi"') == '"say \\"hi\\""'

    def test_numbers_and_booleans_raw(self) -> None:
        assert render_literal(3) == "3"
        assert render_literal(2.5) == "2.5"
        assert render_literal(True) == "True"
        assert render_literal(None) == "None"

    def test_dates_as_iso_strings(self) -> None:
        assert render_literal(date(2020, 1, 2)) == '"2020-01-02"'
        assert render_literal(datetime(2020, 1, 2, 3, 4, 5)) == '"2020-01-02T03:04:05"'

    def test_structured_values_json_normalised(self) -> None:
        assert render_literal({"a": [1, 2], "b": (3,)}) == "{'a': [1, 2], 'b': [3]}"
        assert render_literal(Decimal("1.5")) == "'1.5'"

    def test_output_is_a_python_literal(self) -> None:
        ast.literal_eval(render_literal({"when": date(2020, 1, 1), "n": [1.5]}))


# ===========================================================================
# Builtin scalars & wrappers
# ===========================================================================


class TestBuiltinScalars:
    def test_string_is_quoted_word(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("User", "name", _named("String"), example_catalog)
        assert re.fullmatch(r'"[^"\s]+"', value)

    def test_int_in_range(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("Post", "views", _named("Int"), example_catalog)
        assert 0 <= int(value) <= 9999

    def test_float_in_range_two_decimals(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("Post", "score", _named("Float"), example_catalog)
        number = float(value)
        assert 0.0 <= number <= 10.0
        assert round(number, 2) == number

    def test_boolean(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("Post", "published", _named("Boolean"), example_catalog) in ("True", "False")

    def test_id_is_quoted_uuid(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("User", "id", _named("ID"), example_catalog)
        assert re.fullmatch(r'"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"', value)

    def test_non_null_unwrapped(self, example_catalog: TypeCatalog) -> None:
        plain = generate_value("User", "id", _named("ID"), example_catalog)
        required = generate_value("User", "id", NonNullTypeRef(of_type=_named("ID")), example_catalog)
        assert plain == required

    def test_list_wrapped_once_per_layer(self, example_catalog: TypeCatalog) -> None:
        inner = generate_value("User", "tags", _named("String"), example_catalog)
        ref = NonNullTypeRef(of_type=ListTypeRef(of_type=NonNullTypeRef(of_type=_named("String"))))
        assert generate_value("User", "tags", ref, example_catalog) == f"[{inner}]"

        nested = ListTypeRef(of_type=ListTypeRef(of_type=_named("String")))
        assert generate_value("User", "tags", nested, example_catalog) == f"[[{inner}]]"


# ===========================================================================
# Determinism
# ===========================================================================


class TestDeterminism:
    def test_same_pair_same_value(self, example_catalog: TypeCatalog) -> None:
        first = generate_value("User", "id", _named("ID"), example_catalog)
        second = generate_value("User", "id", _named("ID"), example_catalog)
        assert first == second

    def test_independent_of_call_order(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog)
        expected = gen.generate_value("Post", "id", _named("ID"))
        gen.generate_value("User", "name", _named("String"))
        gen.generate_value("Avatar", "url", _named("String"))
        assert gen.generate_value("Post", "id", _named("ID")) == expected

    def test_field_name_changes_seed(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("User", "id", _named("ID"), example_catalog) != generate_value(
            "User", "uuid", _named("ID"), example_catalog
        )

    def test_type_name_changes_seed(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("User", "id", _named("ID"), example_catalog) != generate_value(
            "Post", "id", _named("ID"), example_catalog
        )


# ===========================================================================
# Enums & unions
# ===========================================================================


class TestEnumsAndUnions:
    def test_enum_first_value_pascal_case(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("User", "status", _named("Status"), example_catalog) == "Status.Active"

    def test_enum_value_convention(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, enumValues="upper-case#upperCase")
        assert gen.generate_value("User", "status", _named("Status")) == "Status.ACTIVE"

    def test_enum_types_prefix(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, typesPrefix="Api")
        assert gen.generate_value("User", "status", _named("Status")) == "ApiStatus.Active"

    def test_enum_typename_convention(self) -> None:
        catalog = TypeCatalog([CatalogEntry(name="order_state", kind=TypeKind.ENUM, values=["open"])])
        gen = _generator(catalog, typenames="keep", enumValues="keep")
        assert gen.generate_value("Order", "state", _named("order_state")) == "order_state.open"

    @pytest.mark.parametrize(
        "value, convention, expected",
        [
            ("NONE", "pascal-case#pascalCase", 'getattr(Visibility, "None")'),
            ("TRUE", "pascal-case#pascalCase", 'getattr(Visibility, "True")'),
            ("class", "keep", 'getattr(Visibility, "class")'),
            ("NONE", "upper-case#upperCase", "Visibility.NONE"),
        ],
    )
    def test_keyword_member_uses_getattr(self, value: str, convention: str, expected: str) -> None:
        catalog = TypeCatalog([CatalogEntry(name="Visibility", kind=TypeKind.ENUM, values=[value, "PUBLIC"])])
        gen = _generator(catalog, enumValues=convention)
        result = gen.generate_value("Post", "visibility", _named("Visibility"))
        assert result == expected
        ast.parse(result, mode="eval")

    def test_enum_without_values_renders_bare_type(self) -> None:
        catalog = TypeCatalog([CatalogEntry(name="Empty", kind=TypeKind.ENUM)])
        assert generate_value("T", "f", _named("Empty"), catalog) == "Empty"

    def test_union_uses_first_member(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("Post", "attachment", _named("Attachment"), example_catalog) == "anImage()"

    def test_union_of_scalars_uses_first_member_value(self) -> None:
        catalog = TypeCatalog(
            [CatalogEntry(name="Key", kind=TypeKind.UNION, member_types=[_named("ID"), _named("Int")])]
        )
        assert generate_value("T", "key", _named("Key"), catalog) == generate_value(
            "T", "key", _named("ID"), catalog
        )

    def test_empty_union_renders_none(self, caplog: pytest.LogCaptureFixture) -> None:
        catalog = TypeCatalog([CatalogEntry(name="Nothing", kind=TypeKind.UNION)])
        with caplog.at_level(logging.WARNING, logger="gqlmock.values"):
            assert generate_value("T", "f", _named("Nothing"), catalog) == "None"
        assert "no members" in caplog.text

    def test_unknown_kind_raises(self) -> None:
        bad = CatalogEntry.model_construct(name="Node", kind="interface", values=[], member_types=[])
        catalog = TypeCatalog([bad])
        with pytest.raises(UnknownTypeKindError) as exc_info:
            generate_value("T", "node", _named("Node"), catalog)
        assert exc_info.value.type_name == "Node"
        assert isinstance(exc_info.value, ValueError)
        assert "interface" in str(exc_info.value)


# ===========================================================================
# Custom scalars
# ===========================================================================


class TestCustomScalars:
    def test_date_default_is_iso_timestamp(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("User", "createdAt", _named("Date"), example_catalog)
        assert ISO_TIMESTAMP_RE.match(value)

    def test_other_scalar_default_is_word(self, example_catalog: TypeCatalog) -> None:
        value = generate_value("User", "email", _named("Email"), example_catalog)
        assert re.fullmatch(r'"[^"\s]+"', value)

    def test_empty_generator_uses_default(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Date": {"generator": ""}})
        assert ISO_TIMESTAMP_RE.match(gen.generate_value("User", "createdAt", _named("Date")))

    def test_faker_provider_string_shorthand(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": "email"})
        value = gen.generate_value("User", "email", _named("Email"))
        assert "@" in ast.literal_eval(value)

    def test_keyword_arguments(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(
            example_catalog,
            scalars={"Date": {"generator": "date", "arguments": {"pattern": "%Y-%m-%d"}}},
        )
        assert re.fullmatch(r'"\d{4}-\d{2}-\d{2}"', gen.generate_value("User", "createdAt", _named("Date")))

    def test_positional_arguments(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": {"generator": "random_int", "arguments": [7, 7]}})
        assert gen.generate_value("User", "email", _named("Email")) == "7"

    def test_single_argument(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": {"generator": "random_int", "arguments": 9999}})
        assert gen.generate_value("User", "email", _named("Email")) == "9999"

    def test_no_arguments(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": {"generator": "pybool", "arguments": None}})
        assert gen.generate_value("User", "email", _named("Email")) in ("True", "False")

    def test_provider_values_are_deterministic(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": "email"})
        assert gen.generate_value("User", "email", _named("Email")) == gen.generate_value(
            "User", "email", _named("Email")
        )

    def test_unknown_generator_emitted_raw(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": "make_email()"})
        assert gen.generate_value("User", "email", _named("Email")) == "make_email()"

    def test_reserved_names_emitted_raw(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(example_catalog, scalars={"Email": "seed_instance", "Date": "_private"})
        assert gen.generate_value("User", "email", _named("Email")) == "seed_instance"
        assert gen.generate_value("User", "createdAt", _named("Date")) == "_private"

    def test_failing_provider_raises_value_error(self, example_catalog: TypeCatalog) -> None:
        gen = _generator(
            example_catalog,
            scalars={"Email": {"generator": "random_int", "arguments": {"min": 10, "max": 1}}},
        )
        with pytest.raises(ValueError, match="random_int.*Email") as exc_info:
            gen.generate_value("User", "email", _named("Email"))
        assert exc_info.value.__cause__ is not None

    def test_iso_timestamp_bounded(self, example_catalog: TypeCatalog) -> None:
        fake = _generator(example_catalog).seeded_faker("User", "createdAt")
        stamp = iso_timestamp(fake)
        assert "1970-01-01T00:00:00.000Z" <= stamp <= "2033-05-18T03:33:20.999Z"

    def test_invalid_locale(self, example_catalog: TypeCatalog) -> None:
        with pytest.raises(ValueError, match="locale"):
            _generator(example_catalog, locale="xx_XX")


# ===========================================================================
# Circular relationship guard
# ===========================================================================


class TestCircularRelationshipGuard:
    def test_object_reference_eager_call(self, example_catalog: TypeCatalog) -> None:
        assert generate_value("Post", "author", _named("User"), example_catalog) == "aUser()"

    def test_list_of_objects(self, example_catalog: TypeCatalog) -> None:
        ref = ListTypeRef(of_type=_named("User"))
        assert generate_value("User", "friends", ref, example_catalog) == "[aUser()]"

    def test_terminating_render(self) -> None:
        guard = CircularRelationshipGuard(GenerationConfig(terminateCircularRelationships=True))
        assert guard.render(ObjectReference("User")) == (
            '(cast("User", {}) if "User" in relationships_to_omit '
            "else aUser({}, relationships_to_omit))"
        )

    def test_terminating_render_with_prefixes(self) -> None:
        guard = CircularRelationshipGuard(
            GenerationConfig(terminateCircularRelationships=True, prefix="mock", typesPrefix="Api")
        )
        assert guard.render(ObjectReference("User")) == (
            '(cast("ApiUser", {}) if "User" in relationships_to_omit '
            "else mockApiUser({}, relationships_to_omit))"
        )

    def test_nested_reference_uses_cased_name(self) -> None:
        guard = CircularRelationshipGuard(GenerationConfig())
        assert guard.render(ObjectReference("user_profile")) == "aUserProfile()"

    def test_guard_output_is_an_expression(self) -> None:
        guard = CircularRelationshipGuard(GenerationConfig(terminateCircularRelationships=True))
        ast.parse(guard.render(ObjectReference("Avatar")), mode="eval")
