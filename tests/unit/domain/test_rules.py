"""Unit tests for recordgate.domain.rules (RuleKind, ValidationRule, RuleRegistry)."""

import re

import pytest

from recordgate.domain.errors import RuleDeclarationError, UnknownFieldError
from recordgate.domain.rules import RuleKind, RuleRegistry, ValidationRule

# pylint: disable=magic-value-comparison,redefined-outer-name


@pytest.fixture
def registry() -> RuleRegistry:
    """An open registry for a type with fields a, b and c."""
    return RuleRegistry("thing", ["a", "b", "c"])


class TestRuleKind:
    """Tests for RuleKind.from_string."""

    @staticmethod
    @pytest.mark.parametrize("raw", ["presence", " Presence ", "PRESENCE"])
    def test_normalizes_case_and_whitespace(raw):
        """Kind names are matched case-insensitively."""
        assert RuleKind.from_string(raw) is RuleKind.PRESENCE

    @staticmethod
    def test_unknown_kind_raises_value_error():
        """Unrecognized names are rejected."""
        with pytest.raises(ValueError):
            RuleKind.from_string("uniqueness")


class TestValidationRule:
    """Tests for the ValidationRule value object."""

    @staticmethod
    def test_params_are_read_only():
        """Parameters cannot be mutated after declaration."""
        rule = ValidationRule("a", RuleKind.LENGTH, {"min": 1, "max": 2})
        with pytest.raises(TypeError):
            rule.params["min"] = 0  # type: ignore[index]

    @staticmethod
    def test_rule_is_frozen():
        """Rule attributes cannot be reassigned."""
        rule = ValidationRule("a", RuleKind.PRESENCE)
        with pytest.raises(AttributeError):
            rule.field = "b"  # type: ignore[misc]


class TestRegister:
    """Tests for RuleRegistry.register."""

    @staticmethod
    def test_rules_for_returns_declaration_order(registry):
        """Rules for one field come back in the order they were declared."""
        first = registry.register("a", "presence")
        second = registry.register("a", RuleKind.LENGTH, (1, 5))
        assert registry.rules_for("a") == (first, second)

    @staticmethod
    def test_rules_for_field_without_rules_is_empty(registry):
        """A declared field with no rules yields an empty tuple."""
        assert registry.rules_for("b") == ()

    @staticmethod
    def test_fields_ordered_by_first_declaration(registry):
        """Fields are listed by their first rule, not by later ones."""
        registry.register("c", "presence")
        registry.register("a", "presence")
        registry.register("c", "length", (1, 2))
        assert registry.fields == ("c", "a")

    @staticmethod
    def test_iteration_groups_rules_by_field(registry):
        """Iterating yields all rules for a field before moving on."""
        c1 = registry.register("c", "presence")
        a1 = registry.register("a", "presence")
        c2 = registry.register("c", "length", (1, 2))
        assert list(registry) == [c1, c2, a1]
        assert len(registry) == 3

    @staticmethod
    def test_unknown_field_raises(registry):
        """Rules may only target declared fields."""
        with pytest.raises(UnknownFieldError):
            registry.register("zzz", "presence")

    @staticmethod
    def test_unknown_kind_raises(registry):
        """Unknown kinds fail at registration."""
        with pytest.raises(RuleDeclarationError, match="unknown rule kind"):
            registry.register("a", "uniqueness")

    @staticmethod
    def test_frozen_registry_rejects_new_rules(registry):
        """No rules can be added once the type is built."""
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RuleDeclarationError, match="frozen"):
            registry.register("a", "presence")


class TestParameters:
    """Parameter normalization and fail-fast checks."""

    @staticmethod
    @pytest.mark.parametrize(
        "spec, expected",
        [
            ((2, 10), {"min": 2, "max": 10}),
            ([0, 3], {"min": 0, "max": 3}),
            (range(2, 11), {"min": 2, "max": 10}),
            ((4, 4), {"min": 4, "max": 4}),
        ],
    )
    def test_length_accepts_pairs_and_ranges(registry, spec, expected):
        """Tuples, lists and ranges all describe an inclusive min..max."""
        rule = registry.register("a", "length", spec)
        assert dict(rule.params) == expected

    @staticmethod
    @pytest.mark.parametrize(
        "spec",
        [(10, 2), (-1, 3), (1.5, 3), (True, 3), 5, "2..10", range(0), range(0, 10, 2)],
    )
    def test_length_rejects_malformed_specs(registry, spec):
        """Bad bounds fail at registration, not at validation."""
        with pytest.raises(RuleDeclarationError):
            registry.register("a", "length", spec)

    @staticmethod
    def test_format_compiles_string_patterns(registry):
        """String patterns are compiled once, at registration."""
        rule = registry.register("a", "format", r"\d+")
        assert isinstance(rule.params["pattern"], re.Pattern)

    @staticmethod
    def test_format_accepts_compiled_patterns(registry):
        """Precompiled patterns are kept as-is."""
        pattern = re.compile(r"[a-z]+", re.IGNORECASE)
        rule = registry.register("a", "format", pattern)
        assert rule.params["pattern"] is pattern

    @staticmethod
    def test_format_rejects_uncompilable_pattern(registry):
        """A broken pattern is a declaration error."""
        with pytest.raises(RuleDeclarationError):
            registry.register("a", "format", "(unclosed")

    @staticmethod
    def test_format_rejects_non_string(registry):
        """Only strings and compiled patterns are accepted."""
        with pytest.raises(RuleDeclarationError):
            registry.register("a", "format", 42)

    @staticmethod
    @pytest.mark.parametrize("kind", ["presence", "email"])
    def test_flag_kinds_require_true(registry, kind):
        """Flag kinds take exactly True."""
        assert dict(registry.register("a", kind, True).params) == {}
        with pytest.raises(RuleDeclarationError):
            registry.register("a", kind, "yes")
