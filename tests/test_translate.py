"""Tests for validation failure messages."""

from __future__ import annotations

from typing import Any

import pytest

from jsonlint_cli.translate import format_failure, translate
from jsonlint_cli.validation import ValidationFailure, validate_document


def _failure(rule: str, limit: Any, *, field: str = "name", description: str = "") -> ValidationFailure:
    return ValidationFailure(field=field, rule=rule, limit=limit, description=description)


class TestFormatFailure:
    """Tests for the per-rule templates."""

    @pytest.mark.parametrize(
        ("rule", "limit", "expected"),
        [
            ("type", "string", '"name" must be of type "string"'),
            ("minLength", 3, '"name" must be at least "3" characters'),
            ("maxLength", 10, '"name" may be at most "10" characters'),
            ("minProperties", 1, '"name" must hold at least "1" properties'),
            ("maxProperties", 4, '"name" may hold at most "4" properties'),
            ("minItems", 2, '"name" must have at least "2" items'),
            ("maxItems", 5, '"name" may have at most "5" items'),
            ("required", ["name"], '"name" is required but unset'),
            ("additional", False, '"name" is not allowed as additional key'),
        ],
    )
    def test_rule_templates(self, rule: str, limit: Any, expected: str) -> None:
        assert format_failure(_failure(rule, limit)) == expected

    def test_pattern_properties_template(self) -> None:
        failure = _failure("patternProperties", 2)
        assert format_failure(failure) == '"name" must hold "2" properties'

    def test_multiple_types_are_joined(self) -> None:
        failure = _failure("type", ["string", "null"])
        assert format_failure(failure) == '"name" must be of type "string,null"'

    def test_limits_are_not_reformatted(self) -> None:
        failure = _failure("maxLength", 2.5)
        assert format_failure(failure) == '"name" may be at most "2.5" characters'

    def test_fallback_with_numeric_value_and_description(self) -> None:
        failure = _failure("minimum", 0, field="age", description="Age in years")
        assert format_failure(failure) == '"age" does not meet rule "minimum=0" - Age in years'

    def test_fallback_quotes_string_values(self) -> None:
        failure = _failure("pattern", "^x", field="code")
        assert format_failure(failure) == '"code" does not meet rule "pattern="^x"" - '

    def test_fallback_encodes_structured_values(self) -> None:
        failure = _failure("enum", ["a", "b"], field="kind")
        assert format_failure(failure) == '"kind" does not meet rule "enum=["a", "b"]" - '

    def test_fallback_encodes_booleans_as_json(self) -> None:
        failure = _failure("uniqueItems", True, field="tags")
        assert format_failure(failure) == '"tags" does not meet rule "uniqueItems=true" - '


class TestTranslate:
    """Tests for translate."""

    def test_required_message(self) -> None:
        failures = {"name": {"required": _failure("required", ["name"])}}
        assert translate(failures) == ['"name" is required but unset']

    def test_keeps_discovery_order(self) -> None:
        failures = {
            "zeta": {
                "type": _failure("type", "string", field="zeta"),
                "additional": _failure("additional", False, field="zeta"),
            },
            "alpha": {"maxItems": _failure("maxItems", 1, field="alpha")},
        }

        assert translate(failures) == [
            '"zeta" must be of type "string"',
            '"zeta" is not allowed as additional key',
            '"alpha" may have at most "1" items',
        ]

    def test_empty_failures(self) -> None:
        assert translate({}) == []

    def test_one_message_per_violated_rule(self, person_schema: dict[str, Any]) -> None:
        failures = validate_document(
            {"name": "A", "age": -1, "tags": [1, 2, 3], "extra": True}, person_schema
        )

        messages = translate(failures)

        assert sorted(messages) == sorted(
            [
                '"name" must be at least "2" characters',
                '"age" does not meet rule "minimum=0" - Age in years',
                '"tags" may have at most "2" items',
                '"extra" is not allowed as additional key',
            ]
        )
