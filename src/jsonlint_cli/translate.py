"""Human-readable messages for validation failures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from jsonlint_cli.validation import Failures, ValidationFailure

Formatter = Callable[[ValidationFailure], str]


def _expected_type(limit: Any) -> str:
    if isinstance(limit, list):
        return ",".join(str(t) for t in limit)
    return str(limit)


def _rule_value(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return json.dumps(value)


RULE_MESSAGES: dict[str, Formatter] = {
    "type": lambda f: f'"{f.field}" must be of type "{_expected_type(f.limit)}"',
    "minLength": lambda f: f'"{f.field}" must be at least "{f.limit}" characters',
    "maxLength": lambda f: f'"{f.field}" may be at most "{f.limit}" characters',
    "minProperties": lambda f: f'"{f.field}" must hold at least "{f.limit}" properties',
    "maxProperties": lambda f: f'"{f.field}" may hold at most "{f.limit}" properties',
    "patternProperties": lambda f: f'"{f.field}" must hold "{f.limit}" properties',
    "minItems": lambda f: f'"{f.field}" must have at least "{f.limit}" items',
    "maxItems": lambda f: f'"{f.field}" may have at most "{f.limit}" items',
    "required": lambda f: f'"{f.field}" is {f.rule} but unset',
    "additional": lambda f: f'"{f.field}" is not allowed as {f.rule} key',
}


def fallback_message(failure: ValidationFailure) -> str:
    """Message for rules without dedicated phrasing."""
    return (
        f'"{failure.field}" does not meet rule '
        f'"{failure.rule}={_rule_value(failure.limit)}" - {failure.description}'
    )


def format_failure(failure: ValidationFailure) -> str:
    formatter = RULE_MESSAGES.get(failure.rule, fallback_message)
    return formatter(failure)


def translate(failures: Failures) -> list[str]:
    """One message per violated rule, fields and rules in discovery order."""
    return [
        format_failure(failure)
        for rules in failures.values()
        for failure in rules.values()
    ]
