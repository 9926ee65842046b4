"""JSON Schema validation adapter.

Wraps ``jsonschema`` and converts its errors into tagged ValidationFailure
records grouped by field, so the message formatting never touches the
engine's own error objects.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import jsonschema
from jsonschema import (
    Draft3Validator,
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
)

from jsonlint_cli.errors import SchemaUnavailable, UnknownEnvironment

logger = logging.getLogger(__name__)

DEFAULT_ENV = "json-schema-draft-04"
ROOT_FIELD = "(root)"

VALIDATORS: dict[str, type[jsonschema.protocols.Validator]] = {
    "json-schema-draft-03": Draft3Validator,
    "json-schema-draft-04": Draft4Validator,
    "json-schema-draft-06": Draft6Validator,
    "json-schema-draft-07": Draft7Validator,
    "json-schema-draft-2019-09": Draft201909Validator,
    "json-schema-draft-2020-12": Draft202012Validator,
}


@dataclass(frozen=True)
class ValidationFailure:
    """One violated rule on one field.

    Attributes:
        field: Dotted path of the offending field, "(root)" for the document.
        rule: Rule name ("type", "minLength", "required", "additional", ...).
        limit: The schema's configured value for the rule.
        observed: The value found in the document (None if the field is unset).
        description: The schema's description for the field, if declared.
    """

    field: str
    rule: str
    limit: Any
    observed: Any = None
    description: str = ""


# field -> rule -> failure, both in discovery order
Failures = dict[str, dict[str, ValidationFailure]]


def validator_class(env: str) -> type[jsonschema.protocols.Validator]:
    """Look up the validator for a schema environment such as "json-schema-draft-07".

    Raises:
        UnknownEnvironment: If the environment is not supported.
    """
    key = env if env.startswith("json-schema-") else f"json-schema-{env}"
    try:
        return VALIDATORS[key]
    except KeyError:
        supported = ", ".join(VALIDATORS)
        raise UnknownEnvironment(
            f"Unknown schema environment, expected one of: {supported}", env=env
        ) from None


def validate_document(document: Any, schema: Any, env: str = DEFAULT_ENV) -> Failures:
    """Validate a parsed document against a schema.

    Args:
        document: The parsed JSON value.
        schema: The parsed JSON Schema.
        env: Schema environment selecting the draft semantics.

    Returns:
        Failures grouped by field; empty if the document is valid.

    Raises:
        UnknownEnvironment: If ``env`` is not supported.
        SchemaUnavailable: If the schema itself is invalid for the draft.
    """
    cls = validator_class(env)
    try:
        cls.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise SchemaUnavailable(f"Schema is invalid: {e.message}") from e

    failures: Failures = {}
    for error in cls(schema).iter_errors(document):
        for failure in _to_failures(error):
            failures.setdefault(failure.field, {}).setdefault(failure.rule, failure)

    logger.debug(f"Validation produced {sum(len(r) for r in failures.values())} failure(s)")
    return failures


def _to_failures(error: jsonschema.ValidationError) -> list[ValidationFailure]:
    """Convert one engine error into failures attributed to concrete fields."""
    path = list(error.absolute_path)
    schema = error.schema if isinstance(error.schema, dict) else {}
    description = str(schema.get("description", ""))

    if error.validator == "required":
        if not isinstance(error.validator_value, list):
            # draft 3: boolean on the property schema, the path already names it
            return [
                ValidationFailure(
                    field=_field_path(path),
                    rule="required",
                    limit=error.validator_value,
                    observed=None,
                )
            ]
        return [
            ValidationFailure(
                field=_field_path([*path, name]),
                rule="required",
                limit=error.validator_value,
                observed=None,
            )
            for name in _missing_properties(error)
        ]

    if error.validator == "additionalProperties" and isinstance(error.instance, dict):
        return [
            ValidationFailure(
                field=_field_path([*path, name]),
                rule="additional",
                limit=error.validator_value,
                observed=error.instance[name],
            )
            for name in _additional_properties(error.instance, schema)
        ]

    return [
        ValidationFailure(
            field=_field_path(path),
            rule=str(error.validator),
            limit=error.validator_value,
            observed=error.instance,
            description=description,
        )
    ]


def _missing_properties(error: jsonschema.ValidationError) -> list[str]:
    if not isinstance(error.instance, dict):
        return []
    return [name for name in error.validator_value if name not in error.instance]


def _additional_properties(instance: dict[str, Any], schema: dict[str, Any]) -> list[str]:
    properties = schema.get("properties", {})
    patterns = schema.get("patternProperties", {})
    return [
        name
        for name in instance
        if name not in properties and not any(re.search(p, name) for p in patterns)
    ]


def _field_path(parts: list[Any]) -> str:
    return ".".join(str(p) for p in parts) or ROOT_FIELD
