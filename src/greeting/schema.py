"""Query schema for the greeting route.

Validation never raises: a malformed query is an ordinary outcome and
comes back as a Failure carrying one issue per offending field.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, StrictStr, ValidationError


class GreetingQuery(BaseModel):
    """Validated greeting input. Unknown query keys are ignored."""

    name: StrictStr


@dataclass(frozen=True)
class ValidationIssue:
    code: str  # "required" | "invalid_type" | pydantic error type
    path: list[str | int] = field(default_factory=list)
    message: str = ""
    expected: str | None = None  # JSON type the field must have
    received: str | None = None  # JSON type actually supplied, "undefined" if absent


@dataclass(frozen=True)
class Success:
    value: GreetingQuery


@dataclass(frozen=True)
class Failure:
    issues: list[ValidationIssue]


ValidationResult = Success | Failure

_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    tuple: "array",
    dict: "object",
    type(None): "null",
}

_TYPE_ERRORS = {
    "string_type": "string",
    "model_type": "object",
    "dict_type": "object",
}


def validate_greeting_query(params: Any) -> ValidationResult:
    """Validate raw query parameters against GreetingQuery."""
    try:
        return Success(GreetingQuery.model_validate(params))
    except ValidationError as exc:
        return Failure([_to_issue(err) for err in exc.errors()])


def _to_issue(err: Mapping[str, Any]) -> ValidationIssue:
    path = list(err.get("loc", ()))
    err_type = err.get("type", "")

    if err_type == "missing":
        return ValidationIssue(
            code="required",
            path=path,
            message="Required",
            expected=_declared_type_name(path),
            received="undefined",
        )

    if err_type in _TYPE_ERRORS:
        received = _json_type_name(err.get("input"))
        return ValidationIssue(
            code="invalid_type",
            path=path,
            message=f"Expected {_TYPE_ERRORS[err_type]}, received {received}",
            expected=_TYPE_ERRORS[err_type],
            received=received,
        )

    return ValidationIssue(code=err_type, path=path, message=err.get("msg", ""))


def _json_type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _declared_type_name(path: list[str | int]) -> str | None:
    if not path or path[0] not in GreetingQuery.model_fields:
        return None
    annotation = GreetingQuery.model_fields[path[0]].annotation
    return _JSON_TYPE_NAMES.get(annotation)
