"""Tests for src/greeting/schema.py: query validation."""

from src.greeting.schema import (
    Failure,
    GreetingQuery,
    Success,
    ValidationIssue,
    validate_greeting_query,
)


class TestValidGreetingQuery:

    def test_name_present(self):
        result = validate_greeting_query({"name": "Maria"})
        assert result == Success(GreetingQuery(name="Maria"))

    def test_numeric_looking_string(self):
        result = validate_greeting_query({"name": "1"})
        assert isinstance(result, Success)
        assert result.value.name == "1"

    def test_empty_string_allowed(self):
        result = validate_greeting_query({"name": ""})
        assert isinstance(result, Success)
        assert result.value.name == ""

    def test_extra_keys_ignored(self):
        result = validate_greeting_query({"name": "Ana", "lang": "pt"})
        assert isinstance(result, Success)
        assert result.value.model_dump() == {"name": "Ana"}

    def test_unicode_kept_verbatim(self):
        result = validate_greeting_query({"name": "<b>João</b>"})
        assert result.value.name == "<b>João</b>"


class TestInvalidGreetingQuery:

    def test_missing_name(self):
        result = validate_greeting_query({})
        assert result == Failure([
            ValidationIssue(
                code="required",
                path=["name"],
                message="Required",
                expected="string",
                received="undefined",
            ),
        ])

    def test_missing_name_with_other_keys(self):
        result = validate_greeting_query({"nome": "Maria"})
        assert isinstance(result, Failure)
        assert result.issues[0].code == "required"
        assert result.issues[0].path == ["name"]

    def test_array_name(self):
        result = validate_greeting_query({"name": ["a", "b"]})
        assert result == Failure([
            ValidationIssue(
                code="invalid_type",
                path=["name"],
                message="Expected string, received array",
                expected="string",
                received="array",
            ),
        ])

    def test_number_not_coerced(self):
        result = validate_greeting_query({"name": 1})
        assert isinstance(result, Failure)
        assert result.issues[0].message == "Expected string, received number"

    def test_null_name(self):
        result = validate_greeting_query({"name": None})
        assert isinstance(result, Failure)
        assert result.issues[0].message == "Expected string, received null"

    def test_non_mapping_input_does_not_raise(self):
        result = validate_greeting_query(None)
        assert isinstance(result, Failure)
        assert result.issues[0].code == "invalid_type"
        assert result.issues[0].path == []
        assert result.issues[0].message == "Expected object, received null"
        assert result.issues[0].expected == "object"
        assert result.issues[0].received == "null"
