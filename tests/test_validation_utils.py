"""Tests for argument validation rules and the validate decorator."""

import pytest

from fuzzy_select.errors import ValidationError
from fuzzy_select.utils.validation_utils import (
    RuleResult,
    max_length,
    non_empty_string,
    string_sequence,
    validate,
)


class TestRules:
    def test_non_empty_string(self):
        assert non_empty_string("abc").valid
        assert non_empty_string("").message == "String cannot be empty"
        assert non_empty_string(42).message == "Expected string"

    def test_max_length(self):
        rule = max_length(3)
        assert rule("abc").valid
        result = rule("abcd")
        assert not result.valid
        assert "maximum of 3" in result.message

    @pytest.mark.parametrize("value", [["a", "b"], ("a",), []])
    def test_string_sequence_accepts(self, value):
        assert string_sequence(value).valid

    @pytest.mark.parametrize("value", ["abc", b"abc", {"a"}, ["a", 1], None])
    def test_string_sequence_rejects(self, value):
        assert not string_sequence(value).valid


class TestValidateDecorator:
    def test_passes_valid_arguments(self):
        @validate(non_empty_string)
        def shout(text: str) -> str:
            return text.upper()

        assert shout("hi") == "HI"

    def test_raises_with_field_name(self):
        @validate(non_empty_string, max_length(5))
        def shout(text: str) -> str:
            return text.upper()

        with pytest.raises(ValidationError) as exc_info:
            shout("")
        assert exc_info.value.field == "text"
        assert str(exc_info.value) == "String cannot be empty"

        with pytest.raises(ValidationError, match="maximum of 5"):
            shout("too long")

    def test_first_failing_rule_wins(self):
        calls = []

        def recording_rule(value):
            calls.append(value)
            return RuleResult(True)

        @validate(non_empty_string, recording_rule)
        def func(text):
            return text

        with pytest.raises(ValidationError):
            func("")
        assert calls == []

    def test_checks_other_positions(self):
        @validate(string_sequence, arg=1)
        def pick(query, choices):
            return choices[0]

        assert pick("q", ["a"]) == "a"
        with pytest.raises(ValidationError) as exc_info:
            pick("q", "not a list")
        assert exc_info.value.field == "choices"

    def test_accepts_keyword_argument(self):
        @validate(non_empty_string)
        def echo(text):
            return text

        assert echo(text="x") == "x"
        with pytest.raises(ValidationError):
            echo(text="")

    def test_missing_argument(self):
        @validate(non_empty_string, arg=1)
        def func(a, b=None):
            return a

        with pytest.raises(ValidationError, match="Missing argument"):
            func("a")

    def test_validation_error_is_value_error(self):
        @validate(non_empty_string)
        def func(text):
            return text

        with pytest.raises(ValueError):
            func("")
