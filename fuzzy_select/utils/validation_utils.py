"""
Argument validation for scorer and selection functions.

Rules are plain callables returning a RuleResult; the validate()
decorator runs them against one positional argument before the wrapped
function is called and raises ValidationError on the first failure.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import Any, NamedTuple, TypeVar, cast

from fuzzy_select.errors import ValidationError

F = TypeVar("F", bound=Callable[..., Any])


class RuleResult(NamedTuple):
    valid: bool
    message: str = ""


ValidationRule = Callable[[Any], RuleResult]

_OK = RuleResult(True)


def non_empty_string(value: Any) -> RuleResult:
    if not isinstance(value, str):
        return RuleResult(False, "Expected string")
    if len(value) == 0:
        return RuleResult(False, "String cannot be empty")
    return _OK


def max_length(limit: int) -> ValidationRule:
    """Build a rule rejecting strings longer than limit."""

    def rule(value: Any) -> RuleResult:
        if not isinstance(value, str):
            return RuleResult(False, "Expected string")
        if len(value) > limit:
            return RuleResult(False, f"String length exceeds maximum of {limit}")
        return _OK

    return rule


def string_sequence(value: Any) -> RuleResult:
    """Accept a list, tuple or other non-string sequence of strings."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return RuleResult(False, "Expected a sequence of strings")
    for item in value:
        if not isinstance(item, str):
            return RuleResult(False, f"Expected string items, got {type(item).__name__}")
    return _OK


def validate(*rules: ValidationRule, arg: int = 0) -> Callable[[F], F]:
    """Validate one positional argument of the decorated function.

    Args:
        *rules: Rules applied in order
        arg: Index of the positional argument to check (default: first)

    Returns:
        Decorator raising ValidationError(message, field=<parameter name>)

    """

    def decorator(func: F) -> F:
        try:
            params = list(inspect.signature(func).parameters)
            field = params[arg] if arg < len(params) else None
        except (TypeError, ValueError):
            field = None

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if arg < len(args):
                value = args[arg]
            elif field is not None and field in kwargs:
                value = kwargs[field]
            else:
                raise ValidationError(f"Missing argument at position {arg}", field=field)

            for rule in rules:
                result = rule(value)
                if not result.valid:
                    raise ValidationError(result.message, field=field)
            return func(*args, **kwargs)

        return cast(F, wrapper)

    return decorator
