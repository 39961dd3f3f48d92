"""Validation failures raised by the planner domain.

Every constructor or mutator that accepts user-controlled data reports problems
as a ValidationError carrying the offending field's human name and a code.
Validators return a Validated result so callers that must not raise (the CSV
loader) can inspect the failure instead of catching it.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorCode(str, Enum):
    NULL_ARGUMENT = "NULL_ARGUMENT"
    INVALID_STRING = "INVALID_STRING"
    INVALID_DOUBLE = "INVALID_DOUBLE"
    NON_POSITIVE_VALUE = "NON_POSITIVE_VALUE"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_WEEKDAY = "INVALID_WEEKDAY"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DOESNT_EXIST = "DOESNT_EXIST"
    NONE = "NONE"


MESSAGE_SUFFIXES = {
    ErrorCode.NULL_ARGUMENT: " cannot be null.",
    ErrorCode.INVALID_STRING: " cannot be null, empty, or only whitespace.",
    ErrorCode.INVALID_DOUBLE: " is not a valid double.",
    ErrorCode.NON_POSITIVE_VALUE: " cannot be zero or negative.",
    ErrorCode.NEGATIVE_VALUE: " cannot be negative.",
    ErrorCode.INVALID_DATE: " is not a valid date.",
    ErrorCode.INVALID_WEEKDAY: " is not a valid weekday.",
    ErrorCode.ALREADY_EXISTS: " already exists.",
    ErrorCode.DOESNT_EXIST: " does not exist.",
    ErrorCode.NONE: ": no error message.",
}


def _normalize_code(code) -> ErrorCode:
    if isinstance(code, ErrorCode):
        return code
    try:
        return ErrorCode(str(code).strip().upper())
    except ValueError:
        return ErrorCode.NONE


class ValidationError(ValueError):
    """A typed failure: field name + code, with a fixed message per code."""

    def __init__(self, field: str, code: Union[ErrorCode, str]):
        self.field = field
        self.code = _normalize_code(code)
        self.message = f"{field}{MESSAGE_SUFFIXES[self.code]}"
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, code={self.code.value})"


class NutritionUnavailableError(LookupError):
    """Raised when nutrient totals are requested from an ingredient without a profile."""

    def __init__(self, ingredient_name: str):
        self.ingredient_name = ingredient_name
        super().__init__(f"Missing nutrition profile for ingredient: {ingredient_name}.")


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Outcome of a fallible validation: a value or a ValidationError."""
    value: Optional[T] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "Validated[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, field: str, code: Union[ErrorCode, str]) -> "Validated[T]":
        return cls(error=ValidationError(field, code))


__all__ = [
    "ErrorCode", "ValidationError", "NutritionUnavailableError", "Validated", "MESSAGE_SUFFIXES",
]
