"""
Wire-level types for the GraphQL protocol: operations, envelopes, results.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from crooked_finger.infrastructure.graphql.errors import (
    DecodeError,
    EmptyDataError,
    ErrorKind,
    GraphQLClientError,
    GraphQLError,
)

JSONValue = Union[None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]]
Variables = dict[str, JSONValue]

T = TypeVar("T")


def validate_json_value(value: Any, path: str = "variables") -> None:
    """
    Reject anything that is not a plain JSON value.

    Raises:
        TypeError: On unsupported types or non-string map keys.
        ValueError: On NaN or infinite floats.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{path}: non-finite float {value!r} is not valid JSON")
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            validate_json_value(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"{path}: map key {k!r} must be a string")
            validate_json_value(v, f"{path}.{k}")
        return
    raise TypeError(f"{path}: unsupported value type {type(value).__name__}")


def _normalize(value: Any) -> JSONValue:
    # Tuples are accepted on input but always serialized as lists.
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class Operation:
    """One query or mutation plus its variables. Validated on construction."""

    query: str
    variables: Variables = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.query, str) or not self.query.strip():
            raise ValueError("Operation text must be a non-empty string")
        if not isinstance(self.variables, dict):
            raise TypeError("variables must be a map of name to JSON value")
        validate_json_value(self.variables)
        object.__setattr__(self, "variables", _normalize(copy.deepcopy(self.variables)))

    def to_body(self) -> dict[str, Any]:
        return {"query": self.query, "variables": copy.deepcopy(self.variables)}


@dataclass(frozen=True)
class ErrorDetail:
    message: str
    path: list[str | int] | None = None


@dataclass(frozen=True)
class Envelope:
    """Decoded `{data, errors}` response wrapper."""

    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None

    @classmethod
    def from_payload(cls, payload: Any) -> "Envelope":
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object envelope, got {type(payload).__name__}")
        data = payload.get("data")
        if data is not None and not isinstance(data, dict):
            raise DecodeError("Envelope 'data' must be an object or null")
        raw_errors = payload.get("errors")
        errors: list[ErrorDetail] | None = None
        if raw_errors is not None:
            if not isinstance(raw_errors, list):
                raise DecodeError("Envelope 'errors' must be a list or null")
            errors = []
            for e in raw_errors:
                if not isinstance(e, dict) or not isinstance(e.get("message"), str):
                    raise DecodeError("Each error must be an object with a string 'message'")
                path = e.get("path")
                if path is not None and not isinstance(path, list):
                    raise DecodeError("Error 'path' must be a list")
                errors.append(ErrorDetail(message=e["message"], path=path))
        return cls(data=data, errors=errors)

    def unwrap(self) -> dict[str, Any]:
        """Return usable data, or raise GraphQLError / EmptyDataError."""
        if self.errors:
            raise GraphQLError([{"message": e.message, "path": e.path} for e in self.errors])
        if self.data is None:
            raise EmptyDataError()
        return self.data


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a decoded value or a typed client error, never both."""

    value: T | None = None
    error: GraphQLClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
