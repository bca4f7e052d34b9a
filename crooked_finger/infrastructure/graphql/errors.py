"""
Typed failures raised by the GraphQL client.

Every failure mode of a round trip maps to exactly one subclass so callers can
branch on type (or on `kind`) without inspecting messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    GRAPHQL = "graphql"
    EMPTY_DATA = "empty_data"


class GraphQLClientError(RuntimeError):
    """Base class for all client-side operation failures."""

    kind: ErrorKind

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class TransportError(GraphQLClientError):
    """No response was obtained (DNS, connection refused, timeout)."""

    kind = ErrorKind.TRANSPORT


class HttpStatusError(GraphQLClientError):
    """Server answered with a status outside 200-299."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error: {status_code}")
        self.status_code = status_code


class DecodeError(GraphQLClientError):
    """Body was not a valid envelope, or data did not fit the expected shape."""

    kind = ErrorKind.DECODE


class GraphQLError(GraphQLClientError):
    """Server reported one or more logical errors in the envelope."""

    kind = ErrorKind.GRAPHQL

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        self.messages = [str(e.get("message", "")) for e in errors]
        super().__init__(", ".join(self.messages))


class EmptyDataError(GraphQLClientError):
    """Envelope carried neither data nor errors."""

    kind = ErrorKind.EMPTY_DATA

    def __init__(self) -> None:
        super().__init__("No data returned from server")
