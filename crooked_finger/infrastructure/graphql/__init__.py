"""GraphQL client, envelope types, typed errors and operation strings."""

from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import (
    DecodeError,
    EmptyDataError,
    ErrorKind,
    GraphQLClientError,
    GraphQLError,
    HttpStatusError,
    TransportError,
)
from crooked_finger.infrastructure.graphql.types import Envelope, Operation, OperationResult

__all__ = [
    "GraphQLClient",
    "GraphQLClientError",
    "ErrorKind",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "GraphQLError",
    "EmptyDataError",
    "Envelope",
    "Operation",
    "OperationResult",
]
