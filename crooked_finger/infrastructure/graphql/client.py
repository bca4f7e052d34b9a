"""
GraphQL client for the Crooked Finger backend.

One POST per operation, no retries and no caching. Every failure surfaces as a
subclass of GraphQLClientError.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import requests

from crooked_finger.infrastructure.graphql.errors import (
    DecodeError,
    GraphQLClientError,
    HttpStatusError,
    TransportError,
)
from crooked_finger.infrastructure.graphql.types import Envelope, Operation, OperationResult
from crooked_finger.utils.config import attach_auth_token, graphql_url, request_timeout_seconds
from crooked_finger.utils.logger import get_logger

logger = get_logger()

_MAX_DEBUG_BODY_CHARS = 500


def _operation_name(query: str) -> str:
    # "mutation Login($input: ...)" -> "Login"
    for token in query.replace("(", " ").replace("{", " ").split():
        if token not in ("query", "mutation", "subscription"):
            return token
    return "anonymous"


class GraphQLClient:
    """
    Executes operations against a single GraphQL endpoint.

    The bearer token is read through `token_provider` at call time and only
    sent when `attach_token` is on; the client never writes credentials.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        token_provider: Callable[[], str | None] | None = None,
        attach_token: bool | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = endpoint or graphql_url()
        self._token_provider = token_provider
        self.attach_token = attach_auth_token() if attach_token is None else attach_token
        self.timeout = timeout if timeout is not None else request_timeout_seconds()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token and self.attach_token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _post(self, operation: Operation) -> requests.Response:
        try:
            return requests.post(
                self.endpoint,
                json=operation.to_body(),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("GraphQL transport failure (%s): %s", type(e).__name__, e)
            raise TransportError(f"Could not reach {self.endpoint}: {e}", e) from e

    def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        response_type: type[Any] | None = None,
    ) -> Any:
        """
        Run one query or mutation.

        Args:
            query: GraphQL operation text.
            variables: JSON-compatible variables. Defaults to {}.
            response_type: Class with `from_dict` to decode `data` into. When
                None, the raw `data` dict is returned.

        Returns:
            Decoded payload.

        Raises:
            TransportError, HttpStatusError, DecodeError, GraphQLError, EmptyDataError.
        """
        operation = Operation(query=query, variables=variables or {})
        name = _operation_name(query)
        logger.debug("Executing GraphQL operation %s", name)

        response = self._post(operation)
        status = response.status_code
        if not 200 <= status <= 299:
            logger.warning("GraphQL %s returned HTTP %s", name, status)
            raise HttpStatusError(status)

        try:
            payload = response.json()
        except ValueError as e:
            preview = (response.text or "")[:_MAX_DEBUG_BODY_CHARS]
            logger.warning("GraphQL %s returned non-JSON body: %s", name, preview)
            raise DecodeError(f"Response body is not valid JSON: {e}", e) from e

        envelope = Envelope.from_payload(payload)
        data = envelope.unwrap()

        if response_type is None:
            return data
        try:
            return response_type.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("GraphQL %s payload did not match %s: %s", name, response_type.__name__, e)
            raise DecodeError(f"Unexpected {response_type.__name__} shape: {e}", e) from e

    def execute_result(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        response_type: type[Any] | None = None,
    ) -> OperationResult[Any]:
        """Like `execute`, but returns the failure instead of raising it."""
        try:
            return OperationResult(value=self.execute(query, variables, response_type))
        except GraphQLClientError as e:
            return OperationResult(error=e)

    async def aexecute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        response_type: type[Any] | None = None,
    ) -> Any:
        """Await `execute` without blocking the event loop."""
        return await asyncio.to_thread(self.execute, query, variables, response_type)
