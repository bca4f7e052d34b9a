"""
Tests for GraphQLClient: envelope handling, typed errors, headers, variables.
"""

from __future__ import annotations

import asyncio
import math
from unittest.mock import patch

import pytest
import requests

from conftest import ENDPOINT, make_response
from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import (
    DecodeError,
    EmptyDataError,
    ErrorKind,
    GraphQLError,
    HttpStatusError,
    TransportError,
)
from crooked_finger.infrastructure.graphql.responses import LoginData
from crooked_finger.infrastructure.graphql.types import Envelope, Operation

POST = "crooked_finger.infrastructure.graphql.client.requests.post"

LOGIN_PAYLOAD = {
    "data": {
        "login": {
            "user": {"id": 7, "email": "maker@example.com", "createdAt": "2025-10-01T00:00:00Z"},
            "accessToken": "abc123",
            "tokenType": "bearer",
        }
    }
}


def test_login_decodes_typed_payload(client: GraphQLClient) -> None:
    """Test a login response decodes into the typed payload."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)):
        data = client.execute(operations.LOGIN, {"input": {"email": "a", "password": "b"}}, LoginData)
    assert data.login.access_token == "abc123"
    assert data.login.user.email == "maker@example.com"


def test_raw_data_returned_without_response_type(client: GraphQLClient) -> None:
    """Test the raw data dict is returned when no type is given."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)):
        data = client.execute(operations.LOGIN)
    assert data["login"]["accessToken"] == "abc123"


def test_errors_take_precedence_over_data(client: GraphQLClient) -> None:
    """Test GraphQL errors win over partial data."""
    body = {"data": LOGIN_PAYLOAD["data"], "errors": [{"message": "bad input"}]}
    with patch(POST, return_value=make_response(200, body)):
        with pytest.raises(GraphQLError) as exc:
            client.execute(operations.LOGIN, None, LoginData)
    assert "bad input" in str(exc.value)
    assert exc.value.messages == ["bad input"]
    assert exc.value.kind is ErrorKind.GRAPHQL


def test_multiple_error_messages_joined(client: GraphQLClient) -> None:
    """Test several GraphQL error messages are joined."""
    body = {"errors": [{"message": "first"}, {"message": "second", "path": ["login"]}]}
    with patch(POST, return_value=make_response(200, body)):
        with pytest.raises(GraphQLError) as exc:
            client.execute(operations.LOGIN)
    assert str(exc.value) == "first, second"


def test_http_500_raises_status_error(client: GraphQLClient) -> None:
    """Test a 500 response raises HttpStatusError."""
    with patch(POST, return_value=make_response(500, LOGIN_PAYLOAD, text="oops")):
        with pytest.raises(HttpStatusError) as exc:
            client.execute(operations.LOGIN, None, LoginData)
    assert exc.value.status_code == 500
    assert str(exc.value) == "HTTP error: 500"


def test_transport_failure(client: GraphQLClient) -> None:
    """Test a connection failure raises TransportError."""
    with patch(POST, side_effect=requests.ConnectionError("refused")):
        with pytest.raises(TransportError) as exc:
            client.execute(operations.LOGIN)
    assert isinstance(exc.value.original, requests.ConnectionError)


def test_timeout_is_transport_failure(client: GraphQLClient) -> None:
    """Test a request timeout raises TransportError."""
    with patch(POST, side_effect=requests.Timeout("slow")):
        with pytest.raises(TransportError):
            client.execute(operations.LOGIN)


def test_non_json_body_is_decode_error(client: GraphQLClient) -> None:
    """Test a non-JSON body raises DecodeError."""
    resp = make_response(200, text="<html>gateway</html>")
    resp.json.side_effect = ValueError("Expecting value")
    with patch(POST, return_value=resp):
        with pytest.raises(DecodeError):
            client.execute(operations.LOGIN)


def test_non_object_envelope_is_decode_error(client: GraphQLClient) -> None:
    """Test a JSON body that is not an object raises DecodeError."""
    with patch(POST, return_value=make_response(200, ["not", "an", "object"])):
        with pytest.raises(DecodeError):
            client.execute(operations.LOGIN)


def test_no_data_no_errors_is_empty_data(client: GraphQLClient) -> None:
    """Test an envelope without data or errors raises EmptyDataError."""
    with patch(POST, return_value=make_response(200, {"data": None})):
        with pytest.raises(EmptyDataError) as exc:
            client.execute(operations.LOGIN)
    assert exc.value.kind is ErrorKind.EMPTY_DATA


def test_empty_errors_list_falls_through_to_data(client: GraphQLClient) -> None:
    """Test an empty errors list is ignored in favor of data."""
    body = {"data": LOGIN_PAYLOAD["data"], "errors": []}
    with patch(POST, return_value=make_response(200, body)):
        data = client.execute(operations.LOGIN, None, LoginData)
    assert data.login.access_token == "abc123"


def test_shape_mismatch_is_decode_error(client: GraphQLClient) -> None:
    """Test data that does not fit the response type raises DecodeError."""
    body = {"data": {"login": {"user": {"id": 1, "email": "x@y.z"}}}}
    with patch(POST, return_value=make_response(200, body)):
        with pytest.raises(DecodeError):
            client.execute(operations.LOGIN, None, LoginData)


def test_request_body_and_headers(client: GraphQLClient) -> None:
    """Test the POST body and JSON headers sent to the endpoint."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.LOGIN, {"input": {"email": "a", "password": "b"}})

    args, kwargs = mock_post.call_args
    assert args[0] == ENDPOINT
    assert kwargs["json"] == {
        "query": operations.LOGIN,
        "variables": {"input": {"email": "a", "password": "b"}},
    }
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["timeout"] == 5


def test_missing_variables_sent_as_empty_object(client: GraphQLClient) -> None:
    """Test omitted variables are sent as an empty object."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.GET_PROJECTS)
    assert mock_post.call_args.kwargs["json"]["variables"] == {}


def test_token_not_attached_when_disabled() -> None:
    """Test no Authorization header when token attachment is off."""
    client = GraphQLClient(endpoint=ENDPOINT, token_provider=lambda: "tok", attach_token=False, timeout=5)
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.GET_PROJECTS)
    assert "Authorization" not in mock_post.call_args.kwargs["headers"]


def test_token_attached_when_enabled() -> None:
    """Test the bearer token is attached when enabled."""
    client = GraphQLClient(endpoint=ENDPOINT, token_provider=lambda: "tok", attach_token=True, timeout=5)
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.GET_PROJECTS)
    assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"


def test_token_read_at_call_time() -> None:
    """Test the token provider is read on every request."""
    holder = {"token": None}
    client = GraphQLClient(endpoint=ENDPOINT, token_provider=lambda: holder["token"], attach_token=True, timeout=5)
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.GET_PROJECTS)
        holder["token"] = "later"
        client.execute(operations.GET_PROJECTS)
    first, second = mock_post.call_args_list
    assert "Authorization" not in first.kwargs["headers"]
    assert second.kwargs["headers"]["Authorization"] == "Bearer later"


def test_execute_result_captures_error(client: GraphQLClient) -> None:
    """Test execute_result wraps a failure instead of raising."""
    with patch(POST, return_value=make_response(503)):
        result = client.execute_result(operations.LOGIN)
    assert not result.ok
    assert result.error_kind is ErrorKind.HTTP_STATUS
    with pytest.raises(HttpStatusError):
        result.unwrap()


def test_execute_result_success(client: GraphQLClient) -> None:
    """Test execute_result carries the decoded value."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)):
        result = client.execute_result(operations.LOGIN, None, LoginData)
    assert result.ok
    assert result.unwrap().login.access_token == "abc123"


def test_aexecute_runs_off_loop(client: GraphQLClient) -> None:
    """Test aexecute returns the same result from a coroutine."""
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)):
        data = asyncio.run(client.aexecute(operations.LOGIN, None, LoginData))
    assert data.login.access_token == "abc123"


def test_invalid_variables_rejected_before_sending(client: GraphQLClient) -> None:
    """Test non-JSON variables are refused before any request."""
    with patch(POST) as mock_post:
        with pytest.raises(TypeError):
            client.execute(operations.LOGIN, {"when": object()})
    mock_post.assert_not_called()


# --- Operation / Envelope ---


def test_operation_rejects_non_finite_float() -> None:
    """Test NaN and infinity are refused as variables."""
    with pytest.raises(ValueError):
        Operation(query="query Q { x }", variables={"n": math.nan})


def test_operation_rejects_non_string_keys() -> None:
    """Test variable objects need string keys."""
    with pytest.raises(TypeError):
        Operation(query="query Q { x }", variables={"m": {1: "a"}})


def test_operation_normalizes_tuples_and_copies() -> None:
    """Test tuples become lists and variables are copied."""
    source = {"languages": ("en", "es"), "nested": {"ok": [1, 2.5, None, True]}}
    op = Operation(query="query Q { x }", variables=source)
    source["nested"]["ok"].append("mutated")
    assert op.to_body()["variables"] == {"languages": ["en", "es"], "nested": {"ok": [1, 2.5, None, True]}}


def test_operation_requires_text() -> None:
    """Test an operation needs non-empty query text."""
    with pytest.raises(ValueError):
        Operation(query="   ")


def test_envelope_rejects_malformed_errors() -> None:
    """Test a malformed errors entry raises DecodeError."""
    with pytest.raises(DecodeError):
        Envelope.from_payload({"errors": [{"path": ["x"]}]})
    with pytest.raises(DecodeError):
        Envelope.from_payload({"data": "nope"})


def test_error_kind_on_every_subclass() -> None:
    """Test each client error reports its kind."""
    kinds = {
        TransportError("x").kind,
        HttpStatusError(404).kind,
        DecodeError("x").kind,
        GraphQLError([{"message": "m"}]).kind,
        EmptyDataError().kind,
    }
    assert kinds == set(ErrorKind)


def test_status_boundaries(client: GraphQLClient) -> None:
    """Test which status codes count as success."""
    with patch(POST, return_value=make_response(299, LOGIN_PAYLOAD)):
        assert client.execute(operations.LOGIN)["login"]["accessToken"] == "abc123"
    with patch(POST, return_value=make_response(300, LOGIN_PAYLOAD)):
        with pytest.raises(HttpStatusError):
            client.execute(operations.LOGIN)


def test_token_provider_not_required() -> None:
    """Test the client works without a token provider."""
    client = GraphQLClient(endpoint=ENDPOINT, attach_token=True, timeout=1)
    with patch(POST, return_value=make_response(200, LOGIN_PAYLOAD)) as mock_post:
        client.execute(operations.LOGIN)
    assert mock_post.call_args.kwargs["headers"] == {"Content-Type": "application/json"}
