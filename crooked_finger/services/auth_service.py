"""
Authentication state: the single owner of the bearer token.

The token lives in two places, the secure store and memory. Both are written
together under one lock so readers never see them disagree.
"""

from __future__ import annotations

import threading
from typing import Callable

from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.responses import AuthPayload, LoginData, RegisterData, User
from crooked_finger.infrastructure.storage.secure_storage import AUTH_TOKEN_KEY, ByteStore
from crooked_finger.utils.logger import get_logger, token_preview

logger = get_logger()

AuthListener = Callable[[bool], None]


class AuthService:
    def __init__(self, client: GraphQLClient, storage: ByteStore, token_key: str = AUTH_TOKEN_KEY) -> None:
        self._client = client
        self._storage = storage
        self._token_key = token_key
        self._lock = threading.Lock()
        self._token: str | None = None
        self.current_user: User | None = None
        self._listeners: list[AuthListener] = []

    # --- State ---

    @property
    def token(self) -> str | None:
        """Current in-memory token. Pass as the client's token provider."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def add_listener(self, listener: AuthListener) -> None:
        """Call `listener(is_authenticated)` whenever the flag flips."""
        self._listeners.append(listener)

    def _notify(self, before: bool) -> None:
        after = self.is_authenticated
        if before == after:
            return
        for listener in list(self._listeners):
            listener(after)

    def restore(self) -> bool:
        """Load the persisted token once at startup. Returns is_authenticated."""
        with self._lock:
            before = self.is_authenticated
            self._token = self._storage.load_string(self._token_key)
        logger.info("Restored auth state: authenticated=%s", self.is_authenticated)
        self._notify(before)
        return self.is_authenticated

    def _set_token(self, token: str | None, user: User | None = None) -> bool:
        """Write the store, then memory. A failed delete leaves both untouched."""
        with self._lock:
            before = self.is_authenticated
            if token is None:
                # Retried once.
                if not (self._storage.delete(self._token_key) or self._storage.delete(self._token_key)):
                    logger.error("Could not remove stored token; session kept")
                    return False
            elif not self._storage.save_string(token, self._token_key):
                logger.warning("Could not persist token; session will not survive restart")
            self._token = token
            self.current_user = user
        self._notify(before)
        return True

    # --- Flows ---

    def _authenticate(self, query: str, response_type: type, field: str, email: str, password: str) -> User:
        variables = {"input": {"email": email, "password": password}}
        data = self._client.execute(query, variables, response_type)
        payload: AuthPayload = getattr(data, field)
        self._set_token(payload.access_token, payload.user)
        logger.info("%s succeeded for %s (token %s)", field, payload.user.email, token_preview(payload.access_token))
        return payload.user

    def login(self, email: str, password: str) -> User:
        """
        Log in and persist the returned token.

        Raises:
            GraphQLClientError: Any client failure; state is left unchanged.
        """
        return self._authenticate(operations.LOGIN, LoginData, "login", email, password)

    def register(self, email: str, password: str) -> User:
        """Create an account and persist the returned token."""
        return self._authenticate(operations.REGISTER, RegisterData, "register", email, password)

    def replace_token(self, token: str) -> None:
        """Overwrite the stored token after a refresh."""
        self._set_token(token, self.current_user)

    def logout(self) -> bool:
        """
        Remove the stored token, then forget the session.

        If the store refuses the delete (after one retry) the session stays
        in memory as well, so a later restore() cannot bring back a session
        the caller believes is gone. Returns False in that case.
        """
        if not self._set_token(None):
            return False
        logger.info("Logged out")
        return True
