"""
Application wiring.

Builds one GraphQL client, one credential store and the services on top of
them. The auth service owns the token; the client reads it through a provider
callable on every request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.media.image_codec import ImageCodec
from crooked_finger.infrastructure.storage.secure_storage import ByteStore, PlainStorage, SecureStorage
from crooked_finger.services.auth_service import AuthService
from crooked_finger.services.chat_service import ChatService
from crooked_finger.services.project_service import ProjectService
from crooked_finger.services.usage_service import UsageService
from crooked_finger.services.youtube_service import YouTubeService
from crooked_finger.utils.config import (
    attach_auth_token,
    graphql_url,
    keyring_service,
    load_config,
    log_level,
    plain_storage_path,
    request_timeout_seconds,
)
from crooked_finger.utils.logger import get_logger, setup_logger

logger = get_logger()


@dataclass
class AppContext:
    client: GraphQLClient
    storage: ByteStore
    plain_storage: PlainStorage
    codec: ImageCodec
    auth: AuthService
    chat: ChatService
    projects: ProjectService
    youtube: YouTubeService
    usage: UsageService
    started: bool = field(default=False)

    def start(self) -> None:
        """Restore persisted auth. Safe to call more than once."""
        if self.started:
            return
        self.auth.restore()
        self.started = True

    def close(self) -> None:
        self.chat.clear_messages()
        self.youtube.reset()
        self.started = False


def _default_storage(service: str) -> ByteStore:
    secure = SecureStorage(service=service)
    if not secure.is_available:
        logger.warning("No OS keyring available; credentials will not survive a restart")
    return secure


def build_context(
    storage: ByteStore | None = None,
    settings_path: Path | None = None,
) -> AppContext:
    """Create the object graph from environment configuration."""
    load_config()
    setup_logger(level=log_level())

    service = keyring_service()
    store = storage or _default_storage(service)
    plain = PlainStorage(path=settings_path or plain_storage_path(), service=service)
    codec = ImageCodec()

    client = GraphQLClient(
        endpoint=graphql_url(),
        token_provider=lambda: auth.token,
        attach_token=attach_auth_token(),
        timeout=request_timeout_seconds(),
    )
    auth = AuthService(client, store)

    logger.info("GraphQL endpoint: %s (attach token: %s)", client.endpoint, client.attach_token)
    return AppContext(
        client=client,
        storage=store,
        plain_storage=plain,
        codec=codec,
        auth=auth,
        chat=ChatService(client),
        projects=ProjectService(client, codec, auth=auth),
        youtube=YouTubeService(client, codec),
        usage=UsageService(client),
    )
