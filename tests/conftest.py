"""
Shared fixtures: an in-memory keyring, mocked HTTP responses and small images.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError
from PIL import Image

from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.media.image_codec import ImageCodec
from crooked_finger.infrastructure.storage.secure_storage import SecureStorage

ENDPOINT = "http://test.local/crooked-finger/graphql"


class MemoryKeyring(KeyringBackend):
    """Keyring backend holding entries in a dict."""

    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.entries: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.entries.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.entries[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.entries[(service, username)]
        except KeyError:
            raise PasswordDeleteError("not found")


def make_response(status_code: int = 200, payload: Any = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = text
    return resp


def project_dict(**overrides: Any) -> dict[str, Any]:
    d = {
        "id": 1,
        "name": "Granny Square",
        "patternText": "ch4, 12 dc",
        "translatedText": None,
        "difficultyLevel": "beginner",
        "estimatedTime": None,
        "yarnWeight": None,
        "hookSize": None,
        "notes": None,
        "isCompleted": False,
        "imageData": None,
        "createdAt": "2025-10-05T12:00:00Z",
        "updatedAt": "2025-10-05T12:00:00Z",
    }
    d.update(overrides)
    return d


@pytest.fixture
def memory_keyring() -> MemoryKeyring:
    return MemoryKeyring()


@pytest.fixture
def secure_storage(memory_keyring: MemoryKeyring) -> SecureStorage:
    return SecureStorage(service="test.crooked-finger", backend=memory_keyring)


@pytest.fixture
def client() -> GraphQLClient:
    return GraphQLClient(endpoint=ENDPOINT, attach_token=False, timeout=5)


@pytest.fixture
def codec() -> ImageCodec:
    return ImageCodec(max_dimension=1920, quality=80)


@pytest.fixture
def small_image() -> Image.Image:
    return Image.new("RGB", (40, 30), (200, 50, 50))
