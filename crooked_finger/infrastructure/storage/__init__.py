"""Credential storage: OS keyring with a plain-file store for non-secret settings."""

from crooked_finger.infrastructure.storage.secure_storage import (
    AUTH_TOKEN_KEY,
    ByteStore,
    PlainStorage,
    SecureStorage,
)

__all__ = ["AUTH_TOKEN_KEY", "ByteStore", "PlainStorage", "SecureStorage"]
