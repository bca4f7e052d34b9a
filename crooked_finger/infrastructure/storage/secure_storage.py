"""
Credential storage: OS keyring for secrets, a JSON file for non-secret flags.

Both stores speak bytes under a (service, key) pair and never raise on a
missing key or a backend fault; failures read back as "absent".
"""

from __future__ import annotations

import base64
import binascii
import json
import struct
import threading
from abc import ABC, abstractmethod
from pathlib import Path

import keyring
from keyring.backend import KeyringBackend
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError

from crooked_finger.utils.config import keyring_service, plain_storage_path
from crooked_finger.utils.logger import get_logger

logger = get_logger()

AUTH_TOKEN_KEY = "authToken"

# Native pointer-sized signed integer, like the platform's Int.
_INT_FORMAT = "@n"


class ByteStore(ABC):
    """Byte-level save/load/delete plus typed convenience wrappers."""

    @abstractmethod
    def save(self, data: bytes, key: str) -> bool:
        """Insert or overwrite the value under `key`. Returns success."""

    @abstractmethod
    def load(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when absent or unreadable."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove `key`. Deleting an absent key succeeds."""

    # --- Convenience ---

    def save_string(self, value: str, key: str) -> bool:
        return self.save(value.encode("utf-8"), key)

    def load_string(self, key: str) -> str | None:
        data = self.load(key)
        if data is None:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Stored value for %s is not valid UTF-8", key)
            return None

    def save_bool(self, value: bool, key: str) -> bool:
        return self.save(b"\x01" if value else b"\x00", key)

    def load_bool(self, key: str) -> bool:
        data = self.load(key)
        if not data:
            return False
        return data[0] != 0

    def save_int(self, value: int, key: str) -> bool:
        try:
            data = struct.pack(_INT_FORMAT, value)
        except struct.error as e:
            logger.warning("Cannot store %s as a native integer: %s", key, e)
            return False
        return self.save(data, key)

    def load_int(self, key: str) -> int | None:
        data = self.load(key)
        if data is None or len(data) != struct.calcsize(_INT_FORMAT):
            return None
        return struct.unpack(_INT_FORMAT, data)[0]


class SecureStorage(ByteStore):
    """
    Secret storage on top of the platform keyring (Keychain, Secret Service,
    Windows Credential Locker). Bytes are kept base64-encoded because keyring
    backends store text.
    """

    def __init__(self, service: str | None = None, backend: KeyringBackend | None = None) -> None:
        self.service = service or keyring_service()
        self._backend = backend or keyring.get_keyring()

    @property
    def is_available(self) -> bool:
        """False when no usable keyring backend was found on this system."""
        return not isinstance(self._backend, fail.Keyring)

    def save(self, data: bytes, key: str) -> bool:
        encoded = base64.b64encode(data).decode("ascii")
        try:
            # set_password replaces an existing entry, so this is an upsert.
            self._backend.set_password(self.service, key, encoded)
            return True
        except KeyringError as e:
            logger.warning("Keyring save failed for %s: %s", key, e)
            return False

    def load(self, key: str) -> bytes | None:
        try:
            encoded = self._backend.get_password(self.service, key)
        except KeyringError as e:
            logger.warning("Keyring load failed for %s: %s", key, e)
            return None
        if encoded is None:
            return None
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning("Keyring value for %s is not base64: %s", key, e)
            return None

    def delete(self, key: str) -> bool:
        try:
            self._backend.delete_password(self.service, key)
        except PasswordDeleteError:
            # Already absent.
            return True
        except KeyringError as e:
            logger.warning("Keyring delete failed for %s: %s", key, e)
            return False
        return True


class PlainStorage(ByteStore):
    """
    Unencrypted JSON file store for non-secret flags (onboarding seen, last tab).
    Never use it for tokens.
    """

    def __init__(self, path: Path | None = None, service: str | None = None) -> None:
        self.path = Path(path) if path is not None else plain_storage_path()
        self.service = service or keyring_service()
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, dict[str, str]]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Plain storage read failed for %s: %s", self.path, e)
            return {}

    def _write_all(self, data: dict[str, dict[str, str]]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            return True
        except OSError as e:
            logger.warning("Plain storage write failed for %s: %s", self.path, e)
            return False

    def save(self, data: bytes, key: str) -> bool:
        with self._lock:
            everything = self._read_all()
            entries = everything.setdefault(self.service, {})
            entries[key] = base64.b64encode(data).decode("ascii")
            return self._write_all(everything)

    def load(self, key: str) -> bytes | None:
        with self._lock:
            entries = self._read_all().get(self.service) or {}
        encoded = entries.get(key) if isinstance(entries, dict) else None
        if not isinstance(encoded, str):
            return None
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Plain storage value for %s is not base64", key)
            return None

    def delete(self, key: str) -> bool:
        with self._lock:
            everything = self._read_all()
            entries = everything.get(self.service)
            if not isinstance(entries, dict) or key not in entries:
                return True
            del entries[key]
            return self._write_all(everything)
