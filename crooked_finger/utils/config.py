"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path

from dotenv import load_dotenv
import os

PRODUCTION_GRAPHQL_URL = "https://backend.chandlerhardy.com/crooked-finger/graphql"
LOCAL_GRAPHQL_URL = "http://localhost:8001/crooked-finger/graphql"

_TRUTHY = ("1", "true", "yes", "on")


def _project_root() -> Path:
    """Resolve project root (the directory holding pyproject.toml)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Existing environment variables win over .env values.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=False)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_optional_bool(key: str, default: bool = False) -> bool:
    """Get optional env var as bool. Accepts 1/true/yes/on (case-insensitive)."""
    load_config()
    raw = os.getenv(key, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


# --- Public config accessors ---

def use_local_backend() -> bool:
    """Optional: talk to a backend on localhost:8001 instead of production."""
    return get_optional_bool("USE_LOCAL_BACKEND", False)


def graphql_url() -> str:
    """GraphQL endpoint. GRAPHQL_URL wins; otherwise production or local."""
    explicit = get_optional("GRAPHQL_URL", "")
    if explicit:
        return explicit
    if use_local_backend():
        return LOCAL_GRAPHQL_URL
    return PRODUCTION_GRAPHQL_URL


def attach_auth_token() -> bool:
    """
    Optional: send `Authorization: Bearer <token>` with every operation. Default off.

    The backend currently rejects tokens it issued itself (credential hashing
    defect), so requests go out anonymously until this is switched on.
    """
    return get_optional_bool("ATTACH_AUTH_TOKEN", False)


def request_timeout_seconds() -> float:
    """Optional: HTTP timeout for GraphQL round trips. Default 60."""
    return get_optional_float("REQUEST_TIMEOUT_SECONDS", 60.0)


def keyring_service() -> str:
    """Optional: service identifier for keyring entries."""
    return get_optional("KEYRING_SERVICE", "com.chandlerhardy.crooked-finger")


def plain_storage_path() -> Path:
    """Optional: JSON file for non-secret flags. Default data/settings.json."""
    raw = get_optional("PLAIN_STORAGE_PATH", "")
    if raw:
        return Path(raw).expanduser()
    return _project_root() / "data" / "settings.json"


def image_max_dimension() -> int:
    """Optional: longest allowed image edge before downscaling. Default 1920."""
    return get_optional_int("IMAGE_MAX_DIMENSION", 1920)


def image_jpeg_quality() -> int:
    """Optional: JPEG quality on Pillow's 1-95 scale. Default 80."""
    return get_optional_int("IMAGE_JPEG_QUALITY", 80)


def log_level() -> str:
    """Optional: logging level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()
