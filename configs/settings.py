from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

# Upper bound on records returned by one tail.
MAX_TAIL_LIMIT = 200


def _env_bool(name: str, default: bool = False) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


class Settings:
    """
    Central configuration for the NUI intercept logger.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties. Nothing here is reloaded while the
    process runs.
    """

    def __init__(self) -> None:
        # HTTP listener
        self._host = os.getenv("NUI_LOGGER_HOST", "0.0.0.0")
        self._port = int(os.getenv("NUI_LOGGER_PORT", "7654"))

        # Storage
        self._log_dir = Path(os.getenv("NUI_LOGGER_LOG_DIR", "./logs"))
        self._flat_storage = _env_bool("NUI_LOGGER_FLAT_STORAGE", False)
        self._tail_limit = min(int(os.getenv("NUI_LOGGER_TAIL_LIMIT", "200")), MAX_TAIL_LIMIT)
        self._max_body_bytes = int(
            os.getenv("NUI_LOGGER_MAX_BODY_BYTES", str(50 * 1024 * 1024))
        )

        # Viewer auth
        self._pin = os.getenv("NUI_LOGGER_PIN") or None
        self._cookie_name = os.getenv("NUI_LOGGER_COOKIE_NAME", "nui_logger_auth")
        self._cookie_max_age = int(os.getenv("NUI_LOGGER_COOKIE_MAX_AGE", "86400"))

        self._log_level = os.getenv("NUI_LOGGER_LOG_LEVEL", "INFO").upper()

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def max_body_bytes(self) -> int:
        return self._max_body_bytes

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    @property
    def flat_storage(self) -> bool:
        return self._flat_storage

    @property
    def tail_limit(self) -> int:
        return self._tail_limit

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    @property
    def pin(self) -> str:
        if not self._pin:
            raise RuntimeError(
                "NUI_LOGGER_PIN is not set. Please export it in your environment "
                "or define it in a .env file."
            )
        return self._pin

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @property
    def cookie_max_age(self) -> int:
        return self._cookie_max_age

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
