"""Editor configuration loaded from environment variables."""

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return int(value)


@dataclass(frozen=True)
class EditorSettings:
    """Timing and endpoint settings for an editor session."""

    api_url: str = "http://localhost:5000"
    table_name: str = "pagecraft-dev"
    http_timeout_seconds: float = 30.0

    autosave_debounce_seconds: float = 30.0
    autosave_saved_display_seconds: float = 3.0

    history_debounce_ms: int = 500
    history_max_size: int = 50

    lock_poll_interval_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "EditorSettings":
        """Build settings from the process environment.

        Returns:
            EditorSettings with environment overrides applied.
        """
        return cls(
            api_url=os.environ.get("PAGECRAFT_API_URL", cls.api_url),
            table_name=os.environ.get("TABLE_NAME", cls.table_name),
            http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS", cls.http_timeout_seconds),
            autosave_debounce_seconds=_env_float(
                "AUTOSAVE_DEBOUNCE_SECONDS", cls.autosave_debounce_seconds
            ),
            autosave_saved_display_seconds=_env_float(
                "AUTOSAVE_SAVED_DISPLAY_SECONDS", cls.autosave_saved_display_seconds
            ),
            history_debounce_ms=_env_int("HISTORY_DEBOUNCE_MS", cls.history_debounce_ms),
            history_max_size=_env_int("HISTORY_MAX_SIZE", cls.history_max_size),
            lock_poll_interval_seconds=_env_float(
                "LOCK_POLL_INTERVAL_SECONDS", cls.lock_poll_interval_seconds
            ),
        )
