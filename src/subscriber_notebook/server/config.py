from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime config (relay + overlay).

    - Loaded from environment variables (`NOTEBOOK_*`)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    - Read once at startup; never reloaded
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NOTEBOOK_", extra="ignore")

    # Serving
    host: str = "0.0.0.0"
    port: int = 5000

    # Browser origin allowed for CORS and the push channel
    client_url: str = "http://localhost:3000"
    # Relay URL the viewer page connects back to
    relay_url: str = "http://localhost:5000"

    # Overlay (server-side animation controller)
    overlay_enabled: bool = True
    char_duration_s: float = 0.2
    # 0 disables the per-session safety timeout
    session_timeout_s: float = 60.0

    # Canvas + typography used for text measurement and snapshots
    canvas_width: int = 1920
    canvas_height: int = 1080
    font_path: str | None = None
    font_size_vh: float = 4.0
    letter_spacing_px: float = 0.5

    # Logging
    log_level: str = "INFO"
    debug_log_msgs: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
