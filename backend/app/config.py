"""Environment-driven settings, read once at startup."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_YOUTUBE_API_TIMEOUT = 15.0


def parse_cors_origins(raw: str | None) -> tuple[list[str], bool]:
    raw = (raw or "").strip()
    if not raw or raw == "*":
        return ["*"], False
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        return ["*"], False
    return origins, True


@dataclass
class Settings:
    youtube_api_key: str | None = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    cors_credentials: bool = False
    static_dir: Path = Path("public")
    youtube_api_timeout: float = DEFAULT_YOUTUBE_API_TIMEOUT
    environment: str = "local"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.youtube_api_key)


def load_settings() -> Settings:
    """Build settings from the process environment (and a .env file, if any)."""
    load_dotenv()

    cors_origins, cors_credentials = parse_cors_origins(os.getenv("CORS_ALLOWED_ORIGINS"))
    return Settings(
        youtube_api_key=(os.getenv("YOUTUBE_API_KEY") or "").strip() or None,
        host=os.getenv("HOST") or "0.0.0.0",
        port=int(os.getenv("PORT") or DEFAULT_PORT),
        cors_origins=cors_origins,
        cors_credentials=cors_credentials,
        static_dir=Path(os.getenv("STATIC_DIR") or "public"),
        youtube_api_timeout=float(os.getenv("YOUTUBE_API_TIMEOUT") or DEFAULT_YOUTUBE_API_TIMEOUT),
        environment=(os.getenv("ENVIRONMENT") or "local").strip().lower(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )
