"""Application settings loaded from environment variables via pydantic-settings.

Two sources, in priority order:

  1. **Environment variables**, e.g. ``OS_ENDPOINT=http://search:9200``
  2. **.env file**: key=value lines in the project root ``.env`` file

Field ``redis_host`` maps to env var ``REDIS_HOST`` (pydantic-settings
matches case-insensitively).  Defaults apply when neither source sets a
value, which makes a bare local run talk to ``localhost`` services.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Discovery API settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Search backend ===
    os_endpoint: str = "http://localhost:9200"
    store_timeout_seconds: float = 10.0

    # === Cache ===
    # "redis" for shared deployments, "memory" for a single process.
    cache_backend: str = "redis"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_tls: bool = False
    memory_cache_max_size: int = 1024

    # === Views ===
    search_include_video_url: bool = False

    # === App Config ===
    app_host: str = "0.0.0.0"
    port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    def get_cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]
