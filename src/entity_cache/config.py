import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

CACHE_MODES = ("keyed", "single_slot")
ENTITY_ID_TYPES = ("int", "str")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "entity")
    cache_mode: str = os.getenv("CACHE_MODE", "keyed")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "0"))  # 0 = never expire

    # Remote source
    remote_base_url: str = os.getenv("REMOTE_BASE_URL", "https://jsonplaceholder.typicode.com")
    remote_entity_path: str = os.getenv("REMOTE_ENTITY_PATH", "/users/{id}")
    remote_timeout: float = float(os.getenv("REMOTE_TIMEOUT", "10.0"))

    # Connectivity
    probe_url: str = os.getenv("PROBE_URL", "https://jsonplaceholder.typicode.com")
    probe_timeout: float = float(os.getenv("PROBE_TIMEOUT", "2.0"))
    force_offline: bool = os.getenv("FORCE_OFFLINE", "false").lower() == "true"

    # Repository behaviour
    serve_stale_on_error: bool = os.getenv("SERVE_STALE_ON_ERROR", "false").lower() == "true"
    entity_id_type: str = os.getenv("ENTITY_ID_TYPE", "int")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def is_single_slot(self) -> bool:
        """Check if the cache keeps only the last fetched entity."""
        return self.cache_mode == "single_slot"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_mode not in CACHE_MODES:
            raise ValueError(f"CACHE_MODE must be one of {list(CACHE_MODES)}, got {self.cache_mode!r}")

        if self.entity_id_type not in ENTITY_ID_TYPES:
            raise ValueError(
                f"ENTITY_ID_TYPE must be one of {list(ENTITY_ID_TYPES)}, got {self.entity_id_type!r}"
            )

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {self.log_level!r}")

        if self.cache_ttl < 0:
            raise ValueError("CACHE_TTL must be >= 0 (0 disables expiry)")

        if self.remote_timeout <= 0 or self.probe_timeout <= 0:
            raise ValueError("REMOTE_TIMEOUT and PROBE_TIMEOUT must be positive")

        if "{id}" not in self.remote_entity_path:
            raise ValueError("REMOTE_ENTITY_PATH must contain an '{id}' placeholder")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
