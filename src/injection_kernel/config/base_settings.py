# src/injection_kernel/config/base_settings.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """
    Runtime knobs for the registry and its logging.
    Read from INJECTION_* environment variables or a .env file.
    """

    log_level: str = "WARNING"
    log_registrations: bool = False
    warn_on_key_collision: bool = True

    model_config = SettingsConfigDict(
        env_prefix="INJECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def LOG_LEVEL(self) -> str:
        level = (self.log_level or "").upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            return "WARNING"
        return level


@lru_cache()
def get_settings() -> RegistrySettings:
    """Cached settings instance shared by the default registry."""
    return RegistrySettings()
