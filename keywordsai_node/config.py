"""Settings for the Keywords AI node, read with pydantic-settings.

Values come from keyword arguments, then ``KEYWORDSAI_*`` environment
variables, then a ``.env`` file next to the package.

Groups:
    - API: api_key, base_url, request_timeout
    - Transport Retry: retry_max_attempts, retry_min_wait, retry_max_wait, retry_multiplier
    - Node Defaults: default_model, default_system_message, continue_on_fail
    - Logging: log_level, log_file_level, log_dir, log_file_name, log_json_format, log_max_bytes, log_backup_count

Example:
    >>> from keywordsai_node import config
    >>> config.get_settings().base_url
    'https://api.keywordsai.co/api'
    >>> # after editing KEYWORDSAI_* variables
    >>> config.reload_settings().retry_max_attempts
    1
"""

from pathlib import Path
from typing import Annotated

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
DEFAULT_BASE_URL = "https://api.keywordsai.co/api"


class KeywordsAISettings(BaseSettings):
    """Process-wide settings; the API key is optional here and checked when a client is built."""

    model_config = SettingsConfigDict(
        env_prefix="KEYWORDSAI_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: Annotated[float, Field(gt=0, description="Seconds")] = 60.0

    # 1 attempt means transient failures are not retried
    retry_max_attempts: Annotated[int, Field(gt=0)] = 1
    retry_min_wait: Annotated[float, Field(ge=0)] = 2
    retry_max_wait: Annotated[float, Field(ge=0)] = 30
    retry_multiplier: Annotated[float, Field(ge=0)] = 1

    default_model: str = "gpt-4o-mini"
    default_system_message: str = "You are a helpful assistant."
    continue_on_fail: bool = False

    log_level: str = "INFO"
    log_file_level: str = "DEBUG"
    log_dir: Path | None = None  # logs/ beside the package
    log_file_name: str = "keywordsai_node.log"
    log_json_format: bool = False
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5


settings = KeywordsAISettings()


def get_settings() -> KeywordsAISettings:
    """Return the current module-level settings."""
    return settings


def reload_settings() -> KeywordsAISettings:
    """Re-read environment and .env, replacing the module-level settings."""
    global settings
    settings = KeywordsAISettings()
    return settings
