import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by UNMESSY_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("UNMESSY_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Unmessy"
    version: str = "1.1.0"
    description: str = "Email normalization and verification for CRM pipelines"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter)."""

    url: str = "sqlite+aiosqlite:///./unmessy.db"
    echo: bool = False
    auto_migrate: bool = True  # Run Alembic migrations on startup


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from UNMESSY_LOG_FILE env var."""
        return os.environ.get("UNMESSY_LOG_FILE")


class OracleConfig(BaseModel):
    """External verification oracle (ZeroBounce) settings."""

    enabled: bool = False
    api_key: str = ""
    base_url: str = "https://api.zerobounce.net/v2/validate"
    max_retries: int = Field(default=1, ge=0, le=3)
    backoff_base: float = Field(default=0.2, ge=0)  # Seconds; doubles per retry


class TimeoutsConfig(BaseModel):
    """Per-stage time budgets, in seconds."""

    cache: float = Field(default=1.5, gt=0)
    oracle: float = Field(default=3.0, gt=0)
    oracle_retry: float = Field(default=4.0, gt=0)  # Longer budget for the retry attempt
    validation: float = Field(default=7.0, gt=0)  # Overall deadline of one validation
    persistence: float = Field(default=2.0, gt=0)
    batch: float = Field(default=5.0, gt=0)  # Overall deadline of one batch
    batch_item: float = Field(default=2.0, gt=0)  # Upper bound of a batch item's slice
    reserve: float = Field(default=0.05, ge=0)  # Kept back from collaborators to resolve in time

    @model_validator(mode="after")
    def check_retry_budget(self) -> Self:
        if self.oracle_retry < self.oracle:
            raise ValueError("timeouts.oracle_retry must not be shorter than timeouts.oracle")
        return self


class NormalizationConfig(BaseModel):
    """Address normalization switches."""

    remove_aliases: bool = True  # Strip "+tag" for alias-aware providers
    normalize_country_tlds: bool = True  # example.comau -> example.com.au


class CacheConfig(BaseModel):
    """Known-good cache settings."""

    backend: Literal["sql", "redis", "memory"] = "sql"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "unmessy:known-good:"
    freshness_days: int = Field(default=7, ge=0)  # Hits younger than this short-circuit
    ttl_days: int = Field(default=30, gt=0)
    memory_max_entries: int = Field(default=10_000, gt=0)  # In-memory backend only


class DomainListsConfig(BaseModel):
    """Extra domains merged into the static allow/deny tables."""

    allow: list[str] = []
    deny: list[str] = []


class CheckIdConfig(BaseModel):
    """Check identifier layout."""

    client_id: str = "00001"  # Tenant embedded in every check id
    version: str = "100"

    @model_validator(mode="after")
    def check_digits(self) -> Self:
        if not re.fullmatch(r"\d{5}", self.client_id):
            raise ValueError("check_id.client_id must be exactly five digits")
        if not re.fullmatch(r"\d{3}", self.version):
            raise ValueError("check_id.version must be exactly three digits")
        return self


class ValidationConfig(BaseModel):
    """Orchestrator settings."""

    recursion_budget_fraction: float = Field(default=0.8, gt=0, lt=1)


class BatchConfig(BaseModel):
    """Batch endpoint settings."""

    max_size: int = Field(default=100, gt=0)


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    oracle: OracleConfig = OracleConfig()
    timeouts: TimeoutsConfig = TimeoutsConfig()
    normalization: NormalizationConfig = NormalizationConfig()
    cache: CacheConfig = CacheConfig()
    domains: DomainListsConfig = DomainListsConfig()
    check_id: CheckIdConfig = CheckIdConfig()
    validation: ValidationConfig = ValidationConfig()
    batch: BatchConfig = BatchConfig()

    model_config = {
        "env_prefix": "UNMESSY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows UNMESSY_ORACLE__API_KEY override
    }

    @model_validator(mode="after")
    def check_oracle_credentials(self) -> Self:
        """An enabled oracle without a credential would fail every call."""
        if self.oracle.enabled and not self.oracle.api_key:
            raise ValueError("oracle.enabled requires oracle.api_key")
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - UNMESSY_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup, before other modules
    are imported to ensure all loggers pick up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
