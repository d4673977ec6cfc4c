"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)


class SchemaConfig(BaseModel):
    """Optional constraints applied on top of the base schema."""

    unique_person_name: bool = False
    unique_document_code: bool = False


class Settings(BaseSettings):
    """Main configuration class."""

    # Application
    environment: str = Field(
        default="development",
        description="Environment: development, test, production"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    logfire_token: str = ""

    # Database connection
    db_driver: str = "postgresql+psycopg2"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "dossier"
    db_user: str = "dossier"
    db_password: str = ""
    database_dsn: str = Field(
        default="",
        description="Full SQLAlchemy URL, overrides the db_* fields when set"
    )
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Schema
    config_file: Path = Path("dossier.yaml")
    schema_options: SchemaConfig = Field(default_factory=SchemaConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_port")
    @classmethod
    def validate_db_port(cls, v: int) -> int:
        """Validate that the port is in the TCP range."""
        if not 0 < v < 65536:
            raise ValueError(f"Database port out of range: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        Uses database_dsn verbatim when provided, otherwise composes the URL
        from the driver, credentials and host settings. Credentials are
        escaped, so reserved characters in the password are safe.
        """
        if self.database_dsn:
            return self.database_dsn
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    def load_yaml_config(self) -> None:
        """Merge the 'schema' section of the YAML config file, if present."""
        config_path = self.config_file

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

        if not yaml_config:
            logger.warning(f"Empty config file: {config_path}")
            return

        if "schema" in yaml_config:
            section_dict = self.schema_options.model_dump()
            section_dict.update(yaml_config["schema"] or {})
            self.schema_options = SchemaConfig(**section_dict)

        logger.info(f"Loaded configuration from {config_path}")


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
