#!/usr/bin/env python3
"""
Configuration Management for bankmerge

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

SUPPORTED_OUTPUT_FORMATS = ("csv", "ofx")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StoreConfig:
    """Location of the local payee/category store."""

    store_dir: Path
    payees_file_name: str = "payees.json"
    categories_file_name: str = "categories.json"

    @property
    def payees_file(self) -> Path:
        return self.store_dir / self.payees_file_name

    @property
    def categories_file(self) -> Path:
        return self.store_dir / self.categories_file_name


@dataclass
class ConvertConfig:
    """Defaults for the convert command."""

    default_format: str = "csv"
    output_name: str = "converted_transactions"


@dataclass
class Config:
    """
    Main configuration class for bankmerge.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment
    data_dir: Path

    # Component configurations
    store: StoreConfig
    convert: ConvertConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BANKMERGE_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_bankmerge"
            data_dir = Path(os.getenv("BANKMERGE_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("BANKMERGE_DATA_DIR", "~/.bankmerge")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        store = StoreConfig(store_dir=data_dir)

        convert = ConvertConfig(
            default_format=os.getenv("BANKMERGE_OUTPUT_FORMAT", "csv").lower(),
            output_name=os.getenv("BANKMERGE_OUTPUT_NAME", "converted_transactions"),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            store=store,
            convert=convert,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.convert.default_format not in SUPPORTED_OUTPUT_FORMATS:
            errors.append(
                f"BANKMERGE_OUTPUT_FORMAT must be one of {', '.join(SUPPORTED_OUTPUT_FORMATS)}, "
                f"got {self.convert.default_format!r}"
            )

        if not self.convert.output_name.strip():
            errors.append("BANKMERGE_OUTPUT_NAME must not be empty")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Spreadsheet reader warnings about unsupported styles are noise for us
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("openpyxl").setLevel(logging.ERROR)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for display."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            elif is_dataclass(field_value):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    if isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value
                result[field_name] = nested_dict
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir
