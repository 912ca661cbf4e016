"""
Configuration for LifeLog.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from lifelog.models.locale import Locale


class TransportConfig(BaseModel):
    """Provider transport configuration for native handles."""

    backend: str = "openai"  # openai, ollama
    # None lets each transport use its own default endpoint
    base_url: str | None = None
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout: float = 120.0


class ProviderConfig(BaseModel):
    """Credential and provider-family settings."""

    # Only usable for models of the first-party provider family
    default_api_key: str | None = None
    first_party_provider: str = "Google"


class SimulationConfig(BaseModel):
    """Delays applied by generic (simulated) handles, in seconds."""

    analysis_delay: float = 1.5
    chat_delay: float = 1.0


class LayoutConfig(BaseModel):
    """Viewport parameters for the circular graph layout."""

    width: float = 300.0
    height: float = 300.0
    radius: float = 100.0


class StoreConfig(BaseModel):
    """Record store configuration."""

    backend: str = "sqlite"  # sqlite, memory
    path: str = "data/lifelog.db"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    transport: TransportConfig = Field(default_factory=TransportConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    default_locale: Locale = Locale.ZH

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            LIFELOG_API_KEY: Default credential for the first-party provider family
            LIFELOG_FIRST_PARTY_PROVIDER: Provider name allowed to use the default key
            LIFELOG_TRANSPORT_BACKEND: Transport backend (openai, ollama)
            LIFELOG_TRANSPORT_BASE_URL: Transport base URL
            LIFELOG_TRANSPORT_TIMEOUT: Transport timeout in seconds
            LIFELOG_SIMULATION_ANALYSIS_DELAY: Generic analysis delay in seconds
            LIFELOG_SIMULATION_CHAT_DELAY: Generic chat delay in seconds
            LIFELOG_STORE_BACKEND: Record store backend (sqlite, memory)
            LIFELOG_STORE_PATH: SQLite database path
            LIFELOG_LOCALE: Default locale (zh, en)
            LIFELOG_LOG_LEVEL: Log level
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None or value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            transport=TransportConfig(
                backend=get_env("LIFELOG_TRANSPORT_BACKEND", "openai"),
                base_url=get_env("LIFELOG_TRANSPORT_BASE_URL"),
                temperature=get_env("LIFELOG_TRANSPORT_TEMPERATURE", 0.7),
                max_tokens=get_env("LIFELOG_TRANSPORT_MAX_TOKENS", 2000),
                timeout=get_env("LIFELOG_TRANSPORT_TIMEOUT", 120.0),
            ),
            provider=ProviderConfig(
                default_api_key=get_env("LIFELOG_API_KEY"),
                first_party_provider=get_env("LIFELOG_FIRST_PARTY_PROVIDER", "Google"),
            ),
            simulation=SimulationConfig(
                analysis_delay=get_env("LIFELOG_SIMULATION_ANALYSIS_DELAY", 1.5),
                chat_delay=get_env("LIFELOG_SIMULATION_CHAT_DELAY", 1.0),
            ),
            layout=LayoutConfig(
                width=get_env("LIFELOG_LAYOUT_WIDTH", 300.0),
                height=get_env("LIFELOG_LAYOUT_HEIGHT", 300.0),
                radius=get_env("LIFELOG_LAYOUT_RADIUS", 100.0),
            ),
            store=StoreConfig(
                backend=get_env("LIFELOG_STORE_BACKEND", "sqlite"),
                path=get_env("LIFELOG_STORE_PATH", "data/lifelog.db"),
            ),
            logging=LoggingConfig(
                level=get_env("LIFELOG_LOG_LEVEL", "INFO"),
                log_to_file=get_env("LIFELOG_LOG_TO_FILE", True),
                log_dir=get_env("LIFELOG_LOG_DIR", "logs"),
                file_rotation=get_env("LIFELOG_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("LIFELOG_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("LIFELOG_LOG_COMPRESSION", "zip"),
                serialize=get_env("LIFELOG_LOG_SERIALIZE", True),
            ),
            default_locale=Locale(get_env("LIFELOG_LOCALE", Locale.ZH.value)),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Env values that differ from defaults override YAML, field by field
        final_dict = {**config_dict}
        default = cls()
        for section in ("transport", "provider", "simulation", "layout", "store", "logging"):
            env_values = getattr(env_config, section).model_dump()
            default_values = getattr(default, section).model_dump()
            overrides = {
                key: value for key, value in env_values.items() if value != default_values[key]
            }
            if overrides:
                final_dict[section] = {**(config_dict.get(section) or {}), **overrides}

        if env_config.default_locale != default.default_locale:
            final_dict["default_locale"] = env_config.default_locale

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
