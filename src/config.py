"""Configuration Management with Pydantic.

This module implements the configuration model using Pydantic for parsing and
validation of YAML/JSON configuration files with environment variable overrides.
"""

import math
import os
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

logger = structlog.get_logger(__name__)

ENV_PREFIX = "CYCLECHECK_"


class CycleCheckConfig(BaseModel):
    """Cycle checker configuration.

    Attributes:
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render logs as JSON (True) or for the console (False)
        default_edge_weight: Weight given to edges a graph file lists without one
    """

    logging_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON",
    )
    default_edge_weight: float = Field(
        default=1.0,
        description="Weight for edges declared without one",
    )

    @field_validator("logging_level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept logging levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("default_edge_weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        """Validate that the default edge weight is finite.

        Raises:
            ValueError: If the weight is NaN or infinite
        """
        if not math.isfinite(v):
            msg = "default_edge_weight must be a finite number"
            raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CycleCheckConfig":
        """Load configuration from a YAML (or JSON) file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed and validated CycleCheckConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If the file is empty, not valid YAML, or fails validation
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if not config_data:
            msg = "Configuration file is empty"
            raise ValueError(msg)
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls(**cls._apply_env_overrides(config_data))

        logger.info(
            "configuration_loaded",
            logging_level=config.logging_level,
            json_logs=config.json_logs,
        )

        return config

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern CYCLECHECK_<KEY>, e.g.
        CYCLECHECK_LOGGING_LEVEL or CYCLECHECK_JSON_LOGS.

        Args:
            config_data: Base configuration dictionary

        Returns:
            New configuration dictionary with environment overrides applied
        """
        overridden = dict(config_data)

        for key in cls.model_fields:
            env_var = f"{ENV_PREFIX}{key.upper()}"
            value = os.environ.get(env_var)
            if value is None:
                continue

            # pydantic coerces "true"/"0"/"2.5" strings for bool and float fields
            overridden[key] = value
            logger.debug("env_override_applied", env_var=env_var, config_key=key)

        return overridden


def load_config(config_path: str | Path | None = None) -> CycleCheckConfig:
    """Load configuration from a file, or from defaults when no file is given.

    Environment overrides apply in both cases.

    Args:
        config_path: Optional path to a YAML/JSON configuration file

    Returns:
        Loaded CycleCheckConfig instance
    """
    if config_path is None:
        return CycleCheckConfig(**CycleCheckConfig._apply_env_overrides({}))
    return CycleCheckConfig.from_yaml(config_path)


__all__ = ["CycleCheckConfig", "load_config"]
