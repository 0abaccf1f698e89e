"""Configuration loading and parsing for setup-mac."""

import os
from pathlib import Path

import yaml

from setupmac.config.models import ConfigOverrides, SetupConfig
from setupmac.config.presets import get_preset
from setupmac.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "setup-mac.yaml"
ENV_PREFIX = "SETUPMAC_"


def load_config(
    config_file: str = "",
    preset: str = "",
    overrides: ConfigOverrides | None = None,
) -> SetupConfig:
    """Load configuration from file, preset, or defaults.

    Args:
        config_file: Path to YAML configuration file (optional)
        preset: Name of preset to use (optional)
        overrides: Configuration overrides from CLI/env (optional)

    Returns:
        Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
        FileNotFoundError: If specified config file doesn't exist
    """
    config: SetupConfig

    if preset:
        logger.info("Loading preset", preset=preset)
        config = get_preset(preset)
    elif config_file:
        config = _load_from_file(Path(config_file))
    else:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            config = _load_from_file(default_path)
        else:
            logger.info("No config file found, using 'full' preset")
            config = get_preset("full")

    if overrides:
        config.overrides = overrides
        _apply_overrides(config, overrides)

    return config


def _load_from_file(path: Path) -> SetupConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is invalid YAML or doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration file", path=str(path))

    try:
        with path.open("r") as f:
            data = yaml.safe_load(f)

        # Treat empty files as empty configuration
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a YAML mapping")

        return SetupConfig.model_validate(data)

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to parse configuration: {e}") from e


def _apply_overrides(config: SetupConfig, overrides: ConfigOverrides) -> None:
    """Apply configuration overrides to a config object in place.

    Args:
        config: Configuration to modify
        overrides: Override values to apply
    """
    for name in overrides.skip_steps:
        if name not in config.skip:
            config.skip.append(name)

    if overrides.profile_path:
        config.profile.path = overrides.profile_path

    if overrides.docker_dmg_url:
        config.docker.dmg_url = overrides.docker_dmg_url

    if overrides.launch_wait is not None:
        config.ollama.launch_wait = overrides.launch_wait


def get_env_overrides() -> ConfigOverrides:
    """Get configuration overrides from environment variables.

    Environment variables are prefixed with SETUPMAC_ (e.g. SETUPMAC_SKIP_STEPS).

    Returns:
        ConfigOverrides populated from environment variables

    Raises:
        ValueError: If SETUPMAC_LAUNCH_WAIT is not a number
    """

    def get_str(key: str) -> str:
        return os.getenv(f"{ENV_PREFIX}{key.upper()}", "")

    def get_list(key: str) -> list[str]:
        val = get_str(key)
        return [item.strip() for item in val.split(",") if item.strip()]

    def get_float(key: str) -> float | None:
        val = get_str(key)
        if not val:
            return None
        try:
            return float(val)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}{key.upper()} must be a number, got '{val}'") from None

    return ConfigOverrides(
        skip_steps=get_list("skip_steps"),
        profile_path=get_str("profile_path"),
        docker_dmg_url=get_str("docker_dmg_url"),
        launch_wait=get_float("launch_wait"),
    )
