"""
Configuration for the image compression toolkit.
Provides defaults that work out-of-the-box, with environment overrides.
"""

import copy
import logging
import os
from typing import Dict, Any, Optional

from compression import CompressionOptions, JPEGCompressor


# Default configuration
DEFAULT_CONFIG = {
    # Resize and encode
    "compression": {
        "quality": 80,
        "max_width": 0,  # 0 = no limit
        "max_height": 0,  # 0 = no limit
    },

    # Size-targeted quality search
    "search": {
        "start_quality": 95,
        "quality_step": 5,
        "min_quality": 10,
    },

    # Compression targets offered in the UI (in KB)
    "compression_targets_kb": [30, 100, 500, 1000],

    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    },
}

# Loggers configured by setup_logging
LOGGER_NAMES = ("compression", "app")

# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    "IMGCOMPRESS_QUALITY": ("compression", "quality", int),
    "IMGCOMPRESS_MAX_WIDTH": ("compression", "max_width", int),
    "IMGCOMPRESS_MAX_HEIGHT": ("compression", "max_height", int),
    "IMGCOMPRESS_LOG_LEVEL": ("logging", "level", str),
}


def get_default_config() -> Dict[str, Any]:
    """Return a copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge override config into base config.

    Args:
        base: Base configuration dictionary
        override: Override values to apply

    Returns:
        Merged configuration
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def load_config(override: Optional[Dict[str, Any]] = None,
                environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Build the effective configuration.

    Defaults are merged with environment overrides, then with the
    explicit override dictionary.

    Args:
        override: Values that take precedence over everything else
        environ: Environment mapping (default: os.environ)

    Returns:
        Configuration dictionary

    Raises:
        ValueError: if an environment value cannot be converted
    """
    if environ is None:
        environ = os.environ

    env_config: Dict[str, Any] = {}
    for name, (section, key, cast) in ENV_OVERRIDES.items():
        if name in environ:
            try:
                value = cast(environ[name])
            except ValueError as exc:
                raise ValueError(f"Invalid value for {name}: {environ[name]!r}") from exc
            env_config.setdefault(section, {})[key] = value

    config = merge_configs(get_default_config(), env_config)
    if override:
        config = merge_configs(config, override)
    return config


def options_from_config(config: Dict[str, Any]) -> CompressionOptions:
    """Build CompressionOptions from the 'compression' section."""
    section = config.get("compression", {})
    return CompressionOptions(
        quality=section.get("quality", 80),
        max_width=section.get("max_width", 0),
        max_height=section.get("max_height", 0),
    )


def compressor_from_config(config: Dict[str, Any]) -> JPEGCompressor:
    """Build a JPEGCompressor from the 'search' section."""
    section = config.get("search", {})
    return JPEGCompressor(
        start_quality=section.get("start_quality", 95),
        quality_step=section.get("quality_step", 5),
        min_quality=section.get("min_quality", 10),
    )


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """Set up stream logging for the compression package and the app."""
    if config is None:
        config = load_config()

    section = config.get("logging", {})
    level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(section.get("format", DEFAULT_CONFIG["logging"]["format"])))

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
