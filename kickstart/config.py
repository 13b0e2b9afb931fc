"""
Configuration and logging for kickstart.

Configuration is read from ~/.kickstartrc (JSON) or ~/.kickstartrc.toml,
merged over the defaults and finally overridden by KICKSTART_* environment
variables.
"""
import copy
import json
import logging
import os
from pathlib import Path

import toml
from rich.console import Console
from rich.logging import RichHandler

# Initialize Rich Console
console = Console()

# Configure logging to use RichHandler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)]
)

logger = logging.getLogger("rich")

ENV_PREFIX = "KICKSTART_"


def get_default_config():
    """Return the built-in configuration."""
    return {
        "templates": {
            "default_org": "preactjs-templates",
            "default_site": "github",
            "default_ref": "master",
        },
        "fetch": {
            "timeout_seconds": 30,
            "cache_dir": "~/.kickstart/cache",
        },
        "create": {
            "use_yarn": False,
            "init_git": False,
            "install": True,
        },
        "logging": {
            "level": "INFO",
            "format": "%(message)s",
        },
    }


def get_config_path(toml_format=False):
    """Path of the user configuration file."""
    name = ".kickstartrc.toml" if toml_format else ".kickstartrc"
    return Path(os.path.expanduser("~")) / name


def merge_configs(base, override):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base (dict): The base configuration.
        override (dict): Values that take precedence over ``base``.

    Returns:
        dict: A new merged dictionary; neither argument is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _coerce(value, current):
    if isinstance(current, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Ignoring non-integer override: {value}")
            return current
    return value


def _apply_env_overrides(config, prefix=ENV_PREFIX):
    """Override config values from KICKSTART_<SECTION>_<KEY> variables."""
    for section, values in config.items():
        if not isinstance(values, dict):
            continue
        for key, current in values.items():
            env_name = f"{prefix}{section}_{key}".upper()
            if env_name in os.environ:
                values[key] = _coerce(os.environ[env_name], current)
    return config


def load_config():
    """
    Load the effective configuration.

    Returns:
        dict: Defaults merged with the user file and environment overrides.
    """
    config = get_default_config()

    json_path = get_config_path()
    toml_path = get_config_path(toml_format=True)

    try:
        if json_path.exists():
            with open(json_path, "r", encoding="utf-8") as f:
                config = merge_configs(config, json.load(f))
        elif toml_path.exists():
            with open(toml_path, "r", encoding="utf-8") as f:
                config = merge_configs(config, toml.load(f))
    except (json.JSONDecodeError, toml.TomlDecodeError) as e:
        logger.warning(f"Ignoring malformed configuration file: {e}")

    return _apply_env_overrides(config)


def generate_config_example():
    """Write an example configuration next to the real one."""
    example_path = get_config_path().with_name(".kickstartrc.example")
    with open(example_path, "w", encoding="utf-8") as f:
        json.dump(get_default_config(), f, indent=2)
    console.print(f"An example configuration file has been saved to {example_path}")
    return example_path


def apply_logging_config(config, verbose=False):
    """Set the logger level and console message format from config, or DEBUG when verbose."""
    logging_cfg = config.get("logging", {})
    level_name = "DEBUG" if verbose else logging_cfg.get("level", "INFO")
    logger.setLevel(getattr(logging, str(level_name).upper(), logging.INFO))

    fmt = logging_cfg.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            if isinstance(handler, RichHandler):
                handler.setFormatter(logging.Formatter(fmt, datefmt="[%X]"))
