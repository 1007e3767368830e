"""Configuration loading.

Handles building the configuration from:
- Built-in defaults
- An optional YAML settings file ($DOTBOOT_CONFIG or
  ~/.config/dotboot/config.yml)
- Environment variables (DOTFILES_REPO, DOTFILES_DIR, BOOSTER_REPO,
  BOOSTER_VERSION, SKIP_CHECKSUM)

Later layers override earlier ones.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from dotboot.config.models import BootstrapConfig
from dotboot.core.logging import get_logger

LOGGER = get_logger(__name__)

CONFIG_ENV = "DOTBOOT_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/dotboot/config.yml")

ENV_DOTFILES_REPO = "DOTFILES_REPO"
ENV_DOTFILES_DIR = "DOTFILES_DIR"
ENV_BOOSTER_REPO = "BOOSTER_REPO"
ENV_BOOSTER_VERSION = "BOOSTER_VERSION"
ENV_SKIP_CHECKSUM = "SKIP_CHECKSUM"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

VALID_TOP_LEVEL_KEYS = {"dotfiles", "booster", "skip_checksum"}
VALID_DOTFILES_KEYS = {"repo", "dir"}
VALID_BOOSTER_KEYS = {"repo", "version", "checksums"}


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BootstrapConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. Environment variables
    2. Settings file (explicit path, $DOTBOOT_CONFIG, or the default path)
    3. Built-in defaults

    Args:
        config_path: Optional explicit settings file path.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        BootstrapConfig instance.

    Raises:
        ConfigError: If an explicitly requested settings file is missing,
            or a settings file is invalid.
    """
    if environ is None:
        environ = os.environ

    config = BootstrapConfig()

    settings_path, explicit = _resolve_settings_path(config_path, environ)
    if settings_path is not None:
        if settings_path.exists():
            data = load_yaml_file(settings_path, environ)
            validate_config(data, source=str(settings_path))
            apply_settings(config, data)
            config.sources.append(f"file:{settings_path}")
            LOGGER.debug(f"Loaded settings from {settings_path}")
        elif explicit:
            raise ConfigError(f"Config file not found: {settings_path}")

    apply_environment(config, environ)
    LOGGER.debug(f"Config loaded from sources: {config.sources or ['defaults']}")
    return config


def _resolve_settings_path(
    config_path: Optional[Path],
    environ: Mapping[str, str],
) -> tuple[Optional[Path], bool]:
    if config_path is not None:
        return config_path.expanduser(), True
    env_path = environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def load_yaml_file(path: Path, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load a YAML settings file with ${VAR} expansion.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping: {path}")
    return expand_env_vars(data, os.environ if environ is None else environ)


def expand_env_vars(value: Any, environ: Mapping[str, str]) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values."""
    if isinstance(value, str):

        def replace(match: re.Match) -> str:
            name, default = match.group(1), match.group(2)
            return environ.get(name, default if default is not None else "")

        return ENV_VAR_PATTERN.sub(replace, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v, environ) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v, environ) for v in value]
    return value


def validate_config(data: Dict[str, Any], source: str) -> None:
    """Validate the structure of a settings mapping.

    Raises:
        ConfigError: On unknown keys or wrongly typed sections.
    """
    unknown = set(data) - VALID_TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"{source}: unknown key(s): {', '.join(sorted(unknown))}")

    sections = (("dotfiles", VALID_DOTFILES_KEYS), ("booster", VALID_BOOSTER_KEYS))
    for section, valid_keys in sections:
        value = data.get(section)
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ConfigError(f"{source}: '{section}' must be a mapping")
        unknown = set(value) - valid_keys
        if unknown:
            raise ConfigError(
                f"{source}: unknown key(s) in '{section}': {', '.join(sorted(unknown))}"
            )

    checksums = (data.get("booster") or {}).get("checksums")
    if checksums is not None:
        if not isinstance(checksums, dict):
            raise ConfigError(f"{source}: 'booster.checksums' must be a mapping")
        for key, digest in checksums.items():
            if not isinstance(digest, str):
                raise ConfigError(f"{source}: checksum for '{key}' must be a string")

    skip = data.get("skip_checksum")
    if skip is not None and not isinstance(skip, bool):
        raise ConfigError(f"{source}: 'skip_checksum' must be true or false")


def apply_settings(config: BootstrapConfig, data: Dict[str, Any]) -> None:
    """Apply a validated settings mapping onto the configuration."""
    dotfiles = data.get("dotfiles") or {}
    if dotfiles.get("repo"):
        config.dotfiles.repo = str(dotfiles["repo"])
    if dotfiles.get("dir"):
        config.dotfiles.dir = Path(str(dotfiles["dir"])).expanduser()

    booster = data.get("booster") or {}
    if booster.get("repo"):
        config.booster.repo = str(booster["repo"])
    if booster.get("version"):
        config.booster.version = str(booster["version"])
    if booster.get("checksums"):
        config.booster.checksums.update(booster["checksums"])

    if "skip_checksum" in data:
        config.skip_checksum = bool(data["skip_checksum"])


def apply_environment(config: BootstrapConfig, environ: Mapping[str, str]) -> None:
    """Apply environment variable overrides onto the configuration."""
    applied = []

    if environ.get(ENV_DOTFILES_REPO):
        config.dotfiles.repo = environ[ENV_DOTFILES_REPO]
        applied.append(ENV_DOTFILES_REPO)
    if environ.get(ENV_DOTFILES_DIR):
        config.dotfiles.dir = Path(environ[ENV_DOTFILES_DIR]).expanduser()
        applied.append(ENV_DOTFILES_DIR)
    if environ.get(ENV_BOOSTER_REPO):
        config.booster.repo = environ[ENV_BOOSTER_REPO]
        applied.append(ENV_BOOSTER_REPO)
    if environ.get(ENV_BOOSTER_VERSION):
        config.booster.version = environ[ENV_BOOSTER_VERSION]
        applied.append(ENV_BOOSTER_VERSION)
    if ENV_SKIP_CHECKSUM in environ:
        # Only the exact value "1" opts out
        config.skip_checksum = environ[ENV_SKIP_CHECKSUM] == "1"
        applied.append(ENV_SKIP_CHECKSUM)

    if applied:
        config.sources.append(f"env:{','.join(applied)}")
