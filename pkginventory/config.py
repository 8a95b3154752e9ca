"""
Configuration file support for pkginventory.

Loads settings from ``~/.config/pkginventory/config.yaml`` (or
``$XDG_CONFIG_HOME/pkginventory/config.yaml``) and exposes them as a typed
dataclass that the CLI can merge with command-line flags.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pkginventory.listers.brew import DEFAULT_CELLAR_PATH
from pkginventory.listers.dpkg import DEFAULT_STATUS_PATH
from pkginventory.listers.rpm import DEFAULT_RPM_BINARY
from pkginventory.platform import DEFAULT_OS_RELEASE_PATH

logger = logging.getLogger("pkginventory.config")

FAMILY_ENV_VAR = "PKGINVENTORY_FAMILY"


def default_config_path() -> Path:
    """Return the default configuration file path.

    Uses ``$XDG_CONFIG_HOME/pkginventory/config.yaml`` when set, otherwise
    falls back to ``~/.config/pkginventory/config.yaml``.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pkginventory" / "config.yaml"
    return Path.home() / ".config" / "pkginventory" / "config.yaml"


def _path(value: Any, default: str) -> Path:
    if not value:
        return Path(default)
    return Path(str(value)).expanduser()


@dataclass
class InventoryConfig:
    """Top-level configuration loaded from the YAML file."""

    os_family: Optional[str] = None
    os_release_path: Path = Path(DEFAULT_OS_RELEASE_PATH)
    rpm_binary: str = DEFAULT_RPM_BINARY
    dpkg_status_path: Path = Path(DEFAULT_STATUS_PATH)
    cellar_path: Path = Path(DEFAULT_CELLAR_PATH)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryConfig":
        """Construct an ``InventoryConfig`` from a parsed YAML dictionary."""
        if not isinstance(data, dict):
            logger.warning("Ignoring config that is not a mapping: %s", data)
            return cls()

        family = data.get("os_family")
        return cls(
            os_family=str(family).lower() if family else None,
            os_release_path=_path(data.get("os_release_path"), DEFAULT_OS_RELEASE_PATH),
            rpm_binary=str(data.get("rpm_binary") or DEFAULT_RPM_BINARY),
            dpkg_status_path=_path(data.get("dpkg_status_path"), DEFAULT_STATUS_PATH),
            cellar_path=_path(data.get("cellar_path"), DEFAULT_CELLAR_PATH),
        )

    @classmethod
    def from_file(cls, path: Path) -> "InventoryConfig":
        """Read a YAML file and return an ``InventoryConfig``.

        Returns a default config on any error.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f.read())
            if data is None:
                return cls()
            return cls.from_dict(data)
        except (IOError, yaml.YAMLError) as e:
            logger.error("Failed to load config from %s: %s", path, e)
            return cls()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "InventoryConfig":
        """Main entry point: load config from *config_path* or the default location.

        Returns a default config if the file does not exist. The
        ``PKGINVENTORY_FAMILY`` environment variable overrides ``os_family``.
        """
        path = config_path or default_config_path()
        config = cls.from_file(path) if path.exists() else cls()

        env_family = os.environ.get(FAMILY_ENV_VAR)
        if env_family:
            config.os_family = env_family.lower()
        return config
