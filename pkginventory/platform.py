"""
Platform detection helpers for pkginventory.

Centralizes macOS vs Linux differences and reduces the host to a coarse OS
family string (``redhat``, ``debian``, ``darwin``, ...) so the dispatcher
can pick a lister without scattering ``sys.platform`` checks.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pkginventory.errors import DetectionError

logger = logging.getLogger("pkginventory.platform")

DEFAULT_OS_RELEASE_PATH = "/etc/os-release"

_FAMILY_BY_ID: Dict[str, str] = {
    "redhat": "redhat",
    "rhel": "redhat",
    "centos": "redhat",
    "fedora": "redhat",
    "amzn": "redhat",
    "ol": "redhat",
    "rocky": "redhat",
    "almalinux": "redhat",
    "scientific": "redhat",
    "cloudlinux": "redhat",
    "debian": "debian",
    "ubuntu": "debian",
    "raspbian": "debian",
    "linuxmint": "debian",
    "pop": "debian",
    "elementary": "debian",
    "kali": "debian",
    "suse": "suse",
    "sles": "suse",
    "opensuse": "suse",
    "arch": "arch",
    "manjaro": "arch",
    "endeavouros": "arch",
    "alpine": "alpine",
    "gentoo": "gentoo",
}


def is_macos() -> bool:
    """Return True when running on macOS."""
    return sys.platform == "darwin"


def is_linux() -> bool:
    """Return True when running on Linux."""
    return sys.platform.startswith("linux")


def parse_os_release(path: Path) -> Dict[str, str]:
    """
    Parse an os-release file into a dictionary.

    Raises:
        DetectionError: if the file cannot be read
    """
    data: Dict[str, str] = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw_line in f:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                data[key.strip()] = value.strip().strip('"').strip("'")
    except (OSError, UnicodeDecodeError) as e:
        raise DetectionError(f"Error getting the OS from {path}: {e}") from e
    return data


def family_from_os_release(data: Dict[str, str]) -> str:
    """Resolve the OS family from parsed os-release ``ID`` and ``ID_LIKE``."""
    os_id = data.get("ID", "").lower()
    if not os_id:
        raise DetectionError("No OS info: os-release has no ID")

    candidates: List[str] = [os_id] + data.get("ID_LIKE", "").lower().split()
    for candidate in candidates:
        if candidate.startswith("opensuse"):
            candidate = "opensuse"
        if candidate in _FAMILY_BY_ID:
            return _FAMILY_BY_ID[candidate]
    return os_id


def detect_os_family(os_release_path: Optional[Path] = None) -> str:
    """
    Return the OS family of the running host.

    Args:
        os_release_path: os-release file consulted on Linux

    Raises:
        DetectionError: if the family cannot be determined
    """
    if is_macos():
        family = "darwin"
    elif is_linux():
        path = Path(os_release_path or DEFAULT_OS_RELEASE_PATH)
        family = family_from_os_release(parse_os_release(path))
    elif sys.platform.startswith("win"):
        family = "windows"
    else:
        family = sys.platform
    logger.debug(f"Detected OS family: {family}")
    return family
