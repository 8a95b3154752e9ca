"""
Family to lister dispatch for pkginventory.

The set of listers is closed: each supported OS family maps to exactly one
``ListerKind`` and exactly one lister runs per invocation.
"""

import logging
from enum import Enum
from typing import List

from pkginventory.config import InventoryConfig
from pkginventory.errors import UnsupportedPlatformError
from pkginventory.listers import BaseLister, Package
from pkginventory.listers.brew import BrewLister
from pkginventory.listers.dpkg import DpkgLister
from pkginventory.listers.rpm import RpmLister

logger = logging.getLogger("pkginventory.dispatch")


class ListerKind(Enum):
    """Package-manager families with a lister."""

    RPM = "rpm"
    DEBIAN = "debian"
    HOMEBREW = "homebrew"


def lister_for_family(family: str) -> ListerKind:
    """
    Map an OS family to its lister kind.

    Raises:
        UnsupportedPlatformError: for any family other than redhat, debian, darwin
    """
    normalized = family.strip().lower()
    if normalized == "redhat":
        return ListerKind.RPM
    if normalized == "debian":
        return ListerKind.DEBIAN
    if normalized == "darwin":
        return ListerKind.HOMEBREW
    raise UnsupportedPlatformError(family)


def build_lister(kind: ListerKind, config: InventoryConfig) -> BaseLister:
    """Instantiate the lister for *kind* using the paths from *config*."""
    if kind is ListerKind.RPM:
        return RpmLister(binary_path=config.rpm_binary)
    if kind is ListerKind.DEBIAN:
        return DpkgLister(status_path=config.dpkg_status_path)
    return BrewLister(cellar_path=config.cellar_path)


def list_packages(family: str, config: InventoryConfig) -> List[Package]:
    """Run the single lister that handles *family* and return its packages."""
    kind = lister_for_family(family)
    lister = build_lister(kind, config)
    logger.info(f"Listing packages for OS family '{family}' with {lister.name}")
    return lister.list_packages()
