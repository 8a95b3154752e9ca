"""
Lister package for pkginventory.

This module provides the shared ``Package`` record and the base class for
listers. Implementations for each package-manager family (RPM, dpkg,
Homebrew) live in the submodules.
"""

import abc
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pkginventory.errors import FormatError

_UNSIGNED_RE = re.compile(r"[0-9]{1,20}")
_SIGNED_RE = re.compile(r"[+-]?[0-9]{1,19}")

UINT64_MAX = 2**64 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass
class Package:
    """Represents one installed package.

    Fields a package manager cannot provide are left as ``None``, which is
    distinct from an empty string reported by the package manager itself.
    """

    name: str
    version: Optional[str] = None
    release: Optional[str] = None
    arch: Optional[str] = None
    license: Optional[str] = None
    install_time: Optional[datetime] = None
    size: Optional[int] = None
    summary: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed by its serialized field names."""
        return {
            "Name": self.name,
            "Version": self.version,
            "Release": self.release,
            "Arch": self.arch,
            "License": self.license,
            "InstallTime": self.install_time,
            "Size": self.size,
            "Summary": self.summary,
            "URL": self.url,
        }


class BaseLister(abc.ABC):
    """Base class for package listers."""

    name: str = ""

    @abc.abstractmethod
    def list_packages(self) -> List[Package]:
        """
        Discover every installed package.

        Returns:
            Packages in the order they were discovered

        Raises:
            PackageInventoryError: on any failure; no partial results are returned
        """
        pass


def parse_uint64(value: str) -> int:
    """Parse a base-10 unsigned 64-bit integer, raising ``FormatError``."""
    if not _UNSIGNED_RE.fullmatch(value) or int(value) > UINT64_MAX:
        raise FormatError(f"Error converting '{value}' to an unsigned integer")
    return int(value)


def parse_int64(value: str) -> int:
    """Parse a base-10 signed 64-bit integer, raising ``FormatError``."""
    if not _SIGNED_RE.fullmatch(value):
        raise FormatError(f"Error converting '{value}' to an integer")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise FormatError(f"Error converting '{value}' to an integer: out of range")
    return number
