"""
Homebrew lister for pkginventory.

Walks the Homebrew cellar (``<cellar>/<name>/<version>/``) and reads the
description and homepage from the formula copy Homebrew keeps at
``<version>/.brew/<name>.rb``.
"""

import logging
import stat
from datetime import datetime, timezone
from itertools import islice
from pathlib import Path
from typing import List, Optional, Tuple

from pkginventory.errors import ReadError
from pkginventory.listers import BaseLister, Package

logger = logging.getLogger("pkginventory.listers.brew")

DEFAULT_CELLAR_PATH = "/usr/local/Cellar"

FORMULA_DIR = ".brew"
FORMULA_SUFFIX = ".rb"
# Only the head of the formula is scanned; desc and homepage come first.
FORMULA_SCAN_LINES = 15
DESC_MARKER = "  desc "
HOMEPAGE_MARKER = "  homepage "


def _marker_value(line: str, marker: str) -> str:
    return line[len(marker) :].strip().strip('"')


def read_formula_metadata(formula_path: Path) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract ``desc`` and ``homepage`` from the first lines of a formula.

    Args:
        formula_path: Path to the ``.rb`` file

    Returns:
        Tuple of (summary, url); either is None when not found

    Raises:
        FileNotFoundError: if the formula file does not exist
        OSError: on any other read failure
    """
    summary: Optional[str] = None
    url: Optional[str] = None
    with open(formula_path, "r", encoding="utf-8", errors="replace") as f:
        for line in islice(f, FORMULA_SCAN_LINES):
            line = line.rstrip("\r\n")
            if summary is None and line.startswith(DESC_MARKER):
                summary = _marker_value(line, DESC_MARKER)
            elif url is None and line.startswith(HOMEPAGE_MARKER):
                url = _marker_value(line, HOMEPAGE_MARKER)
    return summary, url


def _subdirectories(path: Path) -> List[Path]:
    try:
        return sorted(entry for entry in path.iterdir() if entry.is_dir())
    except OSError as e:
        raise ReadError(f"Error reading directory {path}: {e}") from e


class BrewLister(BaseLister):
    """Lists formulae installed in a Homebrew cellar."""

    name = "homebrew"

    def __init__(self, cellar_path: Optional[Path] = None):
        self.cellar_path = Path(cellar_path or DEFAULT_CELLAR_PATH)

    def _enrich(self, package: Package, version_dir: Path) -> None:
        formula_path = version_dir / FORMULA_DIR / f"{package.name}{FORMULA_SUFFIX}"
        try:
            package.summary, package.url = read_formula_metadata(formula_path)
        except (FileNotFoundError, NotADirectoryError):
            # Not every keg carries its formula; the record stays unenriched.
            logger.debug(f"No formula file at {formula_path}")
        except OSError as e:
            raise ReadError(f"Error reading {formula_path}: {e}") from e

    def list_packages(self) -> List[Package]:
        try:
            cellar_stat = self.cellar_path.stat()
        except OSError as e:
            raise ReadError(
                f"Homebrew cellar not found in {self.cellar_path}: {e}"
            ) from e
        if not stat.S_ISDIR(cellar_stat.st_mode):
            raise ReadError(f"{self.cellar_path} is not a directory")

        packages: List[Package] = []
        for package_dir in _subdirectories(self.cellar_path):
            for version_dir in _subdirectories(package_dir):
                try:
                    mtime = version_dir.stat().st_mtime
                except OSError as e:
                    raise ReadError(f"Error reading {version_dir}: {e}") from e

                package = Package(
                    name=package_dir.name,
                    version=version_dir.name,
                    install_time=datetime.fromtimestamp(mtime, tz=timezone.utc),
                )
                self._enrich(package, version_dir)
                packages.append(package)

        logger.info(f"Found {len(packages)} Homebrew packages")
        return packages
