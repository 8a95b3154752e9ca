"""
Debian lister for pkginventory.

Parses the dpkg status file, a sequence of RFC 822 style ``Key: value``
blocks separated by blank lines.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from pkginventory.errors import FormatError, ReadError
from pkginventory.listers import BaseLister, Package, parse_uint64

logger = logging.getLogger("pkginventory.listers.dpkg")

DEFAULT_STATUS_PATH = "/var/lib/dpkg/status"


class ParserState(Enum):
    """States of the status file parser."""

    ACCUMULATING_FIELDS = "accumulating_fields"


class StatusParser:
    """
    Incremental parser for dpkg status blocks.

    A blank line completes the record being accumulated and starts a new one.
    Continuation lines (leading whitespace) are skipped, so multi-line fields
    keep only their first line. A block that is not followed by a blank line
    is never completed.
    """

    def __init__(self) -> None:
        self.state = ParserState.ACCUMULATING_FIELDS
        self.packages: List[Package] = []
        self._current = Package(name="")
        self._has_fields = False

    def feed(self, line: str) -> None:
        """Process a single line, without its line terminator."""
        if not line.strip():
            self._flush()
            return
        if line[0] in " \t":
            return

        key, sep, value = line.partition(":")
        if not sep:
            raise FormatError(f"The following line has no ':' separator: '{line}'")
        value = value.strip()

        field = key.lower()
        if field == "package":
            self._current.name = value
        elif field == "architecture":
            self._current.arch = value
        elif field == "version":
            self._current.version = value
        elif field == "description":
            self._current.summary = value
        elif field == "installed-size":
            self._current.size = parse_uint64(value)
        else:
            return
        self._has_fields = True

    def _flush(self) -> None:
        self.packages.append(self._current)
        self._current = Package(name="")
        self._has_fields = False

    def finish(self) -> List[Package]:
        """Return the completed records, dropping any unterminated block."""
        if self._has_fields:
            logger.debug(
                f"Dropping unterminated trailing record '{self._current.name}'"
            )
        return self.packages


def parse_status_lines(lines: Iterable[str]) -> List[Package]:
    """Parse status file lines (terminators are stripped) into packages."""
    parser = StatusParser()
    for line in lines:
        line = line.rstrip("\n")
        if line.endswith("\r"):
            line = line[:-1]
        parser.feed(line)
    return parser.finish()


class DpkgLister(BaseLister):
    """Lists packages recorded in the dpkg status file."""

    name = "dpkg"

    def __init__(self, status_path: Optional[Path] = None):
        self.status_path = Path(status_path or DEFAULT_STATUS_PATH)

    def list_packages(self) -> List[Package]:
        logger.debug(f"Reading dpkg status file {self.status_path}")
        try:
            with open(
                self.status_path, "r", encoding="utf-8", errors="replace", newline="\n"
            ) as f:
                packages = parse_status_lines(f)
        except FileNotFoundError as e:
            raise ReadError(f"Error opening '{self.status_path}': {e}") from e
        except OSError as e:
            raise ReadError(f"Error reading '{self.status_path}': {e}") from e

        logger.info(f"Found {len(packages)} dpkg packages")
        return packages
