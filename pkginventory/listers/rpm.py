"""
RPM lister for pkginventory.

Runs ``rpm -qa`` with a pipe-delimited query format and parses one package
per output line.
"""

import logging
import shlex
import subprocess
from datetime import datetime, timezone
from typing import List

from pkginventory.errors import CommandError, FormatError
from pkginventory.listers import BaseLister, Package, parse_int64, parse_uint64

logger = logging.getLogger("pkginventory.listers.rpm")

DEFAULT_RPM_BINARY = "/usr/bin/rpm"

QUERY_FORMAT = (
    "%{NAME}|%{VERSION}|%{RELEASE}|%{ARCH}|%{LICENSE}"
    "|%{INSTALLTIME}|%{SIZE}|%{SUMMARY}\\n"
)
FIELD_COUNT = 8


def _epoch_to_datetime(value: str) -> datetime:
    seconds = parse_int64(value)
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise FormatError(f"Install time '{value}' is out of range: {e}") from e


def parse_rpm_output(output: str) -> List[Package]:
    """
    Parse the output of ``rpm --qf QUERY_FORMAT -qa``.

    Args:
        output: Raw standard output of the query

    Returns:
        One package per non-blank line

    Raises:
        FormatError: if a line is short of fields or a number does not parse
    """
    packages: List[Package] = []
    for line in output.split("\n"):
        if not line.strip():
            continue

        # The summary is last and may itself contain the delimiter.
        fields = line.split("|", FIELD_COUNT - 1)
        if len(fields) < FIELD_COUNT:
            raise FormatError(
                f"Malformed line '{line}': expected {FIELD_COUNT} fields, "
                f"got {len(fields)}"
            )

        packages.append(
            Package(
                name=fields[0],
                version=fields[1],
                release=fields[2],
                arch=fields[3],
                license=fields[4],
                install_time=_epoch_to_datetime(fields[5]),
                size=parse_uint64(fields[6]),
                summary=fields[7],
            )
        )
    return packages


class RpmLister(BaseLister):
    """Lists packages from the RPM database."""

    name = "rpm"

    def __init__(self, binary_path: str = DEFAULT_RPM_BINARY):
        self.binary_path = binary_path

    def _query(self) -> str:
        command = [self.binary_path, "--qf", QUERY_FORMAT, "-qa"]
        cmd_str = " ".join(shlex.quote(str(arg)) for arg in command)
        logger.debug(f"Querying RPM database with command: {cmd_str}")

        try:
            result = subprocess.run(
                command,
                check=True,
                capture_output=True,
            )
        except FileNotFoundError as e:
            raise CommandError(f"`{self.binary_path}` command not found: {e}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise CommandError(
                f"Error running rpm -qa command (exit code {e.returncode}): {stderr}"
            ) from e
        except OSError as e:
            raise CommandError(f"Error running rpm -qa command: {e}") from e
        return result.stdout.decode("utf-8", errors="replace")

    def list_packages(self) -> List[Package]:
        packages = parse_rpm_output(self._query())
        logger.info(f"Found {len(packages)} RPM packages")
        return packages
