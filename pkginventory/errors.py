"""
Exception hierarchy for pkginventory.

Every fatal condition raised by detection, dispatch, or a lister derives from
``PackageInventoryError`` so the CLI can report it and exit with status 1.
"""


class PackageInventoryError(Exception):
    """Base class for all fatal inventory errors."""


class DetectionError(PackageInventoryError):
    """The host OS family could not be determined."""


class UnsupportedPlatformError(PackageInventoryError):
    """The OS family is known but no lister exists for it."""

    def __init__(self, family: str):
        super().__init__(f"I don't know how to get packages on OS family '{family}'")
        self.family = family


class CommandError(PackageInventoryError):
    """An external package-query tool could not be run or failed."""


class ReadError(PackageInventoryError):
    """A file or directory could not be opened, read, or listed."""


class FormatError(PackageInventoryError):
    """Package metadata did not have the expected structure."""
