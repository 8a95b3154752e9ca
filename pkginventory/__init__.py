"""
pkginventory - list the software packages installed on this host.

Detects the package-manager family and emits one JSON record per package.
"""

from importlib.metadata import version as _version

__version__ = _version("pkginventory")
