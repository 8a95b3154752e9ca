"""JSON-lines serialization of package records."""

from typing import Iterable, Iterator

import orjson

from pkginventory.listers import Package


def format_package(package: Package) -> str:
    """Serialize one package as a single-line JSON object."""
    return orjson.dumps(package.to_dict()).decode("utf-8")


def format_packages(packages: Iterable[Package]) -> Iterator[str]:
    """Yield one JSON line per package, preserving order."""
    for package in packages:
        yield format_package(package)
