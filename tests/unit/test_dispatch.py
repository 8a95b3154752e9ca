"""
Tests for family to lister dispatch.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pkginventory.config import InventoryConfig
from pkginventory.dispatch import (
    ListerKind,
    build_lister,
    list_packages,
    lister_for_family,
)
from pkginventory.errors import UnsupportedPlatformError
from pkginventory.listers import Package
from pkginventory.listers.brew import BrewLister
from pkginventory.listers.dpkg import DpkgLister
from pkginventory.listers.rpm import RpmLister


@pytest.mark.parametrize(
    "family,kind",
    [
        ("redhat", ListerKind.RPM),
        ("debian", ListerKind.DEBIAN),
        ("darwin", ListerKind.HOMEBREW),
        ("Darwin", ListerKind.HOMEBREW),
    ],
)
def test_lister_for_family(family: str, kind: ListerKind) -> None:
    assert lister_for_family(family) is kind


@pytest.mark.parametrize("family", ["windows", "suse", "arch", ""])
def test_unsupported_family(family: str) -> None:
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        lister_for_family(family)
    assert excinfo.value.family == family


def test_build_lister_uses_config_paths() -> None:
    config = InventoryConfig(
        rpm_binary="/opt/rpm",
        dpkg_status_path=Path("/tmp/status"),
        cellar_path=Path("/tmp/Cellar"),
    )

    rpm = build_lister(ListerKind.RPM, config)
    assert isinstance(rpm, RpmLister)
    assert rpm.binary_path == "/opt/rpm"

    dpkg = build_lister(ListerKind.DEBIAN, config)
    assert isinstance(dpkg, DpkgLister)
    assert dpkg.status_path == Path("/tmp/status")

    brew = build_lister(ListerKind.HOMEBREW, config)
    assert isinstance(brew, BrewLister)
    assert brew.cellar_path == Path("/tmp/Cellar")


@patch("pkginventory.dispatch.build_lister")
def test_list_packages_runs_one_lister(mock_build: MagicMock) -> None:
    mock_lister = MagicMock()
    mock_lister.name = "dpkg"
    mock_lister.list_packages.return_value = [Package(name="bash")]
    mock_build.return_value = mock_lister

    packages = list_packages("debian", InventoryConfig())

    assert packages == [Package(name="bash")]
    mock_build.assert_called_once()
    assert mock_build.call_args[0][0] is ListerKind.DEBIAN
    mock_lister.list_packages.assert_called_once_with()


def test_list_packages_for_cellar(tmp_path: Path) -> None:
    (tmp_path / "jq" / "1.7").mkdir(parents=True)
    packages = list_packages("darwin", InventoryConfig(cellar_path=tmp_path))
    assert [(p.name, p.version) for p in packages] == [("jq", "1.7")]
