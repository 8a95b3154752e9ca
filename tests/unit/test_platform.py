"""Tests for the platform helpers module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pkginventory.errors import DetectionError
from pkginventory.platform import (
    detect_os_family,
    family_from_os_release,
    is_linux,
    is_macos,
    parse_os_release,
)


class TestIsMacos:
    def test_true_on_darwin(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert is_macos() is True

    def test_false_on_linux(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert is_macos() is False


class TestIsLinux:
    def test_true_on_linux(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert is_linux() is True

    def test_false_on_darwin(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert is_linux() is False


class TestParseOsRelease:
    def test_quotes_and_comments(self, tmp_path: Path) -> None:
        os_release = tmp_path / "os-release"
        os_release.write_text(
            '# comment\nNAME="Ubuntu"\nID=ubuntu\nID_LIKE=debian\n\nVERSION_ID=\'22.04\'\n'
        )
        assert parse_os_release(os_release) == {
            "NAME": "Ubuntu",
            "ID": "ubuntu",
            "ID_LIKE": "debian",
            "VERSION_ID": "22.04",
        }

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DetectionError):
            parse_os_release(tmp_path / "missing")


class TestFamilyFromOsRelease:
    @pytest.mark.parametrize(
        "data,family",
        [
            ({"ID": "fedora"}, "redhat"),
            ({"ID": "rhel", "ID_LIKE": "fedora"}, "redhat"),
            ({"ID": "amzn", "ID_LIKE": "centos rhel fedora"}, "redhat"),
            ({"ID": "debian"}, "debian"),
            ({"ID": "Ubuntu", "ID_LIKE": "debian"}, "debian"),
            ({"ID": "neon", "ID_LIKE": "ubuntu debian"}, "debian"),
            ({"ID": "opensuse-leap", "ID_LIKE": "suse opensuse"}, "suse"),
            ({"ID": "manjaro", "ID_LIKE": "arch"}, "arch"),
            ({"ID": "nixos"}, "nixos"),
        ],
    )
    def test_families(self, data: dict, family: str) -> None:
        assert family_from_os_release(data) == family

    def test_missing_id(self) -> None:
        with pytest.raises(DetectionError, match="No OS info"):
            family_from_os_release({"NAME": "Mystery"})


class TestDetectOsFamily:
    def test_darwin(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert detect_os_family() == "darwin"

    def test_windows(self) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "win32"
            assert detect_os_family() == "windows"

    def test_linux_reads_os_release(self, tmp_path: Path) -> None:
        os_release = tmp_path / "os-release"
        os_release.write_text("ID=centos\nID_LIKE=\"rhel fedora\"\n")
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert detect_os_family(os_release) == "redhat"

    def test_linux_without_os_release(self, tmp_path: Path) -> None:
        with patch("pkginventory.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            with pytest.raises(DetectionError):
                detect_os_family(tmp_path / "missing")
