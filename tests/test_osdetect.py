"""
Tests for host detection: os-release parsing and family selection.
"""

import textwrap
from pathlib import Path

import pytest

from zsh_bootstrap.errors import UnsupportedOSError
from zsh_bootstrap.lib.osdetect import (
    OSFamily,
    build_profile,
    classify,
    detect_os,
    parse_os_release,
)

UBUNTU_RELEASE = textwrap.dedent("""\
    PRETTY_NAME="Ubuntu 24.04.1 LTS"
    NAME="Ubuntu"
    VERSION_ID="24.04"
    ID=ubuntu
    ID_LIKE=debian
    # comment line
    HOME_URL="https://www.ubuntu.com/"
""")


class TestParseOsRelease:
    def test_unquotes_values(self):
        data = parse_os_release(UBUNTU_RELEASE)
        assert data["ID"] == "ubuntu"
        assert data["NAME"] == "Ubuntu"
        assert data["PRETTY_NAME"] == "Ubuntu 24.04.1 LTS"
        assert data["VERSION_ID"] == "24.04"

    def test_ignores_comments_and_junk(self):
        data = parse_os_release("# nothing\n\nnot a pair\nID='rocky'\n")
        assert data == {"ID": "rocky"}


class TestClassify:
    @pytest.mark.parametrize(
        "distro_id, family, manager",
        [
            ("ubuntu", OSFamily.DEBIAN_LIKE, "apt"),
            ("debian", OSFamily.DEBIAN_LIKE, "apt"),
            ("centos", OSFamily.RHEL_LIKE, "dnf"),
            ("rhel", OSFamily.RHEL_LIKE, "dnf"),
            ("rocky", OSFamily.RHEL_LIKE, "dnf"),
            ("almalinux", OSFamily.RHEL_LIKE, "dnf"),
        ],
    )
    def test_supported(self, distro_id, family, manager):
        profile = build_profile({"ID": distro_id}, use_sudo=True)
        assert profile.family is family
        assert profile.package_manager == manager
        assert profile.install_command == ("sudo", manager, "install", "-y")

    @pytest.mark.parametrize("distro_id", ["arch", "fedora", "opensuse-leap", "alpine", ""])
    def test_unsupported(self, distro_id):
        assert classify(distro_id) is OSFamily.UNSUPPORTED
        with pytest.raises(UnsupportedOSError):
            build_profile({"ID": distro_id})

    def test_case_insensitive(self):
        assert classify("Ubuntu") is OSFamily.DEBIAN_LIKE


class TestProfile:
    def test_apt_refreshes_index(self):
        profile = build_profile({"ID": "debian"}, use_sudo=True)
        assert profile.update_command == ("sudo", "apt", "update")

    def test_dnf_has_no_refresh(self):
        assert build_profile({"ID": "rocky"}).update_command is None

    def test_root_skips_sudo(self):
        profile = build_profile({"ID": "ubuntu"}, use_sudo=False)
        assert profile.install_argv("zsh") == ["apt", "install", "-y", "zsh"]
        assert profile.update_command == ("apt", "update")


class TestDetectOs:
    def test_reads_file(self, tmp_path: Path):
        f = tmp_path / "os-release"
        f.write_text(UBUNTU_RELEASE)
        profile = detect_os(str(f), use_sudo=False)
        assert profile.family is OSFamily.DEBIAN_LIKE
        assert profile.name == "Ubuntu"
        assert profile.version_id == "24.04"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(UnsupportedOSError, match="Could not find"):
            detect_os(str(tmp_path / "nope"))

    def test_unsupported_file(self, tmp_path: Path):
        f = tmp_path / "os-release"
        f.write_text("ID=arch\nNAME=\"Arch Linux\"\n")
        with pytest.raises(UnsupportedOSError, match="arch"):
            detect_os(str(f), use_sudo=False)
