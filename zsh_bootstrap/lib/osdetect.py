from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..errors import UnsupportedOSError

logger = logging.getLogger(__name__)

DEFAULT_OS_RELEASE = "/etc/os-release"


class OSFamily(str, Enum):
    DEBIAN_LIKE = "debian-like"
    RHEL_LIKE = "rhel-like"
    UNSUPPORTED = "unsupported"


_FAMILY_BY_ID = {
    "ubuntu": OSFamily.DEBIAN_LIKE,
    "debian": OSFamily.DEBIAN_LIKE,
    "centos": OSFamily.RHEL_LIKE,
    "rhel": OSFamily.RHEL_LIKE,
    "rocky": OSFamily.RHEL_LIKE,
    "almalinux": OSFamily.RHEL_LIKE,
}

# family -> (package manager, install verb, index refresh verb)
_FRONTENDS: Dict[OSFamily, Tuple[str, Tuple[str, ...], Optional[Tuple[str, ...]]]] = {
    OSFamily.DEBIAN_LIKE: ("apt", ("install", "-y"), ("update",)),
    # dnf refreshes metadata on its own.
    OSFamily.RHEL_LIKE: ("dnf", ("install", "-y"), None),
}


@dataclass(frozen=True)
class OSProfile:
    family: OSFamily
    distro_id: str
    name: str
    version_id: str
    package_manager: str
    install_command: Tuple[str, ...]
    update_command: Optional[Tuple[str, ...]]

    def install_argv(self, package: str) -> list[str]:
        return [*self.install_command, package]

    def to_dict(self) -> Dict[str, object]:
        return {
            "family": self.family.value,
            "distro_id": self.distro_id,
            "name": self.name,
            "version_id": self.version_id,
            "package_manager": self.package_manager,
        }


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=value lines, honouring shell quoting."""

    data: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        data[key.strip()] = parts[0] if parts else ""
    return data


def classify(distro_id: str) -> OSFamily:
    return _FAMILY_BY_ID.get(distro_id.strip().lower(), OSFamily.UNSUPPORTED)


def build_profile(release: Dict[str, str], *, use_sudo: bool = True) -> OSProfile:
    distro_id = release.get("ID", "")
    family = classify(distro_id)
    if family is OSFamily.UNSUPPORTED:
        raise UnsupportedOSError(
            f"Unsupported distribution ({distro_id or 'unknown'}). "
            "Supported: " + ", ".join(sorted(_FAMILY_BY_ID))
        )

    manager, install_verb, update_verb = _FRONTENDS[family]
    prefix: Tuple[str, ...] = ("sudo",) if use_sudo else ()
    return OSProfile(
        family=family,
        distro_id=distro_id.lower(),
        name=release.get("NAME", distro_id),
        version_id=release.get("VERSION_ID", ""),
        package_manager=manager,
        install_command=(*prefix, manager, *install_verb),
        update_command=(*prefix, manager, *update_verb) if update_verb else None,
    )


def detect_os(os_release_path: str = DEFAULT_OS_RELEASE, *, use_sudo: Optional[bool] = None) -> OSProfile:
    p = Path(os_release_path)
    if not p.is_file():
        raise UnsupportedOSError(f"Could not find {os_release_path}. Cannot determine distribution.")

    if use_sudo is None:
        use_sudo = os.geteuid() != 0

    profile = build_profile(parse_os_release(p.read_text(encoding="utf-8")), use_sudo=use_sudo)
    logger.info(
        "Detected OS: %s (%s). Using package manager: %s",
        profile.name,
        profile.version_id or "unknown version",
        profile.package_manager,
    )
    return profile
