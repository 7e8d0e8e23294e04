from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .command import run_cmd
from .osdetect import OSProfile

logger = logging.getLogger(__name__)


class InstallStatus(str, Enum):
    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    SKIPPED = "skipped_optional_failure"
    FATAL = "fatal_failure"


@dataclass(frozen=True)
class SymlinkRule:
    """Expose binary `source` under the name `target`."""

    source: str
    target: str


@dataclass(frozen=True)
class PackageSpec:
    name: str
    alternates: Tuple[str, ...] = ()
    required: bool = False
    commands: Tuple[str, ...] = ()
    link: Optional[SymlinkRule] = None

    @property
    def candidates(self) -> Tuple[str, ...]:
        return (self.name, *self.alternates)

    @property
    def probe_commands(self) -> Tuple[str, ...]:
        return self.commands or self.candidates

    @classmethod
    def from_manifest(cls, raw: Mapping[str, Any], *, required: bool) -> "PackageSpec":
        name = str(raw.get("name") or "").strip()
        if not name:
            raise ValueError(f"Package entry without a name: {raw!r}")

        link_raw = raw.get("link")
        link = None
        if link_raw:
            if not isinstance(link_raw, Mapping):
                raise ValueError(f"Package {name}: link must be a mapping")
            link = SymlinkRule(source=str(link_raw["source"]), target=str(link_raw["target"]))

        return cls(
            name=name,
            alternates=tuple(str(a) for a in raw.get("alternates") or ()),
            required=required,
            commands=tuple(str(c) for c in raw.get("commands") or ()),
            link=link,
        )


@dataclass(frozen=True)
class InstallResult:
    package: str
    status: InstallStatus
    installed_as: Optional[str] = None
    detail: str = ""

    @property
    def present(self) -> bool:
        return self.status in (InstallStatus.ALREADY_PRESENT, InstallStatus.INSTALLED)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"package": self.package, "status": self.status.value}
        if self.installed_as:
            d["installed_as"] = self.installed_as
        if self.detail:
            d["detail"] = self.detail
        return d


@dataclass
class InstallReport:
    results: List[InstallResult] = field(default_factory=list)

    def add(self, result: InstallResult) -> InstallResult:
        self.results.append(result)
        return result

    def get(self, package: str) -> Optional[InstallResult]:
        for r in reversed(self.results):
            if r.package == package:
                return r
        return None

    @property
    def fatal(self) -> Optional[InstallResult]:
        for r in self.results:
            if r.status is InstallStatus.FATAL:
                return r
        return None

    @property
    def skipped(self) -> List[InstallResult]:
        return [r for r in self.results if r.status is InstallStatus.SKIPPED]

    @property
    def present_packages(self) -> FrozenSet[str]:
        return frozenset(r.package for r in self.results if r.present)

    def to_list(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.results]


def find_command(name: str, search_path: str) -> Optional[str]:
    return shutil.which(name, path=search_path)


def present_command(spec: PackageSpec, search_path: str) -> Optional[str]:
    for cmd in spec.probe_commands:
        if find_command(cmd, search_path):
            return cmd
    return None


def refresh_index(profile: OSProfile, *, capture: bool = True) -> bool:
    if not profile.update_command:
        return True
    logger.info("Refreshing %s package index", profile.package_manager)
    r = run_cmd(profile.update_command, check=False, capture=capture)
    if not r.ok:
        logger.warning("Package index refresh failed (exit %s); continuing", r.returncode)
    return r.ok


def ensure(
    spec: PackageSpec,
    profile: OSProfile,
    *,
    search_path: str,
    capture: bool = True,
) -> InstallResult:
    """Reconcile one package: probe, then canonical name, then each alternate."""

    found = present_command(spec, search_path)
    if found:
        logger.info("%s is already installed (%s). Skipping.", spec.name, found)
        return InstallResult(spec.name, InstallStatus.ALREADY_PRESENT, installed_as=found)

    last_rc = 0
    for candidate in spec.candidates:
        logger.info("Attempting to install %s...", candidate)
        r = run_cmd(profile.install_argv(candidate), check=False, capture=capture)
        if r.ok:
            logger.info("%s installed successfully.", candidate)
            return InstallResult(spec.name, InstallStatus.INSTALLED, installed_as=candidate)
        last_rc = r.returncode
        logger.info("Package '%s' failed to install (exit %s)", candidate, r.returncode)

    tried = ", ".join(spec.candidates)
    if spec.required:
        logger.error("Failed to install MANDATORY package %s (tried: %s)", spec.name, tried)
        return InstallResult(
            spec.name, InstallStatus.FATAL, detail=f"tried {tried}; last exit code {last_rc}"
        )

    logger.warning(
        "Failed to install optional package '%s' (tried: %s). This package will be skipped.",
        spec.name,
        tried,
    )
    return InstallResult(spec.name, InstallStatus.SKIPPED, detail=f"tried {tried}; last exit code {last_rc}")


def reconcile(
    specs: Iterable[PackageSpec],
    profile: OSProfile,
    *,
    search_path: str,
    report: InstallReport,
    capture: bool = True,
) -> InstallReport:
    """Ensure each package independently; stop at the first fatal outcome."""

    for spec in specs:
        result = report.add(ensure(spec, profile, search_path=search_path, capture=capture))
        if result.status is InstallStatus.FATAL:
            break
    return report
