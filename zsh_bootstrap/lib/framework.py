from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..errors import CommandError, FrameworkInstallError
from .command import run_cmd
from .net import run_remote_script
from .pkg import InstallResult, InstallStatus

logger = logging.getLogger(__name__)


def install_framework(
    installer_url: str,
    framework_dir: Path,
    *,
    args: Sequence[str] = ("--unattended",),
    capture: bool = True,
) -> InstallResult:
    """Install the shell framework unless its directory already exists.

    Failure is fatal: nothing downstream is meaningful without it.
    """

    name = framework_dir.name
    if framework_dir.is_dir():
        logger.info("%s is already installed. Skipping installation.", framework_dir)
        return InstallResult(name, InstallStatus.ALREADY_PRESENT)

    logger.info("Installing shell framework into %s", framework_dir)
    # Honoured by the Oh My Zsh installer; keeps it from starting zsh or running chsh itself.
    env = {"ZSH": str(framework_dir), "RUNZSH": "no", "CHSH": "no"}
    r = run_remote_script(installer_url, args, env=env, capture=capture)
    if not r.ok or not framework_dir.is_dir():
        raise FrameworkInstallError(
            f"Failed to install shell framework from {installer_url} (exit {r.returncode})"
        )

    logger.info("Shell framework installed successfully.")
    return InstallResult(name, InstallStatus.INSTALLED)


def clone_if_absent(
    name: str,
    url: str,
    destination: Path,
    *,
    depth: Optional[int] = None,
    capture: bool = True,
) -> InstallResult:
    """Clone a plugin/theme repository; an existing directory is never re-cloned.

    A failed clone is reported as a skipped optional install.
    """

    if destination.is_dir():
        logger.info("%s already installed.", name)
        return InstallResult(name, InstallStatus.ALREADY_PRESENT)

    argv = ["git", "clone"]
    if depth:
        argv.append(f"--depth={depth}")
    argv += [url, str(destination)]

    logger.info("Installing %s...", name)
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        run_cmd(argv, capture=capture)
    except CommandError as e:
        logger.warning("Failed to clone %s from %s (exit %s). Skipping.", name, url, e.returncode)
        return InstallResult(name, InstallStatus.SKIPPED, detail=f"git clone exit code {e.returncode}")

    logger.info("%s installed successfully.", name)
    return InstallResult(name, InstallStatus.INSTALLED)


def clone_from_manifest(
    entry: Mapping[str, Any],
    destination: Path,
    *,
    capture: bool = True,
) -> InstallResult:
    depth = entry.get("depth")
    return clone_if_absent(
        str(entry["name"]),
        str(entry["url"]),
        destination,
        depth=int(depth) if depth else None,
        capture=capture,
    )
