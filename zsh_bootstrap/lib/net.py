from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .command import CmdResult, run_cmd
from .pkg import InstallResult, InstallStatus, find_command

logger = logging.getLogger(__name__)


def run_remote_script(
    url: str,
    args: Sequence[str] = (),
    *,
    env: Mapping[str, str] | None = None,
    capture: bool = True,
) -> CmdResult:
    """Fetch a shell installer with curl and feed it to sh on stdin.

    Equivalent to `curl -fsSL URL | sh -s -- ARGS`, except that a failed
    download is reported as such instead of running an empty script.
    """

    fetched = run_cmd(["curl", "-fsSL", url], check=False)
    if not fetched.ok or not fetched.stdout.strip():
        logger.warning("Download failed (exit %s): %s", fetched.returncode, url)
        return CmdResult(
            argv=fetched.argv,
            returncode=fetched.returncode or 1,
            stdout="",
            stderr=fetched.stderr or "empty download",
        )
    return run_cmd(
        ["sh", "-s", "--", *args],
        check=False,
        env=env,
        input_text=fetched.stdout,
        capture=capture,
    )


def install_script_tool(
    name: str,
    url: str,
    *,
    search_path: str,
    capture: bool = True,
) -> InstallResult:
    """Optional tool installed from an upstream script (zoxide and friends)."""

    found = find_command(name, search_path)
    if found:
        logger.info("%s is already installed. Skipping.", name)
        return InstallResult(name, InstallStatus.ALREADY_PRESENT, installed_as=name)

    logger.info("Attempting to install %s via its installer script...", name)
    r = run_remote_script(url, capture=capture)
    if r.ok:
        logger.info("%s installed successfully.", name)
        return InstallResult(name, InstallStatus.INSTALLED, installed_as=name)

    logger.warning("Failed to install optional package '%s'. This package will be skipped.", name)
    return InstallResult(name, InstallStatus.SKIPPED, detail=f"installer exit code {r.returncode}")
