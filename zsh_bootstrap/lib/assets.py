from __future__ import annotations

import logging
import shutil
import stat
from pathlib import Path
from typing import Iterable, List

from .command import run_cmd

logger = logging.getLogger(__name__)

FONT_SUFFIXES = frozenset({".ttf", ".otf", ".woff", ".woff2"})


def copy_matching(src: Path, dst: Path, suffixes: Iterable[str]) -> List[Path]:
    """Copy every file under src whose suffix matches (case-insensitive) flat into dst."""

    wanted = {s.lower() for s in suffixes}
    if not src.is_dir():
        raise FileNotFoundError(str(src))

    dst.mkdir(parents=True, exist_ok=True)
    copied: List[Path] = []
    for item in sorted(src.rglob("*")):
        if item.is_file() and item.suffix.lower() in wanted:
            out = dst / item.name
            shutil.copy2(item, out)
            copied.append(out)
    return copied


def install_executables(src: Path, dst: Path) -> List[Path]:
    """Copy the top-level files of src into dst and mark them executable."""

    if not src.is_dir():
        raise FileNotFoundError(str(src))

    dst.mkdir(parents=True, exist_ok=True)
    installed: List[Path] = []
    for item in sorted(src.iterdir()):
        if not item.is_file():
            continue
        out = dst / item.name
        shutil.copy2(item, out)
        mode = out.stat().st_mode
        out.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        installed.append(out)
    return installed


def refresh_font_cache(search_path: str) -> bool:
    if not shutil.which("fc-cache", path=search_path):
        logger.warning("fc-cache command not found. Font cache may not be immediately available.")
        return False
    r = run_cmd(["fc-cache", "-f"], check=False)
    if not r.ok:
        logger.warning("fc-cache failed (exit %s)", r.returncode)
    return r.ok
