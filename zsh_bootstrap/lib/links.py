from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .pkg import SymlinkRule, find_command

logger = logging.getLogger(__name__)


def resolve_alias(rule: SymlinkRule, *, search_path: str, bin_dir: Path) -> Optional[Path]:
    """Link `bin_dir/<target>` to the installed `<source>` binary when needed.

    Some distributions ship a tool under another name (fdfind, batcat) to avoid
    clashing with an unrelated system binary. Returns the link path when one
    exists after the call, None when nothing was (or could be) linked.
    Failures here are never fatal.
    """

    link = bin_dir / rule.target

    existing = find_command(rule.target, search_path)
    if existing:
        logger.info("%s is available at %s; no link needed.", rule.target, existing)
        return link if link.is_symlink() else None

    actual = find_command(rule.source, search_path)
    if not actual:
        logger.warning(
            "Neither '%s' nor '%s' found after installation. Skipping symlink creation.",
            rule.target,
            rule.source,
        )
        return None

    if link.is_symlink() or link.exists():
        # Present but not resolvable as an executable (dangling or not +x).
        logger.warning("%s exists but is not usable; leaving it alone.", link)
        return None

    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
        link.symlink_to(actual)
    except OSError as e:
        logger.warning("Could not create symlink %s -> %s: %s", link, actual, e)
        return None

    logger.info("Created symlink: %s -> %s", link, actual)
    return link
