from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import BackupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationOutcome:
    backed_up: bool
    # "absent" | "template" | "backup" | "removed"
    restored_from: str

    def to_dict(self) -> Dict[str, Any]:
        return {"backed_up": self.backed_up, "restored_from": self.restored_from}


def migrate_zshrc(
    zshrc: Path,
    backup: Path,
    *,
    framework_dir: Path,
    template: Path,
) -> MigrationOutcome:
    """Back up ~/.zshrc and reset it to a clean starting point.

    Order: backup -> delete -> restore the framework template (framework
    installed) or the backup (template missing). With the framework not yet
    installed the file is left removed; the framework installer writes a fresh
    one from its template.

    Only a failed backup is fatal, and then the original is left untouched.
    """

    if not zshrc.is_file():
        if zshrc.is_symlink() and not zshrc.exists():
            logger.warning("%s is a dangling symlink to %s; removing it.", zshrc, os.readlink(zshrc))
            zshrc.unlink()
        else:
            logger.info("No existing %s; nothing to back up.", zshrc)
        return MigrationOutcome(backed_up=False, restored_from="absent")

    try:
        shutil.copy2(zshrc, backup)
    except OSError as e:
        raise BackupError(f"Failed to create backup of {zshrc} at {backup}: {e}") from e
    logger.info("Backup created successfully: %s", backup)

    logger.info("Removing original %s to ensure a clean base.", zshrc)
    zshrc.unlink()

    if not framework_dir.is_dir():
        return MigrationOutcome(backed_up=True, restored_from="removed")

    if template.is_file():
        shutil.copyfile(template, zshrc)
        logger.info("Replaced %s with a fresh framework template.", zshrc)
        return MigrationOutcome(backed_up=True, restored_from="template")

    logger.warning(
        "Framework is installed but its template %s was not found. Restoring original %s.",
        template,
        zshrc,
    )
    shutil.copyfile(backup, zshrc)
    return MigrationOutcome(backed_up=True, restored_from="backup")
