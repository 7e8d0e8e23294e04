from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.assets import install_executables

logger = logging.getLogger(__name__)


class InstallScriptsStep:
    step_id = "65_install_scripts"

    def run(self, ctx: BootstrapContext) -> None:
        src = ctx.paths.assets_dir / "custom_scripts"
        if not src.is_dir():
            logger.warning("Custom script source directory '%s' not found. Skipping custom script installation.", src)
            return

        try:
            installed = install_executables(src, ctx.paths.local_bin)
        except OSError as e:
            logger.warning("Failed to install custom scripts from %s: %s", src, e)
            return

        ctx.decisions["custom_scripts"] = [p.name for p in installed]
        logger.info("Custom scripts installed: %s", ", ".join(p.name for p in installed) or "(none)")
