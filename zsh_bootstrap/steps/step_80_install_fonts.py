from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.assets import FONT_SUFFIXES, copy_matching, refresh_font_cache

logger = logging.getLogger(__name__)


class InstallFontsStep:
    step_id = "80_install_fonts"

    def run(self, ctx: BootstrapContext) -> None:
        src = ctx.paths.assets_dir / "fonts"
        if not src.is_dir():
            logger.warning("Font source directory '%s' not found. Skipping font installation.", src)
            return

        try:
            copied = copy_matching(src, ctx.paths.fonts_dir, FONT_SUFFIXES)
        except OSError as e:
            logger.warning("Failed to copy fonts: %s", e)
            return

        ctx.decisions["fonts"] = [p.name for p in copied]
        if not copied:
            logger.info("No font files found in %s", src)
            return

        logger.info("Copied %d font(s) to %s. Updating font cache...", len(copied), ctx.paths.fonts_dir)
        if refresh_font_cache(ctx.search_path):
            logger.info("Font cache updated. You may need to restart your terminal emulator to see new fonts.")
