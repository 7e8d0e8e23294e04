from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.manifests import read_template

logger = logging.getLogger(__name__)


class ModularConfigStep:
    step_id = "60_modular_config"

    def run(self, ctx: BootstrapContext) -> None:
        modular_dir = ctx.paths.modular_dir
        modular_dir.mkdir(parents=True, exist_ok=True)

        aliases = modular_dir / "aliases.zsh"
        aliases.write_text(read_template("aliases.zsh"), encoding="utf-8")
        logger.info("Wrote %s", aliases)
