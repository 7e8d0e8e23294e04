from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.pkg import find_command
from ..lib.shell import ensure_default_shell

logger = logging.getLogger(__name__)


class DefaultShellStep:
    step_id = "90_default_shell"

    def run(self, ctx: BootstrapContext) -> None:
        zsh = find_command("zsh", ctx.search_path)
        if not zsh:
            logger.warning("zsh not found on PATH; leaving the default shell unchanged.")
            return
        ctx.decisions["shell_changed"] = ensure_default_shell(zsh)
