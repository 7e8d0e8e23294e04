from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.dotfile import migrate_zshrc

logger = logging.getLogger(__name__)


class MigrateZshrcStep:
    step_id = "30_migrate_zshrc"

    def run(self, ctx: BootstrapContext) -> None:
        paths = ctx.paths
        outcome = migrate_zshrc(
            paths.zshrc,
            paths.zshrc_backup,
            framework_dir=paths.framework_dir,
            template=paths.framework_template,
        )
        ctx.decisions["zshrc_migration"] = outcome.to_dict()
