from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.manifests import load_shell_manifest
from ..lib.zshrc import ZshrcSettings, configure_zshrc

logger = logging.getLogger(__name__)


class ConfigureZshrcStep:
    step_id = "70_configure_zshrc"

    def run(self, ctx: BootstrapContext) -> None:
        manifest = load_shell_manifest()
        theme = manifest.get("theme") or {}

        settings = ZshrcSettings(
            theme=str(theme.get("directive") or theme.get("name") or "robbyrussell"),
            plugins=tuple(str(p) for p in manifest.get("enabled_plugins") or ("git",)),
            tools=ctx.report.present_packages,
        )
        configure_zshrc(ctx.paths.zshrc, settings, template=ctx.paths.framework_template)
        ctx.decisions["advanced_fzf"] = settings.advanced_fzf
