from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.framework import clone_from_manifest
from ..lib.manifests import load_shell_manifest

logger = logging.getLogger(__name__)


class InstallPluginsStep:
    step_id = "50_install_plugins"

    def run(self, ctx: BootstrapContext) -> None:
        manifest = load_shell_manifest()

        plugins = manifest.get("plugins") or []
        if not isinstance(plugins, list):
            raise RuntimeError("manifests/shell.yaml: plugins must be a list")

        # Each clone is independent; a failure only loses that plugin.
        for entry in plugins:
            ctx.report.add(
                clone_from_manifest(entry, ctx.paths.plugin_dir(str(entry["name"])), capture=ctx.capture)
            )

        theme = manifest.get("theme")
        if theme:
            ctx.report.add(
                clone_from_manifest(theme, ctx.paths.theme_dir(str(theme["name"])), capture=ctx.capture)
            )
