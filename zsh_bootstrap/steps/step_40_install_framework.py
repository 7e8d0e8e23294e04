from __future__ import annotations

import logging

from ..context import BootstrapContext
from ..lib.framework import install_framework
from ..lib.manifests import load_shell_manifest

logger = logging.getLogger(__name__)


class InstallFrameworkStep:
    step_id = "40_install_framework"

    def run(self, ctx: BootstrapContext) -> None:
        framework = load_shell_manifest().get("framework") or {}
        installer = framework.get("installer")
        if not installer:
            raise RuntimeError("manifests/shell.yaml: framework.installer missing")

        ctx.report.add(
            install_framework(
                str(installer),
                ctx.paths.framework_dir,
                args=tuple(str(a) for a in framework.get("args") or ()),
                capture=ctx.capture,
            )
        )
