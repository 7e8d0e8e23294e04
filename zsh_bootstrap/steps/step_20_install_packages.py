from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..context import BootstrapContext
from ..errors import PackageInstallError
from ..lib.links import resolve_alias
from ..lib.manifests import load_packages_manifest
from ..lib.net import install_script_tool
from ..lib.pkg import PackageSpec, reconcile, refresh_index

logger = logging.getLogger(__name__)


def _entries(manifest: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    entries = manifest.get(key) or []
    if not isinstance(entries, list):
        raise RuntimeError(f"manifests/packages.yaml: {key} must be a list")
    return entries


class InstallPackagesStep:
    step_id = "20_install_packages"

    def run(self, ctx: BootstrapContext) -> None:
        manifest = load_packages_manifest()
        mandatory = [PackageSpec.from_manifest(e, required=True) for e in _entries(manifest, "mandatory")]
        optional = [PackageSpec.from_manifest(e, required=False) for e in _entries(manifest, "optional")]

        refresh_index(ctx.profile, capture=ctx.capture)

        reconcile(mandatory, ctx.profile, search_path=ctx.search_path, report=ctx.report, capture=ctx.capture)
        fatal = ctx.report.fatal
        if fatal is not None:
            raise PackageInstallError(
                f"Failed to install MANDATORY package {fatal.package} ({fatal.detail}). Aborting setup."
            )
        logger.info("Mandatory packages (%s) installed or already present.", ", ".join(s.name for s in mandatory))

        reconcile(optional, ctx.profile, search_path=ctx.search_path, report=ctx.report, capture=ctx.capture)

        for spec in optional:
            result = ctx.report.get(spec.name)
            if spec.link is None or result is None or not result.present:
                continue
            resolve_alias(spec.link, search_path=ctx.search_path, bin_dir=ctx.paths.local_bin)

        for entry in _entries(manifest, "scripts"):
            ctx.report.add(
                install_script_tool(
                    str(entry["name"]),
                    str(entry["url"]),
                    search_path=ctx.search_path,
                    capture=ctx.capture,
                )
            )

        skipped = [r.package for r in ctx.report.skipped]
        if skipped:
            logger.warning("Optional packages skipped: %s", ", ".join(skipped))
        logger.info("Finished installing packages.")
