from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Mapping, Optional

from .context import BootstrapContext
from .errors import BootstrapError
from .lib.env import Paths, build_search_path
from .lib.osdetect import DEFAULT_OS_RELEASE, detect_os
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .report_store import save_report
from .steps import (
    ConfigureZshrcStep,
    DefaultShellStep,
    InstallFontsStep,
    InstallFrameworkStep,
    InstallPackagesStep,
    InstallPluginsStep,
    InstallScriptsStep,
    MigrateZshrcStep,
    ModularConfigStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        InstallPackagesStep(),
        MigrateZshrcStep(),
        InstallFrameworkStep(),
        InstallPluginsStep(),
        ModularConfigStep(),
        InstallScriptsStep(),
        ConfigureZshrcStep(),
        InstallFontsStep(),
        DefaultShellStep(),
    ]


def _report_dict(ctx: BootstrapContext, error: Optional[BaseException]) -> Dict[str, Any]:
    report: Dict[str, Any] = {
        "success": error is None,
        "os": ctx.profile.to_dict(),
        "quiet": ctx.quiet,
        "ran_steps": list(ctx.ran_steps),
        "results": ctx.report.to_list(),
        "decisions": dict(ctx.decisions),
    }
    if error is not None:
        report["error"] = {
            "type": type(error).__name__,
            "message": str(error),
            "step": ctx.decisions.get("current_step"),
        }
    return report


def run(
    *,
    quiet: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    os_release_path: str = DEFAULT_OS_RELEASE,
    use_sudo: Optional[bool] = None,
) -> BootstrapContext:
    """Detect the host, then run every provisioning step in order.

    Once the host is supported, the run report is written whether or not the
    run succeeds.
    """

    paths = Paths.from_environ(environ)
    configure_logging(str(paths.log_path), quiet=quiet)

    ctx: Optional[BootstrapContext] = None
    error: Optional[BaseException] = None
    try:
        profile = detect_os(os_release_path, use_sudo=use_sudo)
        ctx = BootstrapContext(
            profile=profile,
            paths=paths,
            search_path=build_search_path(paths, environ),
            quiet=quiet,
        )
        run_pipeline(ctx=ctx, steps=build_steps())
        return ctx
    except Exception as e:
        error = e
        raise
    finally:
        # An unsupported host gets no report; only the log records the refusal.
        if ctx is not None:
            try:
                save_report(str(paths.report_path), _report_dict(ctx, error))
            except OSError as e:
                logger.warning("Could not write run report to %s: %s", paths.report_path, e)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="zsh-bootstrap",
        description="Install zsh, Oh My Zsh, plugins and CLI tools, and make zsh the login shell.",
    )
    p.add_argument("--quiet", action="store_true", help="Suppress installer output (still logged to file)")

    args = p.parse_args(argv)

    if args.quiet:
        print("Running setup in quiet mode. Installation details suppressed.")

    try:
        ctx = run(quiet=bool(args.quiet))
    except BootstrapError as e:
        logger.error("%s", e)
        return 1

    logger.info("Your previous ~/.zshrc (if any) was backed up to %s.", ctx.paths.zshrc_backup)
    logger.info("Setup complete. Log out and back in, or run 'exec zsh', to start using zsh.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
