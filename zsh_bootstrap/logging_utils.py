from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

FALLBACK_LOG_NAME = "zsh-bootstrap.log"


def configure_logging(
    log_path: str,
    *,
    quiet: bool = False,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Everything (including captured child output at DEBUG) goes to the log file.
    The console only shows INFO and up, or WARNING and up in quiet mode.

    If the requested log directory is not writable we fall back to a file in
    the current working directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_zsh_bootstrap_configured", False):
        return getattr(logger, "_zsh_bootstrap_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING if quiet else logging.INFO)
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_zsh_bootstrap_configured", True)
    setattr(logger, "_zsh_bootstrap_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s, quiet=%s)", log_path, chosen_path, quiet
    )
    return chosen_path
