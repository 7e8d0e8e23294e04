from __future__ import annotations

import logging
import os
import pwd
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)


def current_login_shell() -> Optional[str]:
    try:
        return pwd.getpwuid(os.getuid()).pw_shell or None
    except KeyError:
        return os.environ.get("SHELL")


def ensure_default_shell(target_shell: str) -> bool:
    """Make target_shell the login shell. Returns True if a change was made.

    chsh prompts for a password on the terminal and may block indefinitely.
    """

    current = current_login_shell()
    if current == target_shell:
        logger.info("%s is already set as the default shell.", target_shell)
        return False

    # Must reach the console in quiet mode too.
    logger.warning("The 'chsh' command will now ask for your password to change your default shell to %s.", target_shell)
    r = run_cmd(["chsh", "-s", target_shell], check=False, capture=False)
    if not r.ok:
        logger.warning("chsh failed (exit %s); default shell is still %s", r.returncode, current)
        return False

    logger.info("Default shell successfully set to %s.", target_shell)
    return True
