from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
RC_NOT_FOUND = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    capture: bool = True,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - capture=True collects stdout/stderr (logged at DEBUG); capture=False lets
      the child write to the terminal, which interactive tools need.
    - A missing executable yields returncode 127 instead of an exception.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    pipe = subprocess.PIPE if capture else None
    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=pipe,
            stderr=pipe,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except OSError as e:
        logger.warning("Could not execute %s: %s", argv_list[0], e)
        result = CmdResult(argv=argv_list, returncode=RC_NOT_FOUND, stdout="", stderr=str(e))
    else:
        result = CmdResult(
            argv=argv_list,
            returncode=p.returncode,
            stdout=p.stdout or "",
            stderr=p.stderr or "",
        )

    if result.stdout:
        logger.debug("STDOUT %s", result.stdout.strip())
    if result.stderr:
        logger.debug("STDERR %s", result.stderr.strip())

    if check and not result.ok:
        raise CommandError(
            f"Command failed ({result.returncode}): {fmt_argv(argv_list)}\n{result.stderr}",
            result.returncode,
        )

    return result
