"""
Shared test fixtures: fake home, stub executables and a recording run_cmd.
"""

import logging
import stat
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pytest

from zsh_bootstrap.errors import CommandError
from zsh_bootstrap.lib import assets, framework, net, pkg, shell
from zsh_bootstrap.lib.command import CmdResult
from zsh_bootstrap.lib.env import Paths, build_search_path
from zsh_bootstrap.lib.osdetect import build_profile

HandlerResult = Union[int, Tuple[int, str]]
Handler = Callable[[List[str], Optional[str], dict], HandlerResult]


def make_executable(directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    p = directory / name
    p.write_text("#!/bin/sh\nexit 0\n")
    p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return p


class FakeRunner:
    """Stands in for run_cmd: records argv and answers via registered handlers."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.envs: List[dict] = []
        self._handlers: List[Tuple[Callable[[List[str]], bool], Handler]] = []

    def on(self, predicate: Callable[[List[str]], bool], handler: Handler) -> None:
        self._handlers.append((predicate, handler))

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env=None,
        cwd=None,
        input_text=None,
        capture: bool = True,
    ) -> CmdResult:
        argv_list = list(argv)
        self.calls.append(argv_list)
        self.envs.append(dict(env or {}))

        rc, stdout = 0, ""
        for predicate, handler in self._handlers:
            if predicate(argv_list):
                out = handler(argv_list, input_text, dict(env or {}))
                rc, stdout = out if isinstance(out, tuple) else (out, "")
                break

        if check and rc != 0:
            raise CommandError(f"fake failure: {argv_list}", rc)
        return CmdResult(argv=argv_list, returncode=rc, stdout=stdout, stderr="")

    def matching(self, *prefix: str) -> List[List[str]]:
        n = len(prefix)
        return [c for c in self.calls if c[:n] == list(prefix)]


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    for attr in ("_zsh_bootstrap_configured", "_zsh_bootstrap_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def fake_cmd(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    for mod in (pkg, net, framework, shell, assets):
        monkeypatch.setattr(mod, "run_cmd", runner)
    return runner


@pytest.fixture
def home(tmp_path: Path) -> Path:
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def environ(tmp_path: Path, home: Path, bin_dir: Path) -> dict:
    return {
        "HOME": str(home),
        "PATH": str(bin_dir),
        "ZSH_BOOTSTRAP_ASSETS": str(tmp_path / "assets"),
    }


@pytest.fixture
def paths(environ: dict) -> Paths:
    return Paths.from_environ(environ)


@pytest.fixture
def search_path(paths: Paths, environ: dict) -> str:
    return build_search_path(paths, environ)


@pytest.fixture
def debian_profile():
    return build_profile({"ID": "ubuntu", "NAME": "Ubuntu", "VERSION_ID": "24.04"}, use_sudo=False)


@pytest.fixture
def rhel_profile():
    return build_profile({"ID": "rocky", "NAME": "Rocky Linux", "VERSION_ID": "9.4"}, use_sudo=False)
