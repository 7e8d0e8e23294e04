from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ASSETS_ENV = "ZSH_BOOTSTRAP_ASSETS"


def _package_root() -> Path:
    # zsh_bootstrap/lib/env.py -> zsh_bootstrap
    return Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class Paths:
    """Every filesystem location the bootstrap reads or writes."""

    home: Path
    framework_dir: Path
    zsh_custom: Path
    assets_dir: Path

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Paths":
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home()).expanduser()
        framework_dir = Path(env.get("ZSH") or home / ".oh-my-zsh").expanduser()
        zsh_custom = Path(env.get("ZSH_CUSTOM") or framework_dir / "custom").expanduser()
        assets_dir = Path(env.get(ASSETS_ENV) or _package_root() / "assets").expanduser()
        return cls(home=home, framework_dir=framework_dir, zsh_custom=zsh_custom, assets_dir=assets_dir)

    @property
    def zshrc(self) -> Path:
        return self.home / ".zshrc"

    @property
    def zshrc_backup(self) -> Path:
        return self.home / ".zshrc.bak"

    @property
    def framework_template(self) -> Path:
        return self.framework_dir / "templates" / "zshrc.zsh-template"

    @property
    def modular_dir(self) -> Path:
        return self.home / ".zsh"

    @property
    def local_bin(self) -> Path:
        return self.home / ".local" / "bin"

    @property
    def fonts_dir(self) -> Path:
        return self.home / ".local" / "share" / "fonts"

    @property
    def state_dir(self) -> Path:
        return self.home / ".local" / "state" / "zsh-bootstrap"

    @property
    def log_path(self) -> Path:
        return self.state_dir / "bootstrap.log"

    @property
    def report_path(self) -> Path:
        return self.state_dir / "last-run.yaml"

    def plugin_dir(self, name: str) -> Path:
        return self.zsh_custom / "plugins" / name

    def theme_dir(self, name: str) -> Path:
        return self.zsh_custom / "themes" / name


def build_search_path(paths: Paths, environ: Optional[Mapping[str, str]] = None) -> str:
    """PATH plus ~/.local/bin, where links and script-installed tools land."""

    env = os.environ if environ is None else environ
    parts = [p for p in (env.get("PATH") or os.defpath).split(os.pathsep) if p]
    local_bin = str(paths.local_bin)
    if local_bin not in parts:
        parts.append(local_bin)
    return os.pathsep.join(parts)
