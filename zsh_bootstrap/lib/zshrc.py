from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

BEGIN_MARKER = "# >>> zsh-bootstrap >>>"
END_MARKER = "# <<< zsh-bootstrap <<<"

# Tools that unlock the previewing fzf setup.
PREVIEW_TOOLS = frozenset({"eza", "bat"})

DEFAULT_HISTORY_IGNORE = (
    "ll",
    "ls",
    "la",
    "cd",
    "man",
    "less",
    "file",
    "which",
    "drill",
    "md5sum",
    "pacman",
    "xdg-open",
    "traceroute",
    "speedtest-cli",
    "j",
    "ji",
    "z",
    "zi",
    "rm",
)

_THEME_RE = re.compile(r"^[ \t]*ZSH_THEME=.*$", re.MULTILINE)
_PLUGINS_RE = re.compile(r"^[ \t]*plugins=\([^)]*\)", re.MULTILINE)
_SOURCE_RE = re.compile(r"^[ \t]*source[ \t]+\$ZSH/oh-my-zsh\.sh", re.MULTILINE)
_BLOCK_RE = re.compile(
    r"\n*" + re.escape(BEGIN_MARKER) + r".*?" + re.escape(END_MARKER) + r"\n?",
    re.DOTALL,
)


@dataclass(frozen=True)
class ZshrcSettings:
    theme: str
    plugins: Tuple[str, ...]
    # Optional tools that ended up installed; drives the conditional blocks.
    tools: FrozenSet[str] = frozenset()
    modular_dir: str = "$HOME/.zsh"
    update_days: int = 30
    history_size: int = 1000000
    history_min_length: int = 5
    history_ignore: Tuple[str, ...] = DEFAULT_HISTORY_IGNORE

    @property
    def advanced_fzf(self) -> bool:
        return PREVIEW_TOOLS <= self.tools


def _replace_or_insert(text: str, pattern: re.Pattern, line: str) -> str:
    if pattern.search(text):
        return pattern.sub(lambda _m: line, text)
    # Directives must precede the framework being sourced.
    m = _SOURCE_RE.search(text)
    if m:
        return text[: m.start()] + line + "\n" + text[m.start():]
    if text and not text.endswith("\n"):
        text += "\n"
    return text + line + "\n"


def set_theme(text: str, theme: str) -> str:
    return _replace_or_insert(text, _THEME_RE, f'ZSH_THEME="{theme}"')


def set_plugins(text: str, plugins: Tuple[str, ...]) -> str:
    return _replace_or_insert(text, _PLUGINS_RE, f"plugins=({' '.join(plugins)})")


def strip_managed_block(text: str) -> str:
    stripped = _BLOCK_RE.sub("\n", text).rstrip("\n")
    return stripped + "\n" if stripped else ""


def _dedent(block: str) -> List[str]:
    return textwrap.dedent(block).strip("\n").splitlines()


def _fzf_compgen_lines() -> List[str]:
    return _dedent(
        """
        # Use fd (https://github.com/sharkdp/fd) for listing path candidates.
        # - The first argument to the function ($1) is the base path to start traversal
        _fzf_compgen_path() {
          fd --hidden --exclude .git . "$1"
        }
        # Use fd to generate the list for directory completion
        _fzf_compgen_dir() {
          fd --type=d --hidden --exclude .git . "$1"
        }
        """
    )


def fzf_lines(tools: FrozenSet[str]) -> List[str]:
    lines = ["# --- FZF (Fuzzy Finder) and FD Integration ---"]
    lines += _dedent(
        """
        if command -v fzf &> /dev/null; then
          source <(fzf --zsh)
        fi
        export FZF_DEFAULT_COMMAND="fd --hidden --strip-cwd-prefix --exclude .git"
        export FZF_CTRL_T_COMMAND="$FZF_DEFAULT_COMMAND"
        """
    )
    if PREVIEW_TOOLS <= tools:
        lines += _dedent(
            """
            show_file_or_dir_preview="if [ -d {} ]; then eza --tree --color=always {} | head -200; else bat -n --color=always --line-range :500 {}; fi"
            export FZF_CTRL_T_OPTS="--preview '$show_file_or_dir_preview'"
            export FZF_ALT_C_OPTS="--preview 'eza --tree --color=always {} | head -200'"
            # Advanced customization of fzf options via _fzf_comprun function
            _fzf_comprun() {
              local command=$1
              shift

              case "$command" in
                cd)           fzf --preview 'eza --tree --color=always {} | head -200' "$@" ;;
                export|unset) fzf --preview "eval 'echo \\${}'"         "$@" ;;
                ssh)          fzf --preview 'dig {}'                   "$@" ;;
                *)            fzf --preview "$show_file_or_dir_preview" "$@" ;;
              esac
            }
            """
        )
    else:
        lines.append('export FZF_ALT_C_COMMAND="fd --type=d --hidden --strip-cwd-prefix --exclude .git"')
    return lines + _fzf_compgen_lines()


def grep_lines() -> List[str]:
    return ["# --- ripgrep Configuration ---"] + _dedent(
        """
        if command -v rg &> /dev/null; then
            alias grep='rg'
        else
            alias grep="/usr/bin/grep $GREP_OPTIONS"
        fi
        unset GREP_OPTIONS
        """
    )


def history_lines(settings: ZshrcSettings) -> List[str]:
    lines = [
        "# --- History Expansion and Cleanup ---",
        'export HISTFILE="$HOME/.zsh_history"',
        f"export HISTSIZE={settings.history_size}",
        'export HISTTIMEFORMAT="%F %T"',
        "export SAVEHIST=$HISTSIZE",
    ]
    for opt in (
        "EXTENDED_HISTORY",
        "SHARE_HISTORY",
        "HIST_EXPIRE_DUPS_FIRST",
        "HIST_IGNORE_DUPS",
        "HIST_IGNORE_ALL_DUPS",
        "HIST_FIND_NO_DUPS",
        "HIST_IGNORE_SPACE",
        "HIST_SAVE_NO_DUPS",
        "HIST_REDUCE_BLANKS",
    ):
        lines.append(f"setopt {opt}")
    return lines


def history_filter_lines(settings: ZshrcSettings) -> List[str]:
    """zshaddhistory hook: keep short commands and noisy ones out of history."""

    lines = [
        "# --- Custom History Management (zshaddhistory) ---",
        "zshaddhistory() {",
        "    local line=${1%%$'\\n'}",
        "    local cmd=${line%% *}",
        "    # Only those that satisfy all of the following conditions are added to the history",
        f"    [[ ${{#line}} -ge {settings.history_min_length}",
    ]
    lines += [f"        && ${{cmd}} != {name}" for name in settings.history_ignore]
    lines += ["    ]]", "}"]
    return lines


def render_managed_block(settings: ZshrcSettings) -> str:
    """Everything appended to .zshrc; a pure function of the settings."""

    sections: List[List[str]] = [
        [
            BEGIN_MARKER,
            "# Generated by zsh-bootstrap. Changes inside this block are overwritten.",
        ],
        [
            'export PATH="$PATH:$HOME/.local/bin"',
            f"export UPDATE_ZSH_DAYS={settings.update_days}",
        ],
        ["# --- zoxide ---"]
        + _dedent(
            """
            if command -v zoxide &> /dev/null; then
              eval "$(zoxide init zsh)"
            fi
            """
        ),
        history_lines(settings),
        [
            f"# --- Source Modular Config Files ({settings.modular_dir}/*.zsh) ---",
            f'for config in "{settings.modular_dir}"/*.zsh(N); do source "$config"; done',
        ],
        fzf_lines(settings.tools),
        grep_lines(),
        history_filter_lines(settings) + [END_MARKER],
    ]
    return "\n\n".join("\n".join(s) for s in sections) + "\n"


def patch_zshrc(text: str, settings: ZshrcSettings) -> str:
    """Set theme and plugins, then (re)place the managed block at the end."""

    out = strip_managed_block(text)
    out = set_theme(out, settings.theme)
    out = set_plugins(out, settings.plugins)
    if out and not out.endswith("\n"):
        out += "\n"
    return out + "\n" + render_managed_block(settings)


def configure_zshrc(zshrc: Path, settings: ZshrcSettings, *, template: Optional[Path] = None) -> str:
    if zshrc.is_file():
        base = zshrc.read_text(encoding="utf-8")
    elif template is not None and template.is_file():
        logger.info("%s missing; starting from framework template %s", zshrc, template)
        base = template.read_text(encoding="utf-8")
    else:
        raise ConfigurationError(f"No {zshrc} and no framework template to start from")

    patched = patch_zshrc(base, settings)
    zshrc.write_text(patched, encoding="utf-8")

    logger.info("Set ZSH_THEME to %s.", settings.theme)
    logger.info("Updated %s to enable plugins: (%s)", zshrc, " ".join(settings.plugins))
    if settings.advanced_fzf:
        logger.info("FZF: Adding advanced previews using eza and bat.")
    else:
        logger.info("FZF: eza or bat not found. Skipping advanced preview configuration.")
    return patched
