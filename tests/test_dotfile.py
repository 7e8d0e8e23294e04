"""
Tests for the .zshrc backup / reset step.
"""

from pathlib import Path

import pytest

from zsh_bootstrap.errors import BackupError
from zsh_bootstrap.lib.dotfile import migrate_zshrc


def _framework(paths, template_text="# template\nZSH_THEME=\"robbyrussell\"\n"):
    paths.framework_template.parent.mkdir(parents=True)
    if template_text is not None:
        paths.framework_template.write_text(template_text)


def _migrate(paths, backup=None):
    return migrate_zshrc(
        paths.zshrc,
        backup or paths.zshrc_backup,
        framework_dir=paths.framework_dir,
        template=paths.framework_template,
    )


def test_no_config_is_noop(paths):
    _framework(paths)
    outcome = _migrate(paths)
    assert outcome.backed_up is False
    assert outcome.restored_from == "absent"
    assert not paths.zshrc.exists()
    assert not paths.zshrc_backup.exists()


def test_restores_framework_template(paths):
    _framework(paths, "# clean template\n")
    paths.zshrc.write_text("# my old config\n")

    outcome = _migrate(paths)

    assert outcome.to_dict() == {"backed_up": True, "restored_from": "template"}
    assert paths.zshrc_backup.read_text() == "# my old config\n"
    assert paths.zshrc.read_text() == "# clean template\n"


def test_restores_backup_when_template_missing(paths):
    _framework(paths, template_text=None)
    paths.zshrc.write_text("# my old config\n")

    outcome = _migrate(paths)

    assert outcome.restored_from == "backup"
    assert paths.zshrc.read_text() == "# my old config\n"


def test_framework_absent_leaves_file_removed(paths):
    paths.zshrc.write_text("# my old config\n")

    outcome = _migrate(paths)

    assert outcome.restored_from == "removed"
    assert not paths.zshrc.exists()
    assert paths.zshrc_backup.read_text() == "# my old config\n"


def test_repeated_runs_do_not_accumulate(paths):
    _framework(paths, "# clean template\n")
    paths.zshrc.write_text("# clean template\n# customized once\n")
    _migrate(paths)
    paths.zshrc.write_text(paths.zshrc.read_text() + "# customized twice\n")
    _migrate(paths)
    assert paths.zshrc.read_text() == "# clean template\n"


def test_backup_failure_is_fatal_and_keeps_original(paths, tmp_path: Path):
    paths.zshrc.write_text("# precious\n")
    with pytest.raises(BackupError):
        _migrate(paths, backup=tmp_path / "missing-dir" / ".zshrc.bak")
    assert paths.zshrc.read_text() == "# precious\n"


def test_dangling_symlink_is_removed_not_backed_up(paths, tmp_path: Path, caplog):
    _framework(paths)
    paths.zshrc.symlink_to(tmp_path / "dotfiles" / "zshrc")

    outcome = _migrate(paths)

    assert outcome.to_dict() == {"backed_up": False, "restored_from": "absent"}
    assert not paths.zshrc.is_symlink()
    assert not paths.zshrc_backup.exists()
    assert "dangling symlink" in caplog.text


def test_symlinked_config_is_backed_up_by_content(paths, tmp_path: Path):
    _framework(paths, "# clean template\n")
    target = tmp_path / "dotfiles" / "zshrc"
    target.parent.mkdir()
    target.write_text("# managed elsewhere\n")
    paths.zshrc.symlink_to(target)

    outcome = _migrate(paths)

    assert outcome.restored_from == "template"
    assert paths.zshrc_backup.read_text() == "# managed elsewhere\n"
    assert target.read_text() == "# managed elsewhere\n"
    assert not paths.zshrc.is_symlink()
