"""
Tests for the run report store and logging setup.
"""

import json
import logging
from pathlib import Path

import yaml

from zsh_bootstrap.logging_utils import configure_logging
from zsh_bootstrap.report_store import save_report


class TestReportStore:
    def test_yaml_keeps_key_order(self, tmp_path: Path):
        p = tmp_path / "state" / "last-run.yaml"
        save_report(str(p), {"success": True, "results": [{"package": "fd", "status": "installed"}]})
        assert yaml.safe_load(p.read_text())["results"][0]["package"] == "fd"
        assert p.read_text().startswith("success: true\n")

    def test_json_selected_by_suffix(self, tmp_path: Path):
        p = tmp_path / "last-run.json"
        save_report(str(p), {"success": False})
        assert json.loads(p.read_text()) == {"success": False}

    def test_unknown_suffix_is_yaml(self, tmp_path: Path):
        p = tmp_path / "last-run.txt"
        save_report(str(p), {"success": True})
        assert yaml.safe_load(p.read_text()) == {"success": True}


class TestLogging:
    def test_writes_file(self, tmp_path: Path):
        log = tmp_path / "logs" / "bootstrap.log"
        assert configure_logging(str(log), also_console=False) == str(log)
        logging.getLogger("zsh_bootstrap.test").debug("hello debug")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "hello debug" in log.read_text()

    def test_second_call_is_noop(self, tmp_path: Path):
        first = configure_logging(str(tmp_path / "a.log"), also_console=False)
        count = len(logging.getLogger().handlers)
        assert configure_logging(str(tmp_path / "b.log"), also_console=False) == first
        assert len(logging.getLogger().handlers) == count

    def test_quiet_console_level(self, tmp_path: Path):
        configure_logging(str(tmp_path / "q.log"), quiet=True)
        consoles = [
            h
            for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler and h.level == logging.WARNING
        ]
        assert consoles
