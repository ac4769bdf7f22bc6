"""Tests for configuration loading."""

import json

from dirwm.config.loader import load_config, save_config
from dirwm.config.schema import Config


class TestDefaults:
    def test_defaults(self):
        config = Config()
        assert config.watch.root == "./fs"
        assert config.display.quit_key == "q"
        assert config.display.tag_suffix == "New Del Look"
        assert config.logging.level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DIRWM_WATCH__ROOT", "/srv/windows")
        monkeypatch.setenv("DIRWM_LOGGING__LEVEL", "debug")
        config = Config()
        assert config.watch.root == "/srv/windows"
        assert config.logging.level == "DEBUG"

    def test_root_path_expands_user(self):
        config = Config(watch={"root": "~/fs"})
        assert "~" not in str(config.root_path)


class TestLoader:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "config.json") == Config()

    def test_reads_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"display": {"quit_key": "x"}}), encoding="utf-8")
        config = load_config(path)
        assert config.display.quit_key == "x"
        assert config.watch.root == "./fs"

    def test_broken_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config(path) == Config()

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = Config()
        config.watch.root = "/data/fs"
        save_config(config, path)
        assert load_config(path).watch.root == "/data/fs"
