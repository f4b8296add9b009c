"""
Tests for settings and config path resolution.
"""

import json
import os
from pathlib import Path

import pytest

from smart_shell.config import PACKAGE_DATA_DIR, Config, ConfigPaths


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for var in Config.ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv(Config.SETTINGS_ENV_VAR, str(tmp_path / "settings.json"))
    # Keep find_dotenv away from any real .env above the test run
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env):
    config = Config()
    assert config.config_dir == PACKAGE_DATA_DIR
    assert config.strict_config is False
    assert config.os_name in ("windows", "linux", "darwin")


def test_env_vars(clean_env, tmp_path):
    clean_env.setenv("SMART_SHELL_CONFIG_DIR", str(tmp_path / "cfg"))
    clean_env.setenv("SMART_SHELL_STRICT_CONFIG", "yes")
    clean_env.setenv("SMART_SHELL_OS", "Darwin")

    config = Config()
    assert config.config_dir == tmp_path / "cfg"
    assert config.strict_config is True
    assert config.os_name == "darwin"


def test_dotenv_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text("SMART_SHELL_OS=windows\n", encoding="utf-8")
    try:
        assert Config().os_name == "windows"
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("SMART_SHELL_OS", None)


def test_overrides_beat_env(clean_env, tmp_path):
    clean_env.setenv("SMART_SHELL_OS", "darwin")
    config = Config(overrides={"os": "linux", "cwd": str(tmp_path), "config_dir": None})
    assert config.os_name == "linux"
    assert config.cwd == tmp_path.resolve()
    assert config.config_dir == PACKAGE_DATA_DIR


def test_settings_file(clean_env, tmp_path):
    (tmp_path / "settings.json").write_text(json.dumps({
        "os": "darwin",
        "strict_config": True,
        "log_level": "WARNING",
    }), encoding="utf-8")

    config = Config()
    assert config.os_name == "darwin"
    assert config.strict_config is True
    assert config.get("log_level") == "WARNING"
    assert config.get("log_file") is None


def test_env_and_overrides_beat_settings_file(clean_env, tmp_path):
    (tmp_path / "settings.json").write_text(
        json.dumps({"os": "darwin", "log_level": "ERROR"}), encoding="utf-8")
    clean_env.setenv("SMART_SHELL_LOG_LEVEL", "DEBUG")

    config = Config(overrides={"os": "windows"})
    assert config.os_name == "windows"
    assert config.get("log_level") == "DEBUG"


def test_explicit_settings_file(clean_env, tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"strict_config": "yes"}), encoding="utf-8")

    config = Config(settings_file=str(path))
    assert config.settings_file == path
    assert config.strict_config is True


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unusable_settings_file_falls_back_to_defaults(clean_env, tmp_path, content):
    (tmp_path / "settings.json").write_text(content, encoding="utf-8")

    config = Config()
    assert config.settings == Config.DEFAULT_CONFIG
    assert (tmp_path / "settings.json").read_text(encoding="utf-8") == content


def test_invalid_os(clean_env):
    with pytest.raises(ValueError):
        Config(overrides={"os": "plan9"}, load_env=False).os_name


def test_paths_prefer_cwd(tmp_path):
    cwd = tmp_path / "cwd"
    cfg = tmp_path / "cfg"
    cwd.mkdir()
    paths = ConfigPaths(cwd, cfg)

    assert paths.command_map == cfg / "command-map.json"
    (cwd / "command-map.json").write_text("{}", encoding="utf-8")
    assert paths.command_map == cwd / "command-map.json"
    assert paths.project_commands == cfg / "project-commands.json"


def test_packaged_tables_are_valid():
    """The shipped JSON files load through the typed records."""
    from smart_shell.tables import CommandTable, TranslationTable

    table = TranslationTable.from_dict(
        json.loads((PACKAGE_DATA_DIR / "command-map.json").read_text(encoding="utf-8")))
    assert table.replacement("rm -rf", "windows") == "rmdir /s /q"
    assert table.replacement("ls", "windows") == "dir"
    assert table.lookup("rm") is None

    commands = CommandTable.from_dict(
        json.loads((PACKAGE_DATA_DIR / "project-commands.json").read_text(encoding="utf-8")))
    assert commands.default == CommandTable.seed().default
    assert isinstance(PACKAGE_DATA_DIR, Path)
