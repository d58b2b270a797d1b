import json
from pathlib import Path
from unittest.mock import patch

import pytest

import config as cfg_module
from config import ChatConfig, ConfigError


def answers(*values):
    """Return an input() replacement that replays the given answers."""
    replies = iter(values)
    return lambda prompt="": next(replies)


# --- Location ---

def test_config_dir_override(config_home):
    assert cfg_module.get_config_file_path() == config_home / "config.json"


def test_posix_config_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("CHAR_CHAT_HOME", raising=False)
    monkeypatch.setattr(cfg_module.Path, "home", lambda: tmp_path)
    with patch("config.platform.system", return_value="Linux"):
        assert cfg_module.get_config_dir() == tmp_path / ".char-chat"


def test_windows_config_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("CHAR_CHAT_HOME", raising=False)
    monkeypatch.setattr(cfg_module.Path, "home", lambda: tmp_path)
    with patch("config.platform.system", return_value="Windows"):
        assert cfg_module.get_config_dir() == tmp_path / "AppData" / "Roaming" / "CharacterChat"


def test_home_dir_failure_is_fatal(monkeypatch):
    monkeypatch.delenv("CHAR_CHAT_HOME", raising=False)

    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(cfg_module.Path, "home", no_home)
    with pytest.raises(ConfigError, match="Error getting home directory"):
        cfg_module.get_config_dir()


def test_directory_creation_failure_is_fatal(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    with pytest.raises(ConfigError, match="Error creating directories"):
        cfg_module.setup_directories(blocker / "nested" / "config.json")


# --- Round trip ---

def test_default_config_round_trip(tmp_path):
    path = tmp_path / "config.json"
    defaults = ChatConfig()
    assert cfg_module.save_config(defaults, path)
    assert cfg_module.load_config(path) == defaults


def test_saved_file_layout(tmp_path):
    path = tmp_path / "config.json"
    cfg_module.write_config(ChatConfig(model="llama3.1:8b"), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data) == ["url", "model", "system", "definition", "greeting"]
    assert data["model"] == "llama3.1:8b"
    assert data["url"] == "http://localhost:11434/api/chat"
    assert path.read_text(encoding="utf-8").startswith('{\n  "url"')


def test_missing_keys_fall_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"model": "phi3", "extra": "ignored"}), encoding="utf-8")
    loaded = cfg_module.load_config(path)
    assert loaded.model == "phi3"
    assert loaded.greeting == ChatConfig().greeting


# --- Fatal load errors ---

def test_unreadable_config_is_fatal(tmp_path):
    with pytest.raises(ConfigError, match="Error reading config file"):
        cfg_module.load_config(tmp_path / "missing.json")


def test_invalid_json_is_fatal(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Error parsing config file"):
        cfg_module.load_config(path)


@pytest.mark.parametrize("content", ['["url"]', '{"model": 3}'])
def test_wrong_shape_is_fatal(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match="Error parsing config file"):
        cfg_module.load_config(path)


def test_save_failure_is_reported_not_raised(tmp_path):
    assert cfg_module.save_config(ChatConfig(), tmp_path / "no" / "such" / "dir.json") is False


# --- First-run bootstrap ---

def test_bootstrap_with_defaults(config_home, capsys):
    path = cfg_module.get_config_file_path()
    config = cfg_module.ensure_config(path, input_fn=answers("", "", ""))

    assert path.exists()
    assert config == ChatConfig()
    assert "Set Model: (Press Enter for default)" in capsys.readouterr().out


def test_bootstrap_with_overrides(config_home):
    path = cfg_module.get_config_file_path()
    config = cfg_module.ensure_config(path, input_fn=answers("llama3.1:8b", "You are Aria.", "Hello!"))

    assert config.model == "llama3.1:8b"
    assert config.definition == "You are Aria."
    assert config.greeting == "Hello!"
    assert config.system == ChatConfig().system
    assert cfg_module.load_config(path) == config


def test_existing_config_is_not_overwritten(config_home):
    path = Path(config_home) / "config.json"
    config_home.mkdir(parents=True)
    cfg_module.write_config(ChatConfig(model="phi3"), path)

    def fail(prompt=""):
        raise AssertionError("should not prompt")

    assert cfg_module.ensure_config(path, input_fn=fail).model == "phi3"


def test_set_option_rejects_unknown_option():
    with pytest.raises(KeyError):
        ChatConfig().set_option("temperature", "0.3")
