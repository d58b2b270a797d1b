"""
Character Chat Configuration Management
=======================================

The chat client reads a small per-user JSON file holding the inference
endpoint, the model name and the character prompts. The file is created on
first run (asking the user for overrides) and rewritten in full whenever an
option is edited from the chat with /config.

Configuration Hierarchy:
1. Application constants (version, file names)
2. Environment overrides (.env or process environment)
3. Per-user config file (url, model, system, definition, greeting)

Environment Variables:
- CHAR_CHAT_HOME: directory holding config.json (default depends on the OS)
- CHAR_CHAT_LOG_LEVEL: console log level (default WARNING)
"""

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

from prompts import (
    DEFAULT_DEFINITION,
    DEFAULT_GREETING,
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
)

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger("char_chat.config")

# ============================================================================
# 1. APPLICATION CONSTANTS
# ============================================================================

APP_VERSION = "1.0.0"

CONFIG_FILE = "config.json"

DEFAULT_URL = "http://localhost:11434/api/chat"

WINDOWS_CONFIG_DIR = ("AppData", "Roaming", "CharacterChat")
POSIX_CONFIG_DIR = ".char-chat"

LOG_LEVEL = os.environ.get("CHAR_CHAT_LOG_LEVEL", "WARNING").upper()

# Options editable with /config, mapped to the label used when prompting
CONFIG_OPTIONS = {
    "url": "URL",
    "model": "Model",
    "system": "System Prompt",
    "definition": "Definition",
    "greeting": "Greeting",
}


class ConfigError(Exception):
    """Raised when the configuration cannot be located, created or read."""


@dataclass
class ChatConfig:
    url: str = DEFAULT_URL
    model: str = DEFAULT_MODEL
    system: str = DEFAULT_SYSTEM_PROMPT
    definition: str = DEFAULT_DEFINITION
    greeting: str = DEFAULT_GREETING

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "ChatConfig":
        """Build a config from parsed JSON.

        Keys missing from the file keep their defaults and unknown keys are
        ignored, so older config files keep working.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"expected a JSON object, got {type(data).__name__}")

        values = {}
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            if not isinstance(value, str):
                raise ConfigError(f"field '{field.name}' must be a string")
            values[field.name] = value
        return cls(**values)

    def set_option(self, option: str, value: str) -> None:
        if option not in CONFIG_OPTIONS:
            raise KeyError(option)
        setattr(self, option, value)


# ============================================================================
# 2. FILE LOCATION
# ============================================================================

def get_config_dir() -> Path:
    """Return the per-user directory holding the config file."""
    override = os.environ.get("CHAR_CHAT_HOME")
    if override:
        return Path(override).expanduser()

    try:
        home_dir = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError(f"Error getting home directory: {e}") from e

    if platform.system() == "Windows":
        return home_dir.joinpath(*WINDOWS_CONFIG_DIR)
    return home_dir / POSIX_CONFIG_DIR


def get_config_file_path() -> Path:
    return get_config_dir() / CONFIG_FILE


def setup_directories(config_path: Path) -> None:
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Error creating directories: {e}") from e


# ============================================================================
# 3. READ / WRITE
# ============================================================================

def prompt_user_for_input(
    prompt: str,
    default_value: str,
    input_fn: Optional[Callable[[str], str]] = None,
) -> str:
    """Ask for a value, falling back to default_value on an empty answer."""
    print(f"{prompt}: (Press Enter for default)")
    print(f"Default: {default_value}")
    if input_fn is None:
        input_fn = input
    answer = input_fn("Your Input: ").strip()
    return answer or default_value


def create_custom_config(
    config_path: Path,
    input_fn: Optional[Callable[[str], str]] = None,
) -> ChatConfig:
    """Write a first-run config, letting the user override the defaults.

    The system prompt is not offered for editing here; use /config system.
    """
    defaults = ChatConfig()
    config = ChatConfig(
        url=defaults.url,
        model=prompt_user_for_input("Set Model", defaults.model, input_fn),
        system=defaults.system,
        definition=prompt_user_for_input("Set Character Definition", defaults.definition, input_fn),
        greeting=prompt_user_for_input("Set Greeting", defaults.greeting, input_fn),
    )
    try:
        write_config(config, config_path)
    except OSError as e:
        raise ConfigError(f"Error creating default config file: {e}") from e
    logger.info(f"Created config file at {config_path}")
    return config


def write_config(config: ChatConfig, config_path: Path) -> None:
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def load_config(config_path: Optional[Path] = None) -> ChatConfig:
    if config_path is None:
        config_path = get_config_file_path()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error reading config file: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error parsing config file: {e}") from e

    try:
        config = ChatConfig.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"Error parsing config file: {e}") from e

    logger.debug(f"Loaded config from {config_path} (model={config.model}, url={config.url})")
    return config


def save_config(config: ChatConfig, config_path: Optional[Path] = None) -> bool:
    """Persist the whole config. Returns False if the file could not be written."""
    if config_path is None:
        config_path = get_config_file_path()
    try:
        write_config(config, config_path)
    except OSError as e:
        logger.error(f"Error saving config file: {e}")
        return False
    return True


def ensure_config(
    config_path: Optional[Path] = None,
    input_fn: Optional[Callable[[str], str]] = None,
) -> ChatConfig:
    """Create the config directory and file when missing, then load it."""
    if config_path is None:
        config_path = get_config_file_path()
    setup_directories(config_path)
    if not config_path.exists():
        create_custom_config(config_path, input_fn)
    return load_config(config_path)
