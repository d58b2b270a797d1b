import logging
import os
import sys

import pytest

# Add the project root to the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import ChatConfig  # noqa: E402

CHAT_URL = "http://localhost:11434/api/chat"


@pytest.fixture
def chat_config():
    """A config pointing at the default local endpoint with short prompts."""
    return ChatConfig(
        url=CHAT_URL,
        model="gemma2:2b",
        system="Stay in character.",
        definition="Your name is Gemma.",
        greeting="Heya, I'm Gemma.",
    )


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the per-user config directory at a temporary folder."""
    home = tmp_path / "char-chat-home"
    monkeypatch.setenv("CHAR_CHAT_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_chat_logger():
    """Drop handlers main() attaches so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("char_chat")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
