"""
Chat input parsing and dispatch.

Every line typed at the prompt is parsed into exactly one command object;
anything that is not a recognised command becomes a ChatTurn for the model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from chat_theme import echo, format_config
from config import APP_VERSION, CONFIG_OPTIONS, prompt_user_for_input, save_config
from prompts import HELP_TEXT
from transcript import Role

if TYPE_CHECKING:
    from char_chat import ChatSession

logger = logging.getLogger("char_chat.commands")

EXIT_WORDS = ("exit", "quit")


@dataclass(frozen=True)
class ExitCommand:
    pass


@dataclass(frozen=True)
class ConfigCommand:
    option: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class VersionCommand:
    pass


@dataclass(frozen=True)
class HistoryCommand:
    role: Optional[Role] = None


@dataclass(frozen=True)
class HelpCommand:
    pass


@dataclass(frozen=True)
class ChatTurn:
    text: str


Command = Union[
    ExitCommand, ConfigCommand, VersionCommand, HistoryCommand, HelpCommand, ChatTurn
]


def parse_command(line: str) -> Command:
    text = line.strip()
    if text.lower() in EXIT_WORDS:
        return ExitCommand()

    head, _, rest = text.partition(" ")
    rest = rest.strip()

    if head == "/config":
        if not rest:
            return ConfigCommand()
        option, _, value = rest.partition(" ")
        value = value.strip()
        return ConfigCommand(option=option.lower(), value=value or None)

    if head == "/ver" and not rest:
        return VersionCommand()

    if head == "/hist":
        # Anything other than a known role shows the whole transcript
        if rest.lower() in (Role.USER.value, Role.ASSISTANT.value):
            return HistoryCommand(role=Role(rest.lower()))
        return HistoryCommand()

    if head == "/help" and not rest:
        return HelpCommand()

    return ChatTurn(text=text)


def dispatch(command: Command, session: "ChatSession") -> bool:
    """Run one command against the session. Returns False when the loop should stop."""
    if isinstance(command, ExitCommand):
        return False
    if isinstance(command, ChatTurn):
        session.chat(command.text)
        return True
    if isinstance(command, ConfigCommand):
        handle_config_command(command, session)
        return True
    if isinstance(command, VersionCommand):
        echo(f"\n[APP VERSION]: {APP_VERSION}")
        return True
    if isinstance(command, HistoryCommand):
        show_history(command.role, session)
        return True
    if isinstance(command, HelpCommand):
        print("\n" + HELP_TEXT)
        return True
    raise TypeError(f"Unhandled command: {command!r}")


def handle_config_command(command: ConfigCommand, session: "ChatSession") -> None:
    config = session.config

    if command.option is None:
        print(format_config(config.to_dict(), CONFIG_OPTIONS))
        return

    label = CONFIG_OPTIONS.get(command.option)
    if label is None:
        print(f"Invalid configuration option. Available options: {', '.join(CONFIG_OPTIONS)}.")
        return

    new_value = command.value
    if new_value is None:
        current = getattr(config, command.option)
        new_value = prompt_user_for_input(f"Enter new {label}", current, session.input_fn)

    config.set_option(command.option, new_value)
    logger.info(f"Config option '{command.option}' changed")

    if save_config(config, session.config_path):
        print("Config updated successfully.")
    else:
        echo("[ERROR]: Could not save the config file. The change applies to this session only.")


def show_history(role: Optional[Role], session: "ChatSession") -> None:
    transcript = session.transcript
    if role is Role.USER:
        print("\n[User Messages]:")
    elif role is Role.ASSISTANT:
        print("\n[Assistant Messages]:")
    else:
        print("\n[All Messages]:")
        for message in transcript.all():
            print(f"[{message.role.value.title()}]: {message.content}")
        return

    for message in transcript.filter(role):
        print(message.content)
