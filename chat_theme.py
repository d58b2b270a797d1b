"""
Console styling for the character chat.

Colours are only emitted when stdout is a terminal and NO_COLOR is unset,
so piped output and captured test output stay plain.
"""

import os
import sys
import time
from typing import Dict, Iterable, Mapping

_RESET = '\033[0m'

_COLOR_MAP = {
    # Errors and warnings - clean red / amber
    '[WARNING]': '\033[38;2;255;193;7m',      # Amber warning: #FFC107
    '[ERROR]': '\033[38;2;220;53;69m',        # Clean red: #DC3545

    # Diagnostics - neutral gray
    '[DEBUG]': '\033[38;2;108;117;125m',      # Clean gray: #6C757D
    'Request Data:': '\033[38;2;108;117;125m',

    # Character replies - warm orange
    'Chatbot:': '\033[38;2;255;159;67m',      # Warm orange: #FF9F43

    # Reminders and banners - deep purple
    '[ REMINDER': '\033[38;2;139;69;235m',    # Deep purple: #8B45EB
    '[APP VERSION]': '\033[38;2;139;69;235m',
}

SEPARATOR = '[-----------------------------------]'


def supports_color(stream=None) -> bool:
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


def colorize(text: str) -> str:
    if not supports_color():
        return text
    for token, col in _COLOR_MAP.items():
        if token in text:
            return f"{col}{text}{_RESET}"
    return text


def echo(*args, **kwargs) -> None:
    print(*(colorize(str(arg)) for arg in args), **kwargs)


def banner(component: str) -> str:
    """Return a one-line session banner for the given component."""
    return f"{component} - session started {time.strftime('%Y-%m-%d %H:%M:%S')}"


def display_reply(reply: str) -> None:
    print(f"\n{SEPARATOR}\n")
    echo("Chatbot: " + reply)
    print(SEPARATOR)


def print_request_data(messages: Iterable[Mapping[str, str]]) -> None:
    echo("Request Data:")
    for i, message in enumerate(messages, start=1):
        print(f"\n[{i}] {message['role']}: {message['content']}", end="")
    print()


def print_debug_info(elapsed_seconds: float, messages: Iterable[Mapping[str, str]]) -> None:
    echo(f"\n[DEBUG] Response Time: {elapsed_seconds:.3f}s")
    print_request_data(messages)


def format_config(values: Dict[str, str], labels: Dict[str, str]) -> str:
    lines = ["\n[Current Configuration]:"]
    for option, label in labels.items():
        lines.append(f"{label}: {values[option]}")
    lines.append(
        "\nYou can edit any of these options by typing /config {option} where option "
        f"can be one of: {', '.join(labels)}."
    )
    return "\n".join(lines)
