"""Terminal chat with a character served by a local model.

Run ``char-chat`` (or ``python char_chat.py``) and type at the ``You:``
prompt. Lines starting with ``/`` are commands; see ``/help``.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

import config as cfg_module
from chat_theme import banner, display_reply, echo, print_debug_info
from commands import dispatch, parse_command
from config import ChatConfig, ConfigError
from inference_client import InferenceClient
from prompts import REMINDER_TEXT, SENSITIVE_CONTENT_WARNING
from transcript import Role, Transcript
from utils import contains_sensitive_content

logger = logging.getLogger("char_chat")


def configure_logging(debug: bool = False) -> None:
    if not logger.handlers:
        _handler = logging.StreamHandler()
        _formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        _handler.setFormatter(_formatter)
        logger.addHandler(_handler)
    if debug:
        logger.setLevel(logging.DEBUG)
        return
    try:
        logger.setLevel(getattr(logging, cfg_module.LOG_LEVEL))
    except (AttributeError, TypeError, ValueError):
        logger.setLevel(logging.WARNING)


class ChatSession:
    """Everything one chat run needs: config, transcript and the backend client."""

    def __init__(
        self,
        config: ChatConfig,
        config_path: Path,
        client: InferenceClient,
        transcript: Optional[Transcript] = None,
        debug: bool = False,
        input_fn: Optional[Callable[[str], str]] = None,
    ):
        self.config = config
        self.config_path = config_path
        self.client = client
        self.transcript = transcript if transcript is not None else Transcript.seeded(config.greeting)
        self.debug = debug
        self.input_fn = input_fn or input

    def greet(self) -> None:
        echo("\n" + REMINDER_TEXT)
        # The greeting was recorded when the transcript was seeded
        display_reply(self.transcript.all()[0].content)

    def chat(self, text: str) -> str:
        """Run one turn: record the user's text, ask the model, record and show the reply."""
        self.transcript.append(Role.USER, text)

        start = time.monotonic()
        reply = self.client.complete(self.transcript, self.config)
        elapsed = time.monotonic() - start

        if contains_sensitive_content(reply):
            echo("\n" + SENSITIVE_CONTENT_WARNING)
        display_reply(reply)
        self.transcript.append(Role.ASSISTANT, reply)

        if self.debug:
            print_debug_info(elapsed, self.transcript.to_payload())
        return reply


def run(session: ChatSession) -> None:
    session.greet()
    while True:
        try:
            line = session.input_fn("\nYou: ")
            if not dispatch(parse_command(line), session):
                break
        except (EOFError, KeyboardInterrupt):
            print()
            break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="char-chat",
        description="Chat with a character running on a local model server.",
    )
    parser.add_argument(
        "--debug", "-d", "--verbose", "-v",
        dest="debug",
        action="store_true",
        help="Print response times and the request sent on every turn",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    try:
        config_path = cfg_module.get_config_file_path()
        config = cfg_module.ensure_config(config_path)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nSetup cancelled.", file=sys.stderr)
        return 1

    logger.debug(banner("char-chat " + cfg_module.APP_VERSION))
    client = InferenceClient(debug=args.debug)
    session = ChatSession(config, config_path, client, debug=args.debug)
    try:
        run(session)
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
