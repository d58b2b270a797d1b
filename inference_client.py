import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from chat_theme import print_request_data
from config import ChatConfig
from prompts import PREAMBLE_TEMPLATE
from transcript import Role, Transcript

logger = logging.getLogger("char_chat.inference")

REQUEST_HEADERS = {"Content-Type": "application/json"}

UNEXPECTED_FORMAT = "Unexpected response format"
NO_CONTENT = "No content received"


class InferenceError(Exception):
    """A failed chat call. str(error) is the text shown to the user."""


@dataclass(frozen=True)
class ResponseMessage:
    role: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class ChatResponse:
    """The subset of an /api/chat reply the client understands.

    Every field is optional; a backend that omits one yields None rather
    than an exception.
    """

    message: Optional[ResponseMessage] = None
    model: Optional[str] = None
    done: Optional[bool] = None
    total_duration: Optional[int] = None

    @classmethod
    def from_json(cls, data: Any) -> "ChatResponse":
        if not isinstance(data, dict):
            return cls()

        message = None
        raw_message = data.get("message")
        if isinstance(raw_message, dict):
            role = raw_message.get("role")
            content = raw_message.get("content")
            message = ResponseMessage(
                role=role if isinstance(role, str) else None,
                content=content if isinstance(content, str) else None,
            )

        model = data.get("model")
        done = data.get("done")
        total_duration = data.get("total_duration")
        return cls(
            message=message,
            model=model if isinstance(model, str) else None,
            done=done if isinstance(done, bool) else None,
            total_duration=total_duration if isinstance(total_duration, int) else None,
        )

    def reply_text(self) -> str:
        if self.message is None:
            raise InferenceError(UNEXPECTED_FORMAT)
        if self.message.content is None:
            raise InferenceError(NO_CONTENT)
        return self.message.content


def build_preamble(config: ChatConfig) -> str:
    return PREAMBLE_TEMPLATE.format(system=config.system, definition=config.definition)


def build_request(transcript: Transcript, config: ChatConfig) -> Dict[str, Any]:
    """Assemble the /api/chat body: preamble first, then the whole transcript."""
    messages = [{"role": Role.SYSTEM.value, "content": build_preamble(config)}]
    messages.extend(transcript.to_payload())
    return {
        "prompt": "",
        "model": config.model,
        "stream": False,
        "messages": messages,
    }


class InferenceClient:
    """
    Blocking client for a local Ollama-style chat endpoint.

    One HTTP session is reused for every turn. Calls never raise: any
    failure is turned into a readable placeholder so the chat loop keeps
    going and the user can simply try again.
    """

    def __init__(self, debug: bool = False, session: Optional[requests.Session] = None):
        self.debug = debug
        self._session = session

    def get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def complete(self, transcript: Transcript, config: ChatConfig) -> str:
        """
        Send the current conversation and return the reply text.

        Args:
            transcript: Conversation so far, ending with the user's message
            config: Current configuration (endpoint, model, prompts)

        Returns:
            str: The model's reply, or a placeholder describing the failure
        """
        start = time.monotonic()
        try:
            reply = self._complete(transcript, config)
        except InferenceError as e:
            logger.warning(f"Chat call to {config.url} failed: {e}")
            return str(e)
        logger.debug(
            f"Chat call to {config.model} took {time.monotonic() - start:.2f}s "
            f"({len(transcript) + 1} messages sent)"
        )
        return reply

    def _complete(self, transcript: Transcript, config: ChatConfig) -> str:
        data = build_request(transcript, config)
        if self.debug:
            print_request_data(data["messages"])

        try:
            body = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise InferenceError(f"Error preparing request: {e}") from e

        response = self._post(config.url, body)
        if not response.ok:
            logger.warning(f"Backend answered HTTP {response.status_code}")

        try:
            payload = json.loads(response.content)
        except ValueError as e:
            raise InferenceError(f"Error decoding response: {e}") from e

        parsed = ChatResponse.from_json(payload)
        logger.debug(f"Response: model={parsed.model} done={parsed.done} total_duration={parsed.total_duration}")
        return parsed.reply_text()

    def _post(self, url: str, body: str) -> requests.Response:
        # No timeout; blocks until the backend answers or the connection fails
        try:
            return self.get_session().post(url, data=body.encode("utf-8"), headers=REQUEST_HEADERS)
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as e:
            raise InferenceError(f"Request error: {e}") from e
        except requests.exceptions.RequestException as e:
            raise InferenceError(f"Response error: {e}") from e

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
