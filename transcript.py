"""
Conversation transcript for a single chat run.

Messages are kept in the order they were added; that order is replayed
verbatim to the inference backend on every turn.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Union


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class Transcript:
    """Append-only list of role-tagged messages."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    @classmethod
    def seeded(cls, greeting: str) -> "Transcript":
        """Start a transcript with the character's greeting as its first turn."""
        transcript = cls()
        transcript.append(Role.ASSISTANT, greeting)
        return transcript

    def append(self, role: Union[Role, str], content: str) -> Message:
        message = Message(role=Role(role), content=content)
        self._messages.append(message)
        return message

    def all(self) -> List[Message]:
        return list(self._messages)

    def filter(self, role: Union[Role, str]) -> List[Message]:
        wanted = Role(role)
        return [m for m in self._messages if m.role is wanted]

    def to_payload(self) -> List[Dict[str, str]]:
        return [m.to_dict() for m in self._messages]

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)
