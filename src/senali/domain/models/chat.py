"""
Chat Domain Models

Conversation turns exchanged with the model, and the reply returned
to the client.
"""

from dataclasses import dataclass, field
from datetime import datetime

from senali.domain.clock import utcnow


@dataclass
class ChatTurn:
    """A single user or assistant turn in OpenAI message format."""

    role: str
    content: str

    def to_message(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatReply:
    """
    Result of one chat exchange.

    Attributes:
        response: Assistant text
        model: Model that produced it
        tokens: Total tokens billed by the provider
        processing_time_ms: Provider latency
        remaining_credits: Balance after paying for the message
        timestamp: When the reply was stored
    """

    response: str
    model: str
    tokens: int
    processing_time_ms: int
    remaining_credits: int
    timestamp: datetime = field(default_factory=utcnow)
