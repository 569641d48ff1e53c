"""
Data model of the chat relay pipeline.

Everything here lives for a single request: a ChatRequest is parsed from the
client body, turned into a Gemini payload, and answered with a ChatReply.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from gemini_relay.services.relay.errors import RelayError

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


class ChatTurn(BaseModel):
    """One message of the transcript, tagged with its speaker role."""

    model_config = ConfigDict(frozen=True)

    role: str  # "user" | "assistant"; anything else is treated as non-user
    content: str = Field(min_length=1)


class ChatRequest(BaseModel):
    """Validated transcript (oldest first) plus the Gemini model to use."""

    model_config = ConfigDict(frozen=True)

    turns: Tuple[ChatTurn, ...] = Field(min_length=1)
    model_id: str


class GenerationConfig(BaseModel):
    """Fixed sampling parameters attached to every upstream request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = 0.9
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 8192

    def to_payload(self) -> dict:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


class ChatReply(BaseModel):
    """Normalized answer: the assistant text, or a diagnostic in its place."""

    text: str


class RelayOutcome(BaseModel):
    """Result of one pipeline run.

    `reply` is always set. `error` is the failure the diagnostic was built
    from, so transports that signal failures out of band can inspect it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    reply: ChatReply
    error: Optional[RelayError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
