"""
Response normalizer.

Extracts the assistant's answer from a generateContent response, and renders
any pipeline failure as the diagnostic text shown to the client.
"""
import re
from typing import Any, Dict, Optional

from gemini_relay.services.relay.errors import (
    ContentBlockedError,
    NoTextReturnedError,
    RelayError,
)
from gemini_relay.services.relay.models import ChatReply


def _first(items: Any) -> Optional[Dict[str, Any]]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


def extract_answer_text(data: Dict[str, Any]) -> Optional[str]:
    """Text at candidates[0].content.parts[0].text, or None."""
    candidate = _first(data.get("candidates"))
    if candidate is None:
        return None
    content = candidate.get("content")
    if not isinstance(content, dict):
        return None
    part = _first(content.get("parts"))
    if part is None:
        return None
    text = part.get("text")
    return text if isinstance(text, str) and text else None


def extract_block_reason(data: Dict[str, Any]) -> Optional[str]:
    """The finish reason of the first candidate, or the prompt block reason."""
    candidate = _first(data.get("candidates"))
    if candidate is not None and candidate.get("finishReason"):
        return str(candidate["finishReason"])
    feedback = data.get("promptFeedback")
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        return str(feedback["blockReason"])
    return None


def normalize_response(data: Dict[str, Any]) -> ChatReply:
    """
    Turn a parsed generateContent response into a ChatReply.

    The answer text is returned exactly as Gemini formatted it.

    Raises:
        ContentBlockedError: no text, but a finish/block reason is present
        NoTextReturnedError: no text and no reason
    """
    text = extract_answer_text(data)
    if text is not None:
        return ChatReply(text=text)

    reason = extract_block_reason(data)
    if reason:
        raise ContentBlockedError(reason)
    raise NoTextReturnedError()


def diagnostic_reply(error: RelayError, secret: str = "") -> ChatReply:
    """Render a failure as reply text, never echoing `secret`.

    Only whole occurrences of the secret are masked; a short key never
    rewrites longer words that happen to contain it.
    """
    text = error.diagnostic()
    if secret:
        pattern = r"(?<![\w-])" + re.escape(secret) + r"(?![\w-])"
        text = re.sub(pattern, "***", text)
    return ChatReply(text=text)
