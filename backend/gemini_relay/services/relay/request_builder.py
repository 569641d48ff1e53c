"""
Input adapter and request builder.

Turns the raw client body into a ChatRequest and the ChatRequest into the
JSON payload expected by Gemini's generateContent method.
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from gemini_relay.services.relay.errors import ValidationError
from gemini_relay.services.relay.models import (
    USER_ROLE,
    ChatRequest,
    ChatTurn,
    GenerationConfig,
)
from gemini_relay.services.relay.observer import RelayObserver

# Gemini's vocabulary for everything that is not the user
MODEL_ROLE = "model"


def parse_chat_request(
    body: Any,
    default_model: str,
    observer: Optional[RelayObserver] = None,
) -> ChatRequest:
    """
    Validate a client body of the form {messages: [{role, content}], model?}.

    Args:
        body: Decoded JSON body
        default_model: Model used when the body does not select one
        observer: Receives a `chat_request.validated` event on success

    Returns:
        Immutable ChatRequest

    Raises:
        ValidationError: reason is one of invalid_body, missing_turns, invalid_turn
    """
    if not isinstance(body, dict):
        raise ValidationError("invalid_body")

    messages = body.get("messages")
    if not messages:
        raise ValidationError("missing_turns")
    if not isinstance(messages, list):
        raise ValidationError("invalid_turn", detail="messages must be a list")

    try:
        turns = tuple(ChatTurn.model_validate(m) for m in messages)
    except PydanticValidationError as e:
        raise ValidationError("invalid_turn", detail=str(e)) from e

    # No allow-list: unknown models are Gemini's problem to reject
    model = body.get("model")
    model_id = model if isinstance(model, str) and model.strip() else default_model

    request = ChatRequest(turns=turns, model_id=model_id)
    if observer is not None:
        observer.emit(
            "chat_request.validated",
            turn_count=len(request.turns),
            model=request.model_id,
        )
    return request


def to_gemini_role(role: str) -> str:
    return USER_ROLE if role == USER_ROLE else MODEL_ROLE


def build_contents(turns) -> List[Dict[str, Any]]:
    return [
        {"role": to_gemini_role(turn.role), "parts": [{"text": turn.content}]}
        for turn in turns
    ]


def build_generate_content_payload(
    request: ChatRequest, generation: GenerationConfig
) -> Dict[str, Any]:
    """Build the generateContent body. Pure: equal inputs give equal payloads."""
    return {
        "contents": build_contents(request.turns),
        "generationConfig": generation.to_payload(),
    }
