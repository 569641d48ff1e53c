"""
Chat relay endpoints.

POST /api/ask is the supported contract: always HTTP 200 with {assistant},
failures included. POST /api is the older envelope ({reply} or {error} with
an error status) and is kept only for existing clients.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from gemini_relay.api.models import AskResponse, ErrorResponse, LegacyReplyResponse
from gemini_relay.controllers.chat_controller import ChatController

logger = logging.getLogger(__name__)

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_controller() -> ChatController:
    """Dependency injection for ChatController."""
    return ChatController()


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        logger.warning("Request body is not valid JSON", extra={"path": request.url.path})
        return None


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/api/ask",
    status_code=status.HTTP_200_OK,
    response_model=AskResponse,
)
async def ask(
    request: Request,
    controller: ChatController = Depends(get_chat_controller),
) -> AskResponse:
    """
    Relay a chat transcript to Gemini.

    Body: {"messages": [{"role": "user" | "assistant", "content": str}, ...],
    "model": optional Gemini model name}.

    The response is always {"assistant": str}. When anything goes wrong the
    string is a diagnostic such as "Error [missing_credential]: ..." instead
    of the model's answer.
    """
    body = await read_json_body(request)
    return await controller.ask(body)


@router.post(
    "/api",
    deprecated=True,
    response_model=LegacyReplyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Server misconfigured or unexpected failure"},
        502: {"model": ErrorResponse, "description": "Gemini failed or returned no answer"},
    },
)
async def ask_legacy(
    request: Request,
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """
    Deprecated: use /api/ask.

    Accepts {"messages": [...], "model": optional}; plain string messages are
    treated as user turns. Returns {"reply": str} on success, and
    {"error": str, "code": str} with a 4xx/5xx status on failure.
    """
    body = await read_json_body(request)
    status_code, content = await controller.ask_legacy(body)
    return JSONResponse(status_code=status_code, content=content)
