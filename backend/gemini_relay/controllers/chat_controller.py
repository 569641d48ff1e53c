"""
Chat controller for the Gemini relay endpoints.

Wires settings into the relay pipeline and maps its outcome onto the two
response envelopes the browser clients understand.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from fastapi import status

from gemini_relay.api.models import AskResponse, ErrorResponse, LegacyReplyResponse
from gemini_relay.config.settings import Settings, get_settings
from gemini_relay.services.gemini import GeminiClient
from gemini_relay.services.relay import RelayObserver
from gemini_relay.services.relay.pipeline import ChatRelayPipeline
from gemini_relay.services.relay.errors import (
    ContentBlockedError,
    MalformedResponseError,
    MissingCredentialError,
    NoTextReturnedError,
    RelayError,
    UpstreamHTTPError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# HTTP status used by the deprecated /api endpoint for each failure kind
LEGACY_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    MissingCredentialError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UpstreamHTTPError: status.HTTP_502_BAD_GATEWAY,
    MalformedResponseError: status.HTTP_502_BAD_GATEWAY,
    ContentBlockedError: status.HTTP_502_BAD_GATEWAY,
    NoTextReturnedError: status.HTTP_502_BAD_GATEWAY,
}


def legacy_status_for(error: RelayError) -> int:
    return LEGACY_STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)


def legacy_body_to_chat_body(body: Any) -> Any:
    """Rewrite bare string messages of a legacy body as user turns."""
    if not isinstance(body, dict) or not isinstance(body.get("messages"), list):
        return body
    messages: List[Any] = [
        {"role": "user", "content": m} if isinstance(m, str) else m
        for m in body["messages"]
    ]
    return {**body, "messages": messages}


class ChatController:
    """Controller for chat relay operations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        observer: Optional[RelayObserver] = None,
    ):
        """
        Build the relay pipeline from settings.

        Args:
            settings: Application settings (defaults to the cached ones)
            transport: Optional httpx transport for the Gemini client
            observer: Optional receiver of pipeline events
        """
        self.settings = settings or get_settings()
        client = GeminiClient(
            api_key=self.settings.gemini_api_key,
            base_url=self.settings.gemini_api_base_url,
            timeout=self.settings.gemini_timeout_seconds,
            excerpt_length=self.settings.diagnostic_excerpt_length,
            transport=transport,
        )
        self.pipeline = ChatRelayPipeline(
            client=client,
            default_model=self.settings.gemini_model,
            generation=self.settings.generation_config,
            observer=observer,
        )

    async def ask(self, body: Any) -> AskResponse:
        """
        Relay a chat body and wrap the result for /api/ask.

        Failures never surface as exceptions; the diagnostic text takes the
        place of the assistant's answer.
        """
        outcome = await self.pipeline.run(body)
        return AskResponse(assistant=outcome.reply.text)

    async def ask_legacy(self, body: Any) -> Tuple[int, Dict[str, Any]]:
        """
        Relay a chat body for the deprecated /api endpoint.

        Returns:
            (HTTP status, JSON body): 200 with {reply} on success,
            otherwise an error status with {error}
        """
        outcome = await self.pipeline.run(legacy_body_to_chat_body(body))
        if outcome.ok:
            return status.HTTP_200_OK, LegacyReplyResponse(reply=outcome.reply.text).model_dump()

        error = outcome.error
        logger.warning(
            "Legacy chat request failed",
            extra={"code": error.code, "error_type": type(error).__name__},
        )
        content = ErrorResponse(error=outcome.reply.text, code=error.code)
        return legacy_status_for(error), content.model_dump(exclude_none=True)
