"""
The chat relay pipeline.

Received -> Validated -> Built -> Invoked -> Normalized -> Sent, with no
retries. A failure at any step skips straight to Normalized with a diagnostic
reply, so every request gets exactly one ChatReply.
"""
from typing import Any, Optional

from gemini_relay.services.gemini.client import GeminiClient
from gemini_relay.services.relay.errors import RelayError, UnexpectedError
from gemini_relay.services.relay.models import ChatRequest, GenerationConfig, RelayOutcome
from gemini_relay.services.relay.normalizer import diagnostic_reply, normalize_response
from gemini_relay.services.relay.observer import LoggingObserver, RelayObserver
from gemini_relay.services.relay.request_builder import (
    build_generate_content_payload,
    parse_chat_request,
)


class ChatRelayPipeline:
    """Validates a chat body, asks Gemini and normalizes the answer."""

    def __init__(
        self,
        client: GeminiClient,
        default_model: str,
        generation: Optional[GenerationConfig] = None,
        observer: Optional[RelayObserver] = None,
    ):
        self.client = client
        self.default_model = default_model
        self.generation = generation or GenerationConfig()
        self.observer = observer or LoggingObserver()

    async def run(self, body: Any) -> RelayOutcome:
        """Run the whole pipeline on a decoded client body. Never raises."""
        self.observer.emit("chat_request.received")
        try:
            request = parse_chat_request(body, self.default_model, self.observer)
        except RelayError as e:
            self.observer.emit("chat_request.rejected", reason=getattr(e, "reason", e.code))
            return self._degrade(e)

        return await self.relay(request)

    async def relay(self, request: ChatRequest) -> RelayOutcome:
        """Run an already validated request through build, invoke, normalize."""
        try:
            payload = build_generate_content_payload(request, self.generation)
            self.observer.emit(
                "gemini.request.sent",
                model=request.model_id,
                content_blocks=len(payload["contents"]),
            )
            data = await self.client.generate_content(payload, request.model_id)
            reply = normalize_response(data)
        except RelayError as e:
            self.observer.emit("gemini.request.failed", model=request.model_id, code=e.code)
            return self._degrade(e)
        except Exception as e:
            self.observer.emit(
                "gemini.request.failed",
                model=request.model_id,
                code=UnexpectedError.code,
                error_type=type(e).__name__,
            )
            return self._degrade(UnexpectedError(str(e)))

        self.observer.emit("chat_reply.ready", model=request.model_id, length=len(reply.text))
        return RelayOutcome(reply=reply)

    def _degrade(self, error: RelayError) -> RelayOutcome:
        reply = diagnostic_reply(error, secret=self.client.api_key)
        self.observer.emit("chat_reply.degraded", code=error.code)
        return RelayOutcome(reply=reply, error=error)
