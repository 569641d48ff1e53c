"""
Thin async client for Gemini's generateContent REST method.

One POST per call, no retries. Failures are raised as typed relay errors so
the pipeline can turn them into diagnostic replies.
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from gemini_relay.services.relay.errors import (
    MalformedResponseError,
    MissingCredentialError,
    UnexpectedError,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def excerpt(text: str, limit: int) -> str:
    """First `limit` characters of a response body."""
    return text[:limit]


class GeminiClient:
    """Client for the Gemini generative-language API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        excerpt_length: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Gemini API key; empty means not configured
            base_url: API root, without trailing slash
            timeout: Seconds allowed for the whole upstream call
            excerpt_length: Max characters of an error body kept for diagnostics
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.excerpt_length = excerpt_length
        self.transport = transport

    def endpoint(self, model_id: str) -> str:
        # The legacy client sent "models/<name>"
        name = model_id[len("models/"):] if model_id.startswith("models/") else model_id
        return f"{self.base_url}/models/{name}:generateContent"

    async def generate_content(
        self, payload: Dict[str, Any], model_id: str
    ) -> Dict[str, Any]:
        """
        Send a generateContent request.

        Args:
            payload: Body built by the request builder
            model_id: Gemini model name, e.g. "gemini-2.0-flash"

        Returns:
            The parsed JSON response, unchanged

        Raises:
            MissingCredentialError: No API key; nothing is sent
            UpstreamHTTPError: Non-2xx status
            MalformedResponseError: 2xx body that is not a JSON object
            UnexpectedError: Transport-level failure (connect, timeout, ...)
        """
        if not self.api_key:
            raise MissingCredentialError()

        url = self.endpoint(model_id)
        # Key goes in a header so it never shows up in logged URLs
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise UnexpectedError(
                f"Gemini API did not answer within {self.timeout:g}s"
            ) from e
        except httpx.HTTPError as e:
            raise UnexpectedError(f"{type(e).__name__}: {e}") from e

        logger.info(
            "Gemini response received",
            extra={"status_code": response.status_code, "model": model_id},
        )

        body = response.text
        if not response.is_success:
            raise UpstreamHTTPError(
                response.status_code, excerpt(body, self.excerpt_length)
            )

        try:
            data = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError() from e
        if not isinstance(data, dict):
            raise MalformedResponseError()
        return data
