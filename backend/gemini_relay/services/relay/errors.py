"""
Failure taxonomy of the chat relay pipeline.

Every error carries a stable `code` and knows how to render itself as the
diagnostic text substituted for the assistant's answer.
"""
from typing import Optional

VALIDATION_REASONS = {
    "invalid_body": "request body must be a JSON object",
    "missing_turns": "no messages",
    "invalid_turn": "every message needs a role and non-empty text content",
}


class RelayError(Exception):
    """Base class for everything the pipeline degrades into a diagnostic reply."""

    code = "relay_error"

    def diagnostic(self) -> str:
        return f"Error [{self.code}]: {self}"


class ValidationError(RelayError):
    """The client body could not be turned into a chat request."""

    code = "validation_error"

    def __init__(self, reason: str, detail: Optional[str] = None):
        self.reason = reason
        self.detail = detail
        super().__init__(VALIDATION_REASONS.get(reason, reason))


class MissingCredentialError(RelayError):
    """No Gemini API key is configured on the server."""

    code = "missing_credential"

    def __init__(self):
        super().__init__(
            "API key is not configured. "
            "Create a .env file with GEMINI_API_KEY=<your key>"
        )


class UpstreamHTTPError(RelayError):
    """Gemini answered with a non-2xx status."""

    code = "upstream_http_error"

    def __init__(self, status: int, body_excerpt: str):
        self.status = status
        self.body_excerpt = body_excerpt
        super().__init__(f"Gemini API returned {status}: {body_excerpt}")


class MalformedResponseError(RelayError):
    """Gemini answered 2xx but the body is not a JSON object."""

    code = "malformed_response"

    def __init__(self):
        super().__init__("invalid response from Gemini API")


class ContentBlockedError(RelayError):
    """Gemini returned a finish/block reason instead of text."""

    code = "content_blocked"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    def diagnostic(self) -> str:
        return (
            f"Response blocked [{self.code}]: {self.reason}. "
            "Try rephrasing the question."
        )


class NoTextReturnedError(RelayError):
    """Gemini answered successfully but without any text."""

    code = "no_text_returned"

    def __init__(self):
        super().__init__("Gemini returned no answer text")


class UnexpectedError(RelayError):
    """Anything else, including network-level faults."""

    code = "unexpected_error"
