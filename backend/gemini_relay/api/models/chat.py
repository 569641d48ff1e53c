"""
Response models for the chat relay endpoints.

Request bodies are read as raw JSON and validated by the relay pipeline, so
that malformed input still produces a well-formed reply.
"""
from pydantic import BaseModel


class AskResponse(BaseModel):
    """Reply of /api/ask. Failures are carried as diagnostic text."""

    assistant: str


class LegacyReplyResponse(BaseModel):
    """Successful reply of the deprecated /api endpoint."""

    reply: str
