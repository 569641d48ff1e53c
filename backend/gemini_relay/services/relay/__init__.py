"""Chat relay pipeline: client transcript in, Gemini answer (or diagnostic) out.

Import ChatRelayPipeline from `.pipeline`; it is not re-exported here.
"""
from .models import ChatReply, ChatRequest, ChatTurn, GenerationConfig, RelayOutcome
from .observer import LoggingObserver, RecordingObserver, RelayObserver

__all__ = [
    "ChatReply",
    "ChatRequest",
    "ChatTurn",
    "GenerationConfig",
    "RelayOutcome",
    "LoggingObserver",
    "RecordingObserver",
    "RelayObserver",
]
