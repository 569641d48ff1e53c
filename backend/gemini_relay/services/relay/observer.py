"""
Structured events emitted by the relay pipeline.
"""
import json
import logging
from typing import Any, Dict, List, Tuple

logger = logging.getLogger("gemini_relay.relay")

# Events logged at WARNING instead of INFO
_WARNING_EVENTS = {
    "chat_request.rejected",
    "gemini.request.failed",
    "chat_reply.degraded",
}


class RelayObserver:
    """Receives one event (name + fields) per pipeline step."""

    def emit(self, event: str, **fields: Any) -> None:
        raise NotImplementedError


class LoggingObserver(RelayObserver):
    """Writes pipeline events to the standard logging system."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def emit(self, event: str, **fields: Any) -> None:
        level = logging.WARNING if event in _WARNING_EVENTS else logging.INFO
        # One JSON line per event
        message = json.dumps({"event": event, **fields}, default=str)
        self.log.log(level, message, extra={"event": event, "fields": fields})


class RecordingObserver(RelayObserver):
    """Keeps events in memory; used by tests and diagnostics."""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]
