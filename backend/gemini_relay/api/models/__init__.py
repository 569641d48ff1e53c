from .chat import AskResponse, LegacyReplyResponse
from .error import ErrorResponse
from .health import ApiTestResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "AskResponse",
    "LegacyReplyResponse",
    "ApiTestResponse",
    "HealthResponse",
]
