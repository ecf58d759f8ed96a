"""
Data models for the Pillora assistant.
"""

from .schemas import (
    Entities,
    ExtractedIntent,
    ChatMessage,
    ChatRequest,
    ChatResponse,
)
from .context import (
    LookupResult,
    AggregatedContext,
    LOOKUP_OK,
    LOOKUP_FAILED,
)

__all__ = [
    "Entities",
    "ExtractedIntent",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "LookupResult",
    "AggregatedContext",
    "LOOKUP_OK",
    "LOOKUP_FAILED",
]
