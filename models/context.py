"""
Pipeline state containers: lookup results and the aggregated drug context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Generic, TypeVar

from models.schemas import ExtractedIntent

T = TypeVar("T")

LOOKUP_OK = "ok"
LOOKUP_FAILED = "failed"


# =============================================================================
# LOOKUP RESULT
# =============================================================================

@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Ok(value) or Err(reason) from one openFDA lookup."""
    value: Optional[T] = None
    error: Optional[str] = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, cached: bool = False) -> "LookupResult[T]":
        return cls(value=value, cached=cached)

    @classmethod
    def failure(cls, reason: str) -> "LookupResult[T]":
        return cls(error=reason or "unknown error")

    def unwrap_or_none(self) -> Optional[T]:
        return self.value if self.ok else None


# =============================================================================
# AGGREGATED CONTEXT
# =============================================================================

@dataclass
class AggregatedContext:
    """
    Everything the dialogue turn needs for one request.

    `lookups` records which lookups were attempted: a name absent from it was
    not applicable, a name mapped to "failed" was attempted and returned nothing.
    """
    intent: str
    entities: Dict[str, Any] = field(default_factory=dict)
    drug_info: Optional[Dict[str, Any]] = None
    recall_info: Optional[List[Dict[str, Any]]] = None
    interaction_info: Optional[Dict[str, Any]] = None
    lookups: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_intent(cls, extracted: ExtractedIntent) -> "AggregatedContext":
        data = extracted.to_dict()
        return cls(intent=data["intent"], entities=data["entities"])

    def record(self, lookup: str, result: LookupResult) -> Optional[Any]:
        """Store a lookup outcome and return its value (None on failure)."""
        self.lookups[lookup] = LOOKUP_OK if result.ok else LOOKUP_FAILED
        return result.unwrap_or_none()
