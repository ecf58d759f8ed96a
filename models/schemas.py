"""
Pydantic models for extraction output and the chat API payloads.
"""

from __future__ import annotations

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import UNKNOWN_INTENT, PAIR_DELIMITER


_NULL_LITERALS = {"null", "none", "n/a"}


def _sanitize_entity_value(value: Optional[str]) -> Optional[str]:
    """Sanitize extracted values - removes None, empty strings, and 'null' literals."""
    if not value:
        return None
    value = value.strip()
    return value if value and value.lower() not in _NULL_LITERALS else None


# =============================================================================
# ENTITY EXTRACTION
# =============================================================================

class Entities(BaseModel):
    model_config = ConfigDict(extra="ignore")

    drugName: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    dosage: Optional[str] = None
    time: Optional[str] = None

    @field_validator("drugName", "dosage", "time", mode="before")
    @classmethod
    def _clean_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, list):
            # ["warfarin", "aspirin"] -> "warfarin, aspirin"
            if not all(isinstance(item, str) for item in v):
                raise ValueError("expected a list of strings")
            v = f"{PAIR_DELIMITER} ".join(item.strip() for item in v if item.strip())
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str):
            raise ValueError("expected a string")
        return _sanitize_entity_value(v)

    @field_validator("symptoms", mode="before")
    @classmethod
    def _clean_symptoms(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            raise ValueError("expected a list of symptoms")
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]


class ExtractedIntent(BaseModel):
    intent: str
    entities: Entities

    @field_validator("intent", mode="before")
    @classmethod
    def _clean_intent(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("intent must be a string")
        return v.strip() or UNKNOWN_INTENT

    @classmethod
    def unknown(cls) -> "ExtractedIntent":
        return cls(intent=UNKNOWN_INTENT, entities=Entities())

    @property
    def drug_name(self) -> Optional[str]:
        return self.entities.drugName

    def to_dict(self) -> Dict[str, Any]:
        """Only the entity keys the model actually supplied are kept."""
        return {
            "intent": self.intent,
            "entities": self.entities.model_dump(exclude_unset=True),
        }


# =============================================================================
# CHAT API
# =============================================================================

class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage]

    def last_user_message(self) -> Optional[str]:
        for msg in reversed(self.messages):
            if msg.role == "user" and msg.content.strip():
                return msg.content
        return None

    def as_turns(self) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in self.messages]


class ChatResponse(BaseModel):
    reply: Dict[str, Any]
    recalls: Optional[List[Dict[str, Any]]] = None
    drugInfo: Optional[Dict[str, Any]] = None
    interactions: Optional[Dict[str, Any]] = None
