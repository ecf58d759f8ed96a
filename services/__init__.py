"""
Service modules package.

This package contains business logic services for:
- Entity extraction (LLM)
- openFDA drug, recall and interaction lookups
- Context aggregation and dialogue assembly
"""

from .llm_service import LLMService
from .extraction_service import (
    extract_intent,
    parse_extraction,
    split_drug_pair,
)
from .openfda_service import (
    OpenFDAClient,
    OpenFDAError,
    DrugLookupService,
    RecallLookupService,
    InteractionLookupService,
)
from .aggregation_service import Aggregator
from .dialogue_service import (
    DialogueAssembler,
    build_system_message,
    build_conversation,
)
from .chat_service import ChatPipeline, create_pipeline

__all__ = [
    "LLMService",
    "extract_intent",
    "parse_extraction",
    "split_drug_pair",
    "OpenFDAClient",
    "OpenFDAError",
    "DrugLookupService",
    "RecallLookupService",
    "InteractionLookupService",
    "Aggregator",
    "DialogueAssembler",
    "build_system_message",
    "build_conversation",
    "ChatPipeline",
    "create_pipeline",
]
