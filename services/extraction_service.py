"""
LLM-based intent and entity extraction from the user's message.

Parse failures are soft: the caller always gets an ExtractedIntent,
falling back to intent="Unknown" with no entities.
"""

from __future__ import annotations

import json
from typing import List, Optional, Tuple, TYPE_CHECKING

from pydantic import ValidationError

from config import logger, EXTRACTION_TEMPERATURE, PAIR_DELIMITER
from models.schemas import ExtractedIntent
from prompts.agent_prompts import EXTRACTION_PROMPT

if TYPE_CHECKING:
    from services.llm_service import LLMService


def build_extraction_messages(message: str) -> List[dict]:
    return [{"role": "user", "content": EXTRACTION_PROMPT.format(message=message)}]


def parse_extraction(text: Optional[str]) -> ExtractedIntent:
    """Strict JSON parse + schema check. Never raises."""
    try:
        data = json.loads(text or "")
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"[NLP] Extraction reply is not JSON ({e}): {str(text)[:120]!r}")
        return ExtractedIntent.unknown()

    if not isinstance(data, dict) or "intent" not in data or "entities" not in data:
        logger.warning(f"[NLP] Extraction reply missing intent/entities: {str(text)[:120]!r}")
        return ExtractedIntent.unknown()

    try:
        return ExtractedIntent.model_validate(data)
    except ValidationError as e:
        logger.warning(f"[NLP] Extraction reply has invalid structure: {e.error_count()} error(s)")
        return ExtractedIntent.unknown()


async def extract_intent(message: str, llm: "LLMService") -> ExtractedIntent:
    """
    Run the fixed extraction prompt through the LLM and parse its JSON reply.
    No retry on parse failure; transport errors from the LLM propagate.
    """
    reply = await llm.complete(
        build_extraction_messages(message),
        temperature=EXTRACTION_TEMPERATURE,
    )
    extracted = parse_extraction(reply.get("content"))
    logger.info(f"[NLP] intent={extracted.intent} drugName={extracted.drug_name!r}")
    return extracted


def split_drug_pair(drug_name: str) -> Optional[Tuple[str, str]]:
    """
    "warfarin, aspirin" -> ("warfarin", "aspirin").
    Returns None when the name has no delimiter or fewer than two usable names.
    """
    if PAIR_DELIMITER not in drug_name:
        return None
    parts = [p.strip() for p in drug_name.split(PAIR_DELIMITER)]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]
