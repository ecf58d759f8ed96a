"""
Dialogue assembly: render the aggregated context into the Pillora system
message, prepend it to the conversation and shape the response payload.
"""

from __future__ import annotations

from typing import Dict, List, TYPE_CHECKING

from config import logger, REPLY_TEMPERATURE, REPLY_MAX_TOKENS
from models.context import AggregatedContext
from models.schemas import ChatResponse
from prompts.agent_prompts import (
    AGENT_NAME,
    PILLORA_SYSTEM_PROMPT,
    DRUG_SECTION_LABEL,
    RECALL_SECTION_LABEL,
    INTERACTION_SECTION_LABEL,
)
from utils.formatting_utils import format_recall_info, format_section, to_prompt_json

if TYPE_CHECKING:
    from services.llm_service import LLMService


def build_system_message(context: AggregatedContext) -> Dict[str, str]:
    """Absent or failed lookups render as omitted sections, never as errors."""
    drug_body = to_prompt_json(context.drug_info) if context.drug_info else ""
    interaction_body = to_prompt_json(context.interaction_info) if context.interaction_info else ""

    content = PILLORA_SYSTEM_PROMPT.format(
        agent_name=AGENT_NAME,
        intent=context.intent,
        entities=to_prompt_json(context.entities),
        drug_section=format_section(DRUG_SECTION_LABEL, drug_body),
        recall_section=format_section(RECALL_SECTION_LABEL, format_recall_info(context.recall_info)),
        interaction_section=format_section(INTERACTION_SECTION_LABEL, interaction_body),
    )
    return {"role": "system", "content": content.rstrip()}


def build_conversation(
    context: AggregatedContext,
    messages: List[Dict[str, str]],
) -> List[Dict[str, str]]:
    return [build_system_message(context), *messages]


class DialogueAssembler:
    def __init__(
        self,
        llm: "LLMService",
        temperature: float = REPLY_TEMPERATURE,
        max_tokens: int = REPLY_MAX_TOKENS,
    ):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def respond(
        self,
        context: AggregatedContext,
        messages: List[Dict[str, str]],
    ) -> ChatResponse:
        """Generate the reply and bundle it with the raw lookup data."""
        conversation = build_conversation(context, messages)
        reply = await self.llm.complete(
            conversation,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.info(f"[CHAT] Reply generated ({len(reply.get('content') or '')} chars)")
        return ChatResponse(
            reply=reply,
            recalls=context.recall_info,
            drugInfo=context.drug_info,
            interactions=context.interaction_info,
        )
