"""
Chat pipeline: extraction -> aggregation -> dialogue, for one inbound request.
"""

from __future__ import annotations

from typing import Optional

from config import logger
from models.schemas import ChatRequest, ChatResponse
from services.aggregation_service import Aggregator
from services.dialogue_service import DialogueAssembler
from services.extraction_service import extract_intent
from services.llm_service import LLMService
from services.openfda_service import (
    OpenFDAClient,
    DrugLookupService,
    RecallLookupService,
    InteractionLookupService,
)
from utils.cache import TTLCache
from utils.latency_metrics import PipelineMetrics


class ChatPipeline:
    def __init__(
        self,
        llm: LLMService,
        aggregator: Aggregator,
        assembler: Optional[DialogueAssembler] = None,
    ):
        self.llm = llm
        self.aggregator = aggregator
        self.assembler = assembler or DialogueAssembler(llm)

    async def handle(self, request: ChatRequest) -> ChatResponse:
        """Raises on pipeline-fatal failures; the HTTP boundary turns them into a 500."""
        user_message = request.last_user_message()
        if user_message is None:
            raise ValueError("Request must include at least one user message")

        metrics = PipelineMetrics()
        logger.info(f"[CHAT] {len(request.messages)} messages, last user: {user_message[:100]!r}")

        extracted = await extract_intent(user_message, self.llm)
        metrics.mark("extraction_done")

        context = await self.aggregator.aggregate(extracted)
        metrics.mark("lookups_done")

        response = await self.assembler.respond(context, request.as_turns())
        metrics.mark("reply_done")
        metrics.log_request(extra=f"intent={extracted.intent} lookups={len(context.lookups)}")
        return response


def create_pipeline(
    cache: TTLCache,
    openfda: OpenFDAClient,
    llm: LLMService,
) -> ChatPipeline:
    """Wire the lookup services around one shared cache and openFDA client."""
    aggregator = Aggregator(
        drugs=DrugLookupService(cache, openfda),
        recalls=RecallLookupService(cache, openfda),
        interactions=InteractionLookupService(cache, openfda),
    )
    return ChatPipeline(llm=llm, aggregator=aggregator)
