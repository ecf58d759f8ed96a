"""
Aggregator: decides which openFDA lookups a request needs, runs them
concurrently and merges their results into one AggregatedContext.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Dict

from config import logger
from models.context import AggregatedContext, LookupResult
from models.schemas import ExtractedIntent
from services.extraction_service import split_drug_pair
from services.openfda_service import (
    DrugLookupService,
    RecallLookupService,
    InteractionLookupService,
)

DRUG_LOOKUP = "drug"
RECALL_LOOKUP = "recall"
INTERACTION_LOOKUP = "interaction"


class Aggregator:
    def __init__(
        self,
        drugs: DrugLookupService,
        recalls: RecallLookupService,
        interactions: InteractionLookupService,
    ):
        self.drugs = drugs
        self.recalls = recalls
        self.interactions = interactions

    def plan(self, extracted: ExtractedIntent) -> Dict[str, Awaitable[LookupResult]]:
        """
        Lookups to issue for this intent, keyed by lookup name.

        Drug and recall lookups use the raw drugName even when it names a pair;
        only the interaction lookup uses the split, trimmed names.
        """
        drug_name = extracted.drug_name
        if not drug_name:
            return {}

        calls: Dict[str, Awaitable[LookupResult]] = {
            DRUG_LOOKUP: self.drugs.fetch_drug_info(drug_name),
            RECALL_LOOKUP: self.recalls.fetch_recall_info(drug_name),
        }
        pair = split_drug_pair(drug_name)
        if pair:
            calls[INTERACTION_LOOKUP] = self.interactions.check_drug_interactions(*pair)
        return calls

    async def aggregate(self, extracted: ExtractedIntent) -> AggregatedContext:
        context = AggregatedContext.from_intent(extracted)
        calls = self.plan(extracted)
        if not calls:
            logger.info("[AGGREGATE] No drug entity, skipping lookups")
            return context

        names = list(calls)
        # Lookups never raise; gather waits for every issued call
        results = await asyncio.gather(*calls.values())
        outcome = dict(zip(names, results))

        if DRUG_LOOKUP in outcome:
            context.drug_info = context.record(DRUG_LOOKUP, outcome[DRUG_LOOKUP])
        if RECALL_LOOKUP in outcome:
            context.recall_info = context.record(RECALL_LOOKUP, outcome[RECALL_LOOKUP])
        if INTERACTION_LOOKUP in outcome:
            context.interaction_info = context.record(INTERACTION_LOOKUP, outcome[INTERACTION_LOOKUP])

        for name, result in outcome.items():
            if not result.ok:
                logger.warning(f"[AGGREGATE] {name} lookup omitted: {result.error}")
        cache_hits = [name for name, result in outcome.items() if result.ok and result.cached]
        logger.info(f"[AGGREGATE] lookups={context.lookups} cache_hits={cache_hits}")
        return context
