import asyncio

import pytest

from models.context import LookupResult, LOOKUP_FAILED, LOOKUP_OK
from models.schemas import Entities, ExtractedIntent
from services.aggregation_service import Aggregator
from services.dialogue_service import build_system_message
from services.extraction_service import parse_extraction


def make_aggregator(factory, drug=None, recall=None, interaction=None):
    drugs = factory(drug or LookupResult.success({"id": "label-1"}))
    recalls = factory(recall or LookupResult.success([{"reason_for_recall": "Subpotent", "status": "Ongoing"}]))
    interactions = factory(interaction or LookupResult.success({"safetyreportid": "1001"}))
    return Aggregator(drugs, recalls, interactions), drugs, recalls, interactions


def intent_for(drug_name=None) -> ExtractedIntent:
    entities = Entities(drugName=drug_name) if drug_name is not None else Entities()
    return ExtractedIntent(intent="Side Effects", entities=entities)


@pytest.mark.anyio
async def test_no_drug_entity_issues_no_lookups(recording_lookup_factory):
    aggregator, drugs, recalls, interactions = make_aggregator(recording_lookup_factory)

    context = await aggregator.aggregate(ExtractedIntent.unknown())

    assert drugs.calls == recalls.calls == interactions.calls == []
    assert context.drug_info is None
    assert context.recall_info is None
    assert context.interaction_info is None
    assert context.lookups == {}
    assert context.intent == "Unknown" and context.entities == {}


@pytest.mark.anyio
async def test_single_drug_runs_drug_and_recall_only(recording_lookup_factory):
    aggregator, drugs, recalls, interactions = make_aggregator(recording_lookup_factory)

    context = await aggregator.aggregate(intent_for("ibuprofen"))

    assert drugs.calls == [("ibuprofen",)]
    assert recalls.calls == [("ibuprofen",)]
    assert interactions.calls == []
    assert context.drug_info == {"id": "label-1"}
    assert context.recall_info[0]["status"] == "Ongoing"
    assert "interaction" not in context.lookups


@pytest.mark.anyio
async def test_pair_runs_interaction_on_trimmed_names(recording_lookup_factory):
    aggregator, drugs, recalls, interactions = make_aggregator(recording_lookup_factory)

    context = await aggregator.aggregate(intent_for("warfarin, aspirin"))

    assert interactions.calls == [("warfarin", "aspirin")]
    assert drugs.calls == [("warfarin, aspirin",)]
    assert recalls.calls == [("warfarin, aspirin",)]
    assert context.interaction_info == {"safetyreportid": "1001"}
    assert context.lookups == {"drug": LOOKUP_OK, "recall": LOOKUP_OK, "interaction": LOOKUP_OK}


@pytest.mark.anyio
async def test_recall_failure_keeps_drug_info(recording_lookup_factory):
    aggregator, *_ = make_aggregator(
        recording_lookup_factory,
        recall=LookupResult.failure("HTTP 500 from /drug/enforcement.json"),
    )

    context = await aggregator.aggregate(intent_for("ibuprofen"))

    assert context.drug_info == {"id": "label-1"}
    assert context.recall_info is None
    assert "recall" in context.lookups
    assert context.lookups["recall"] == LOOKUP_FAILED

    content = build_system_message(context)["content"]
    assert "Drug Information" in content
    assert "Recall Information" not in content
    assert "recall:" not in content


@pytest.mark.anyio
async def test_lookups_run_concurrently():
    started = []
    release = asyncio.Event()

    class Gate:
        async def _wait(self, name):
            started.append(name)
            if len(started) == 3:
                release.set()
            await asyncio.wait_for(release.wait(), timeout=1)
            return LookupResult.success({"name": name})

        async def fetch_drug_info(self, drug_name):
            return await self._wait("drug")

        async def fetch_recall_info(self, drug_name):
            return await self._wait("recall")

        async def check_drug_interactions(self, a, b):
            return await self._wait("interaction")

    gate = Gate()
    context = await Aggregator(gate, gate, gate).aggregate(intent_for("warfarin, aspirin"))

    assert sorted(started) == ["drug", "interaction", "recall"]
    assert context.drug_info == {"name": "drug"}


@pytest.mark.anyio
async def test_drug_name_list_takes_pair_path(recording_lookup_factory):
    aggregator, drugs, recalls, interactions = make_aggregator(recording_lookup_factory)
    extracted = parse_extraction(
        '{"intent": "Interactions", "entities": {"drugName": ["warfarin", "aspirin"]}}'
    )

    await aggregator.aggregate(extracted)

    assert interactions.calls == [("warfarin", "aspirin")]
    assert drugs.calls == [("warfarin, aspirin",)]


@pytest.mark.anyio
async def test_aggregate_logs_cache_hits(recording_lookup_factory, caplog):
    aggregator, *_ = make_aggregator(
        recording_lookup_factory,
        drug=LookupResult.success({"id": "label-1"}, cached=True),
    )
    caplog.set_level("INFO", logger="pillora_agent")

    await aggregator.aggregate(intent_for("ibuprofen"))

    assert "cache_hits=['drug']" in caplog.text
