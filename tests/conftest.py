import json
from typing import Any, Dict, List, Optional

import pytest

from models.context import LookupResult


@pytest.fixture
def anyio_backend():
    return "asyncio"


class StubLLM:
    """Stands in for LLMService: replays canned replies and records every call."""

    def __init__(self, *replies: Any):
        self._replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, messages, temperature, max_tokens=None):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return {"role": "assistant", "content": reply}


class RecordingLookup:
    """Fake lookup service that records its arguments and returns a fixed result."""

    def __init__(self, result: Optional[LookupResult] = None):
        self.result = result or LookupResult.success({"ok": True})
        self.calls: List[tuple] = []

    async def _record(self, *args):
        self.calls.append(args)
        return self.result

    async def fetch_drug_info(self, drug_name):
        return await self._record(drug_name)

    async def fetch_recall_info(self, drug_name):
        return await self._record(drug_name)

    async def check_drug_interactions(self, drug1, drug2):
        return await self._record(drug1, drug2)


@pytest.fixture
def stub_llm_factory():
    return StubLLM


@pytest.fixture
def recording_lookup_factory():
    return RecordingLookup
