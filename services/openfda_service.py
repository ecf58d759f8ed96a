"""
openFDA lookup services.

Handles:
- Drug label lookup by generic or brand name
- Enforcement (recall) reports by product description
- Adverse-event reports mentioning a pair of drugs

Every lookup is cache-checked first and never raises: origin failures come
back as LookupResult.failure(reason).
"""

from __future__ import annotations

from typing import Optional, Dict, Any, List

import httpx

from config import (
    logger,
    OPENFDA_BASE_URL,
    OPENFDA_API_KEY,
    OPENFDA_TIMEOUT,
    DRUG_LABEL_LIMIT,
    RECALL_LIMIT,
    INTERACTION_LIMIT,
)
from models.context import LookupResult
from utils.cache import TTLCache

LABEL_ENDPOINT = "/drug/label.json"
ENFORCEMENT_ENDPOINT = "/drug/enforcement.json"
EVENT_ENDPOINT = "/drug/event.json"


class OpenFDAError(Exception):
    """Transport or origin failure for a single openFDA query."""


# =============================================================================
# TRANSPORT
# =============================================================================

class OpenFDAClient:
    """Read-only openFDA query client over a shared httpx.AsyncClient."""

    def __init__(
        self,
        http: Optional[httpx.AsyncClient] = None,
        base_url: str = OPENFDA_BASE_URL,
        api_key: Optional[str] = OPENFDA_API_KEY,
        timeout: float = OPENFDA_TIMEOUT,
    ):
        self._http = http
        self._owns_http = http is None
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
        return self._http

    async def search(self, endpoint: str, search: str, limit: int) -> List[Dict[str, Any]]:
        """Run one search query and return its `results` array."""
        params: Dict[str, Any] = {"search": search, "limit": limit}
        if self.api_key:
            params["api_key"] = self.api_key

        try:
            response = await self.http.get(f"{self.base_url}{endpoint}", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise OpenFDAError(f"HTTP {e.response.status_code} from {endpoint}") from e
        except httpx.HTTPError as e:
            raise OpenFDAError(f"{type(e).__name__} calling {endpoint}: {e}") from e
        except ValueError as e:
            raise OpenFDAError(f"Invalid JSON from {endpoint}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise OpenFDAError(f"No results array from {endpoint}")
        return results

    async def aclose(self):
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None


# =============================================================================
# CACHED LOOKUPS
# =============================================================================

class _CachedLookup:
    """Shared cache-then-origin flow for the three lookup services."""

    name = "lookup"

    def __init__(self, cache: TTLCache, client: OpenFDAClient):
        self.cache = cache
        self.client = client

    def _cache_get(self, key: str) -> Optional[Any]:
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning(f"[CACHE] get {key!r} failed, falling through to origin: {e}")
            return None

    def _cache_set(self, key: str, value: Any):
        try:
            self.cache.set(key, value)
        except Exception as e:
            logger.warning(f"[CACHE] set {key!r} failed: {e}")

    async def _lookup(self, key: str, endpoint: str, search: str, limit: int, first_only: bool) -> LookupResult:
        cached = self._cache_get(key)
        if cached is not None:
            logger.debug(f"[CACHE] HIT {key}")
            return LookupResult.success(cached, cached=True)

        try:
            results = await self.client.search(endpoint, search, limit)
            if first_only:
                if not results:
                    raise OpenFDAError(f"Empty results from {endpoint}")
                value = results[0]
            else:
                value = results
        except OpenFDAError as e:
            logger.warning(f"[OPENFDA] {self.name} lookup failed for {key!r}: {e}")
            return LookupResult.failure(str(e))
        except Exception as e:
            logger.error(f"[OPENFDA] {self.name} lookup error for {key!r}: {e}")
            return LookupResult.failure(f"{type(e).__name__}: {e}")

        self._cache_set(key, value)
        logger.debug(f"[CACHE] MISS {key} -> stored")
        return LookupResult.success(value)


class DrugLookupService(_CachedLookup):
    name = "drug"

    async def fetch_drug_info(self, drug_name: str) -> LookupResult:
        """First label document matching the generic or brand name."""
        return await self._lookup(
            key=f"drug_{drug_name}",
            endpoint=LABEL_ENDPOINT,
            search=f'openfda.generic_name:"{drug_name}" OR openfda.brand_name:"{drug_name}"',
            limit=DRUG_LABEL_LIMIT,
            first_only=True,
        )


class RecallLookupService(_CachedLookup):
    name = "recall"

    async def fetch_recall_info(self, drug_name: str) -> LookupResult:
        """Up to RECALL_LIMIT enforcement reports mentioning the product."""
        return await self._lookup(
            key=f"recall_{drug_name}",
            endpoint=ENFORCEMENT_ENDPOINT,
            search=f'product_description:"{drug_name}"',
            limit=RECALL_LIMIT,
            first_only=False,
        )


class InteractionLookupService(_CachedLookup):
    name = "interaction"

    async def check_drug_interactions(self, drug1: str, drug2: str) -> LookupResult:
        """
        First adverse-event report listing both drugs.
        The cache key is order-sensitive: (a, b) and (b, a) are separate entries.
        """
        return await self._lookup(
            key=f"interaction_{drug1}_{drug2}",
            endpoint=EVENT_ENDPOINT,
            search=(
                f'patient.drug.openfda.generic_name:"{drug1}" '
                f'AND patient.drug.openfda.generic_name:"{drug2}"'
            ),
            limit=INTERACTION_LIMIT,
            first_only=True,
        )
