"""Web presence prober using the Serper API.

Searches for "{brand} {product} official product" and reports whether an
official brand website shows up. Web corroboration is supplementary, so
the probe never raises past this module: timeouts, API errors and a
missing SERPER_API_KEY all come back as PresenceResult(success=False).

Official website heuristic:
- a result link contains the brand name (lower-cased, spaces removed), or
- a result title contains "official"

Usage:
    from authenticity_system.agents.verification.presence_prober import PresenceProber

    prober = PresenceProber()
    presence = await prober.probe("Acme", "Pain Relief 500mg")
"""

import asyncio
from typing import Any, Optional

import structlog
from langchain_community.utilities import GoogleSerperAPIWrapper

from authenticity_system.config.settings import settings
from authenticity_system.data_management.schemas import (
    UNKNOWN,
    PresenceResult,
    SearchHit,
)


class PresenceProber:
    """Probe the web for an official brand presence.

    Bounded by a timeout (default 5s from settings). The search wrapper is
    created lazily and can be injected for tests.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_results: Optional[int] = None,
        search_wrapper: Optional[Any] = None,
    ) -> None:
        """Initialize PresenceProber.

        Args:
            api_key: SERPER_API_KEY. Falls back to settings if not provided.
            timeout: Seconds to wait for the search before degrading.
            max_results: Maximum organic results kept.
            search_wrapper: Object exposing async aresults(query) -> dict.
        """
        self._api_key = api_key or settings.serper_api_key
        self.timeout = settings.presence_timeout_seconds if timeout is None else timeout
        self.max_results = max_results or settings.presence_max_results
        self._search_wrapper = search_wrapper
        self._logger = structlog.get_logger().bind(component="PresenceProber")

        if not self._api_key and search_wrapper is None:
            self._logger.warning(
                "serper_api_key_not_set",
                msg="SERPER_API_KEY not set, presence probes will report failure",
            )

    def _get_search_wrapper(self) -> Optional[Any]:
        """Lazy-init search wrapper."""
        if self._search_wrapper is None and self._api_key:
            self._search_wrapper = GoogleSerperAPIWrapper(
                serper_api_key=self._api_key,
                k=self.max_results,
                type="search",
            )
        return self._search_wrapper

    @staticmethod
    def build_query(brand_name: str, product_name: str) -> str:
        return f"{brand_name} {product_name} official product"

    async def probe(self, brand_name: str, product_name: str) -> PresenceResult:
        """Search for the brand and summarize its online presence.

        Args:
            brand_name: Brand read off the packaging.
            product_name: Product name read off the packaging.

        Returns:
            PresenceResult; success=False on any failure.
        """
        query = self.build_query(brand_name, product_name)

        try:
            wrapper = self._get_search_wrapper()
            if wrapper is None:
                return PresenceResult.failed(
                    "SERPER_API_KEY not configured", query=query
                )

            raw_results = await asyncio.wait_for(
                wrapper.aresults(query), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            self._logger.warning(
                "presence_probe_timeout", query=query[:80], timeout=self.timeout
            )
            return PresenceResult.failed(
                f"Search timed out after {self.timeout:g}s", query=query
            )
        except Exception as e:
            self._logger.error(
                "presence_probe_failed",
                query=query[:80],
                error=str(e),
            )
            return PresenceResult.failed(f"Failed to search online: {e}", query=query)

        if not isinstance(raw_results, dict):
            self._logger.error(
                "presence_probe_bad_payload", payload_type=type(raw_results).__name__
            )
            return PresenceResult.failed("Unexpected search response", query=query)

        hits = self._collect_hits(raw_results.get("organic") or [])
        has_official = self.has_official_website(brand_name, hits)

        self._logger.info(
            "presence_probe_complete",
            query=query[:80],
            results=len(hits),
            official_website=has_official,
        )
        return PresenceResult(
            success=True,
            has_official_website=has_official,
            total_results=len(hits),
            results=hits,
            query=query,
        )

    def _collect_hits(self, organic: list[Any]) -> list[SearchHit]:
        """Keep the first max_results entries that have both title and link."""
        hits: list[SearchHit] = []
        for result in organic:
            if len(hits) >= self.max_results:
                break
            if not isinstance(result, dict):
                continue
            title = str(result.get("title") or "").strip()
            link = str(result.get("link") or "").strip()
            if not title or not link:
                continue
            hits.append(
                SearchHit(
                    title=title,
                    link=link,
                    snippet=str(result.get("snippet") or ""),
                )
            )
        return hits

    @staticmethod
    def has_official_website(brand_name: str, hits: list[SearchHit]) -> bool:
        """True if a link contains the brand slug or a title says "official"."""
        brand_slug = "".join(brand_name.lower().split())
        match_links = bool(brand_slug) and brand_slug != UNKNOWN.lower()

        for hit in hits:
            if match_links and brand_slug in hit.link.lower():
                return True
            if "official" in hit.title.lower():
                return True
        return False
