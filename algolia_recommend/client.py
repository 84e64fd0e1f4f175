"""RecommendClient: typed client for the batched recommendations endpoint.

Builds request batches, hands them to a ``Dispatcher`` bound to the
client's ``HostPool`` and decodes the results.

Usage::

    async with RecommendClient("APPID", "KEY", default_object_id="sku-1") as client:
        resp = await client.get_recommendations(
            "products", [Model.BOUGHT_TOGETHER, Model.TRENDING_ITEMS]
        )
        print(resp.results[0].hits[0].object_id)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import httpx

from algolia_recommend.core.config import Settings
from algolia_recommend.dispatcher import Dispatcher
from algolia_recommend.models.schemas import (
    Model,
    RecommendationsBatch,
    RecommendRequest,
    RecommendResponse,
    TrendingFacetsRequest,
    TrendingFacetsResponse,
)
from algolia_recommend.resilience.host_pool import HostPool, custom_host_url, default_hosts

logger = logging.getLogger(__name__)

RECOMMEND_PATH = "/1/indexes/*/recommendations"


class RecommendClient:
    """Client for one Algolia application.

    Args:
        app_id:            Application ID.
        api_key:           API key with the ``recommendation`` ACL.
        hosts:             Explicit ordered host list, used verbatim.  When
                           omitted, the default hosts are derived from
                           *app_id* (or taken from ``Settings.HOSTS``).
        settings:          Timeouts and user agent; defaults to ``Settings()``.
        http_client:       Optional pre-built ``httpx.AsyncClient``.
        default_object_id: objectID used by ``get_recommendations`` for the
                           models that need one.
    """

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        hosts: Sequence[str] | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        default_object_id: str | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.app_id = app_id
        self.default_object_id = default_object_id

        if hosts is None:
            hosts = self.settings.HOSTS or default_hosts(app_id)
        self.pool = HostPool(hosts, fallback_url=f"https://{app_id}.algolia.net")
        self._dispatcher = Dispatcher(
            self.pool,
            app_id,
            api_key,
            settings=self.settings,
            http_client=http_client,
        )

    # ── Alternate constructors ──────────────────────────────────────────

    @classmethod
    def with_custom_host(cls, app_id: str, api_key: str, host: str, **kwargs: Any) -> "RecommendClient":
        """Pool of exactly one host; ``https://`` is assumed when no scheme is given."""
        return cls(app_id, api_key, hosts=[custom_host_url(host)], **kwargs)

    @classmethod
    def with_base_url(cls, app_id: str, api_key: str, base_url: str, **kwargs: Any) -> "RecommendClient":
        """Pool of exactly one base URL, used as given (e.g. a local mock server)."""
        return cls(app_id, api_key, hosts=[base_url], **kwargs)

    @classmethod
    def with_hosts(cls, app_id: str, api_key: str, hosts: Iterable[str], **kwargs: Any) -> "RecommendClient":
        """Pool of exactly *hosts*, in the given order."""
        return cls(app_id, api_key, hosts=list(hosts), **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "RecommendClient":
        """Build from ``ALGOLIA_RECOMMEND_*`` environment settings."""
        settings = settings or Settings()
        if not settings.APP_ID or not settings.API_KEY:
            raise ValueError("ALGOLIA_RECOMMEND_APP_ID and ALGOLIA_RECOMMEND_API_KEY are required")
        return cls(settings.APP_ID, settings.API_KEY, settings=settings, **kwargs)

    # ── Default objectID ────────────────────────────────────────────────

    def with_default_object_id(self, object_id: str) -> "RecommendClient":
        self.default_object_id = object_id
        return self

    def set_default_object_id(self, object_id: str) -> None:
        self.default_object_id = object_id

    # ── Public API ──────────────────────────────────────────────────────

    def _build_requests(self, index_name: str, models: Iterable[Model]) -> list[RecommendRequest]:
        requests = []
        for model in models:
            model = Model(model)
            if model is Model.TRENDING_FACETS:
                raise ValueError("trending-facets must be requested via get_trending_facets")
            if model is Model.TRENDING_ITEMS:
                requests.append(RecommendRequest.trending_items(index_name))
                continue
            if self.default_object_id is None:
                raise ValueError(
                    "default objectID not set; call with_default_object_id or set_default_object_id"
                )
            requests.append(RecommendRequest(index_name=index_name, model=model, object_id=self.default_object_id))
        return requests

    async def get_recommendations(
        self,
        index_name: str,
        models: Iterable[Model],
        payload_type: Any = dict,
    ) -> RecommendResponse:
        """Request one result set per model for the default objectID.

        Args:
            index_name:   Index to recommend from.
            models:       Models to query; trending-facets is not allowed.
            payload_type: Type each hit's remaining fields are decoded into.

        Raises:
            ValueError: For trending-facets or a missing default objectID.
        """
        return await self.recommend(self._build_requests(index_name, models), payload_type)

    async def recommend(
        self,
        requests: Sequence[RecommendRequest],
        payload_type: Any = dict,
    ) -> RecommendResponse:
        """Send caller-built requests as one batch."""
        batch = RecommendationsBatch(requests=list(requests))
        logger.debug("Sending %d recommendation request(s)", len(batch.requests))
        return await self._dispatcher.send(RECOMMEND_PATH, batch, RecommendResponse[payload_type])

    async def get_trending_facets(self, requests: Sequence[TrendingFacetsRequest]) -> TrendingFacetsResponse:
        """Send a batch of trending-facets requests.

        Raises:
            ValueError: If any request is not a trending-facets request.
        """
        if any(not isinstance(r, TrendingFacetsRequest) for r in requests):
            raise ValueError("all requests must use model=trending-facets")
        batch = RecommendationsBatch(requests=list(requests))
        return await self._dispatcher.send(RECOMMEND_PATH, batch, TrendingFacetsResponse)

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._dispatcher.close()

    async def __aenter__(self) -> "RecommendClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
