"""Typed async client for the Algolia Recommend batched recommendations API.

Calls are spread across several equivalent hosts and fail over to the
next host on timeouts, connection failures, 5xx and 429 responses.
"""

from algolia_recommend.client import RECOMMEND_PATH, RecommendClient
from algolia_recommend.core.config import Settings
from algolia_recommend.core.errors import (
    ApiError,
    DecodeError,
    ErrorDetail,
    HostsExhaustedError,
    RecommendError,
    TransportError,
)
from algolia_recommend.dispatcher import AttemptOutcome, Dispatcher, OutcomeKind
from algolia_recommend.models.schemas import (
    Hit,
    Model,
    RecommendationsBatch,
    RecommendRequest,
    RecommendResponse,
    RecommendResult,
    TrendingFacetsRequest,
    TrendingFacetsResponse,
    TrendingFacetsResult,
    TrendingFacetValue,
)
from algolia_recommend.resilience import HostPool

__all__ = [
    "RECOMMEND_PATH",
    "ApiError",
    "AttemptOutcome",
    "DecodeError",
    "Dispatcher",
    "ErrorDetail",
    "Hit",
    "HostPool",
    "HostsExhaustedError",
    "Model",
    "OutcomeKind",
    "RecommendClient",
    "RecommendError",
    "RecommendRequest",
    "RecommendResponse",
    "RecommendResult",
    "RecommendationsBatch",
    "Settings",
    "TransportError",
    "TrendingFacetValue",
    "TrendingFacetsRequest",
    "TrendingFacetsResponse",
    "TrendingFacetsResult",
]
