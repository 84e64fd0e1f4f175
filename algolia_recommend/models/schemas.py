"""Recommendation request/response Pydantic models.

Request models serialize to the camelCase wire format (``indexName``,
``objectID``, ...) via field aliases; both the alias and the Python field
name are accepted on input.  Response models are generic over the hit
payload type so callers decode straight into their own record shape.
"""

from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

PayloadT = TypeVar("PayloadT")


class Model(str, Enum):
    """Recommendation model names as sent on the wire."""

    BOUGHT_TOGETHER = "bought-together"
    RELATED_PRODUCTS = "related-products"
    TRENDING_ITEMS = "trending-items"
    TRENDING_FACETS = "trending-facets"
    LOOKING_SIMILAR = "looking-similar"

    @property
    def requires_object_id(self) -> bool:
        return self in _OBJECT_ID_MODELS


_OBJECT_ID_MODELS = frozenset({Model.BOUGHT_TOGETHER, Model.RELATED_PRODUCTS, Model.LOOKING_SIMILAR})


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Requests ────────────────────────────────────────────────────────────


class RecommendRequest(_WireModel):
    """One item-recommendation request inside a batch."""

    index_name: str = Field(..., min_length=1, alias="indexName")
    model: Model
    object_id: str | None = Field(default=None, min_length=1, alias="objectID")
    threshold: int = Field(default=0, ge=0, le=100)
    max_recommendations: int | None = Field(default=None, ge=1, alias="maxRecommendations")
    facet_name: str | None = Field(default=None, alias="facetName")
    facet_value: str | None = Field(default=None, alias="facetValue")
    query_parameters: dict[str, Any] | None = Field(default=None, alias="queryParameters")

    @model_validator(mode="after")
    def check_model_fields(self) -> "RecommendRequest":
        if self.model is Model.TRENDING_FACETS:
            raise ValueError("trending-facets requests must use TrendingFacetsRequest")
        if self.model.requires_object_id and self.object_id is None:
            raise ValueError(f"{self.model.value} requires objectID")
        if self.facet_value is not None and self.facet_name is None:
            raise ValueError("facetValue requires facetName")
        return self

    @classmethod
    def bought_together(cls, index_name: str, object_id: str, **kwargs: Any) -> "RecommendRequest":
        return cls(index_name=index_name, model=Model.BOUGHT_TOGETHER, object_id=object_id, **kwargs)

    @classmethod
    def related_products(cls, index_name: str, object_id: str, **kwargs: Any) -> "RecommendRequest":
        return cls(index_name=index_name, model=Model.RELATED_PRODUCTS, object_id=object_id, **kwargs)

    @classmethod
    def trending_items(cls, index_name: str, **kwargs: Any) -> "RecommendRequest":
        return cls(index_name=index_name, model=Model.TRENDING_ITEMS, **kwargs)

    @classmethod
    def looking_similar(cls, index_name: str, object_id: str, **kwargs: Any) -> "RecommendRequest":
        return cls(index_name=index_name, model=Model.LOOKING_SIMILAR, object_id=object_id, **kwargs)


class TrendingFacetsRequest(_WireModel):
    """One trending-facets request; the model is fixed."""

    model: Literal[Model.TRENDING_FACETS] = Model.TRENDING_FACETS
    index_name: str = Field(..., min_length=1, alias="indexName")
    facet_name: str = Field(..., min_length=1, alias="facetName")
    threshold: int = Field(default=0, ge=0, le=100)
    max_recommendations: int | None = Field(default=None, ge=1, alias="maxRecommendations")
    query_parameters: dict[str, Any] | None = Field(default=None, alias="queryParameters")


class RecommendationsBatch(_WireModel):
    """Body of a batched recommendations call: ``{"requests": [...]}``."""

    requests: list[RecommendRequest | TrendingFacetsRequest]


# ── Responses ───────────────────────────────────────────────────────────


class Hit(_WireModel, Generic[PayloadT]):
    """A recommended record.

    ``objectID`` and ``_score`` are lifted out; every other field of the
    hit is validated as ``payload``.
    """

    object_id: str = Field(..., alias="objectID")
    score: float | None = Field(default=None, alias="_score")
    payload: PayloadT

    @model_validator(mode="before")
    @classmethod
    def split_payload(cls, data: Any) -> Any:
        if isinstance(data, dict) and "objectID" in data:
            payload = {k: v for k, v in data.items() if k not in ("objectID", "_score")}
            lifted = {k: data[k] for k in ("objectID", "_score") if k in data}
            return {**lifted, "payload": payload}
        return data


class RecommendResult(_WireModel, Generic[PayloadT]):
    hits: list[Hit[PayloadT]] = Field(default_factory=list)
    index: str | None = None
    nb_hits: int | None = Field(default=None, alias="nbHits")
    query_id: str | None = Field(default=None, alias="queryID")
    message: str | None = None


class RecommendResponse(_WireModel, Generic[PayloadT]):
    """Per-request result sets, in request order."""

    results: list[RecommendResult[PayloadT]]


class TrendingFacetValue(_WireModel):
    value: str
    count: int = 0
    highlighted: str | None = None


class TrendingFacetsResult(_WireModel):
    index: str | None = None
    facet: str | None = None
    facet_hits: list[TrendingFacetValue] = Field(default_factory=list, alias="facetHits")


class TrendingFacetsResponse(_WireModel):
    results: list[TrendingFacetsResult]
