"""Dispatcher: request delivery with multi-host failover.

Sends one JSON body to one path, trying the hosts of a ``HostPool`` in
rotation order.  Every attempt is classified into an ``AttemptOutcome``:

    2xx                           →  SUCCESS    (decode and return)
    5xx, 429                      →  RETRYABLE  (next host)
    other non-2xx                 →  TERMINAL   (stop)
    timeout / connection failure  →  RETRYABLE  (next host)
    request-construction failure  →  RETRYABLE  (next host)
    other transport failure       →  TERMINAL   (stop)

A body that fails to decode after a 2xx is terminal as well.  At most one
attempt is made per host, strictly one after the other.
"""

from __future__ import annotations

import functools
import json
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

import httpx
import pydantic_core
from pydantic import TypeAdapter, ValidationError

from algolia_recommend.core.config import Settings, get_timeout
from algolia_recommend.core.errors import (
    ApiError,
    DecodeError,
    HostsExhaustedError,
    RecommendError,
    TransportError,
)
from algolia_recommend.resilience.host_pool import HostPool

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ── Outcome classification ──────────────────────────────────────────────


class OutcomeKind(str, Enum):
    """Classification of a single attempt."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


@dataclass
class AttemptOutcome:
    """Result of one attempt against one host.

    Attributes:
        host_index: Position of this attempt in the call's rotation order.
        host:       Base URL that was tried.
        kind:       SUCCESS, RETRYABLE or TERMINAL.
        response:   The HTTP response, when one was received.
        error:      The classified error for non-success outcomes.
        elapsed_ms: Round-trip time in milliseconds.
    """

    host_index: int
    host: str
    kind: OutcomeKind
    response: httpx.Response | None = None
    error: RecommendError | None = None
    elapsed_ms: float = 0.0


# Transport failures that another host may not share
_RETRYABLE_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.UnsupportedProtocol,
    httpx.LocalProtocolError,
    httpx.InvalidURL,
)


def classify_status(status_code: int) -> OutcomeKind:
    """Classify an HTTP status code."""
    if 200 <= status_code < 300:
        return OutcomeKind.SUCCESS
    if status_code == 429 or 500 <= status_code < 600:
        return OutcomeKind.RETRYABLE
    return OutcomeKind.TERMINAL


def classify_transport_error(exc: Exception) -> OutcomeKind:
    """Classify an exception raised while sending a request."""
    if isinstance(exc, _RETRYABLE_TRANSPORT_ERRORS):
        return OutcomeKind.RETRYABLE
    return OutcomeKind.TERMINAL


def extract_message(text: str) -> str | None:
    """Return the ``message`` string of a JSON object body, if any."""
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Pydantic models, including ones nested in plain dicts and lists, are
    dumped by alias with ``None`` fields dropped.
    """
    return pydantic_core.to_json(body, by_alias=True, exclude_none=True)


@functools.lru_cache(maxsize=64)
def _type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


# ── Dispatcher ──────────────────────────────────────────────────────────


class Dispatcher:
    """Delivers recommendation calls across a pool of equivalent hosts.

    Uses a single shared ``httpx.AsyncClient`` for every host.  The client
    is created lazily unless one is injected.

    Args:
        pool:        Hosts to draw from; shared by all concurrent calls.
        app_id:      Application ID sent in ``x-algolia-application-id``.
        api_key:     API key sent in ``x-algolia-api-key``.
        settings:    Timeouts and user agent.
        http_client: Optional pre-built client (e.g. with a mock transport).
    """

    def __init__(
        self,
        pool: HostPool,
        app_id: str,
        api_key: str,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.pool = pool
        self._app_id = app_id
        self._api_key = api_key
        self._settings = settings or Settings()
        self._timeout = get_timeout(self._settings)
        self._client: httpx.AsyncClient | None = http_client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def headers(self) -> dict[str, str]:
        """Headers sent with every attempt."""
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self._settings.USER_AGENT,
            "x-algolia-application-id": self._app_id,
            "x-algolia-api-key": self._api_key,
        }

    async def attempt(self, host_index: int, host: str, path: str, content: bytes) -> AttemptOutcome:
        """Make one attempt against *host*; never raises for HTTP failures."""
        url = f"{host}{path}"
        logger.debug("POST %s (attempt %d)", url, host_index + 1)
        start = time.monotonic()
        try:
            response = await self._get_client().post(
                url,
                content=content,
                headers=self.headers(),
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            kind = classify_transport_error(exc)
            error = TransportError(host, str(exc) or type(exc).__name__, retryable=kind is OutcomeKind.RETRYABLE)
            error.__cause__ = exc
            return AttemptOutcome(
                host_index=host_index,
                host=host,
                kind=kind,
                error=error,
                elapsed_ms=round((time.monotonic() - start) * 1000, 2),
            )

        elapsed_ms = round((time.monotonic() - start) * 1000, 2)
        kind = classify_status(response.status_code)
        error = None
        if kind is not OutcomeKind.SUCCESS:
            text = response.text
            error = ApiError(response.status_code, extract_message(text), text)
        return AttemptOutcome(
            host_index=host_index,
            host=host,
            kind=kind,
            response=response,
            error=error,
            elapsed_ms=elapsed_ms,
        )

    def _decode(self, response: httpx.Response, response_type: type[T]) -> T:
        text = response.text
        try:
            return _type_adapter(response_type).validate_json(text)
        except ValidationError as exc:
            raise DecodeError(response.status_code, str(exc), text) from exc

    async def send(self, path: str, body: Any, response_type: type[T] = dict) -> T:
        """POST *body* to *path*, failing over across the pool.

        Args:
            path:          Request path appended to each host.
            body:          JSON-serializable value or pydantic model.
            response_type: Shape to decode a successful body into.

        Returns:
            The decoded response body.

        Raises:
            ApiError:            Terminal non-2xx response.
            TransportError:      Terminal transport failure.
            DecodeError:         2xx body that does not fit *response_type*.
            HostsExhaustedError: Every host failed retryably.
        """
        content = encode_body(body)
        attempts = self.pool.attempts
        start = self.pool.next_start()
        last_error: RecommendError | None = None

        for index in range(attempts):
            host = self.pool.host_for(start, index)
            outcome = await self.attempt(index, host, path, content)

            if outcome.kind is OutcomeKind.SUCCESS:
                return self._decode(outcome.response, response_type)

            if outcome.kind is OutcomeKind.TERMINAL:
                raise outcome.error

            last_error = outcome.error
            logger.warning(
                "%s from %s (attempt %d/%d), trying next host",
                outcome.error,
                host,
                index + 1,
                attempts,
            )

        raise HostsExhaustedError(last_error, attempts)

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
