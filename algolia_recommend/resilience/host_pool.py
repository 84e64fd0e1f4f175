"""Round-robin host pool for multi-host failover.

Holds the ordered list of equivalent service hosts for one client and a
rotation cursor that picks a different starting host on every call:

    call 0  →  A, B, C
    call 1  →  B, C, A
    call 2  →  C, A, B

The host list is fixed at construction.  The cursor is the only mutable
state; ``next()`` on an ``itertools.count`` is a single step under the
interpreter lock, so concurrent callers never see a torn value and never
wait on each other.  Two concurrent calls may still receive the same
offset, which is harmless for load spreading.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable

DEFAULT_SCHEME = "https"
PRIMARY_HOST_SUFFIX = ".algolia.net"
FALLBACK_HOST_SUFFIX = ".algolianet.com"
FALLBACK_HOST_COUNT = 3


def default_hosts(app_id: str) -> list[str]:
    """Derive the default ordered host list from an application ID.

    Primary (DSN) host, general host, then numbered fallback hosts on a
    separate domain.
    """
    hosts = [
        f"{DEFAULT_SCHEME}://{app_id}-dsn{PRIMARY_HOST_SUFFIX}",
        f"{DEFAULT_SCHEME}://{app_id}{PRIMARY_HOST_SUFFIX}",
    ]
    hosts.extend(
        f"{DEFAULT_SCHEME}://{app_id}-{i}{FALLBACK_HOST_SUFFIX}" for i in range(1, FALLBACK_HOST_COUNT + 1)
    )
    return hosts


def custom_host_url(host: str) -> str:
    """'my-proxy.example.com' -> 'https://my-proxy.example.com'"""
    if "://" in host:
        return host.rstrip("/")
    return f"{DEFAULT_SCHEME}://{host.rstrip('/')}"


class HostPool:
    """Ordered, immutable set of equivalent hosts with a rotating start.

    Args:
        hosts:        Base URLs, tried in this order (after rotation).
        fallback_url: Used as the single logical host when *hosts* is empty.
    """

    def __init__(self, hosts: Iterable[str], fallback_url: str) -> None:
        self._hosts: tuple[str, ...] = tuple(h.rstrip("/") for h in hosts)
        self.fallback_url = fallback_url.rstrip("/")
        self._cursor = itertools.count()

    @property
    def hosts(self) -> tuple[str, ...]:
        return self._hosts

    @property
    def attempts(self) -> int:
        """Number of attempts one call may make; never less than 1."""
        return max(1, len(self._hosts))

    def next_start(self) -> int:
        """Advance the cursor and return this call's starting offset."""
        value = next(self._cursor)
        if not self._hosts:
            return 0
        return value % len(self._hosts)

    def host_for(self, start: int, attempt: int) -> str:
        """Return the host for *attempt* of a call that started at *start*."""
        if not self._hosts:
            return self.fallback_url
        return self._hosts[(start + attempt) % len(self._hosts)]

    def rotation(self, start: int) -> list[str]:
        """Full try order for a call starting at *start*."""
        return [self.host_for(start, attempt) for attempt in range(self.attempts)]

    def __len__(self) -> int:
        return len(self._hosts)

    def __repr__(self) -> str:
        return f"HostPool(hosts={list(self._hosts)!r})"
