"""Resilience patterns: multi-host failover for recommendation calls.

Provides the round-robin ``HostPool`` the dispatcher draws hosts from,
spreading load across equivalent replicas and giving each call an
ordered list of alternates to fail over to.
"""

from algolia_recommend.resilience.host_pool import (
    HostPool,
    custom_host_url,
    default_hosts,
)

__all__ = [
    "HostPool",
    "custom_host_url",
    "default_hosts",
]
