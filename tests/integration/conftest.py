"""Integration test configuration.

Live smoke tests against the real Recommend API.  All integration tests
are marked with ``@pytest.mark.integration``.
Run them with: ``INTEGRATION=1 ALGOLIA_RECOMMEND_APP_ID=... ALGOLIA_RECOMMEND_API_KEY=... pytest tests/integration/``
"""

import os

import pytest

from algolia_recommend import RecommendClient, Settings

# ── Auto-skip when INTEGRATION env not set ──────────────────────────────────


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests when INTEGRATION env var is not set."""
    if os.environ.get("INTEGRATION", "").lower() in ("1", "true", "yes"):
        return
    skip_marker = pytest.mark.skip(reason="Set INTEGRATION=1 to run integration tests against the live API")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_marker)


@pytest.fixture
def live_settings() -> Settings:
    settings = Settings()
    if not settings.APP_ID or not settings.API_KEY:
        pytest.skip("ALGOLIA_RECOMMEND_APP_ID and ALGOLIA_RECOMMEND_API_KEY are required")
    return settings


@pytest.fixture
async def live_client(live_settings):
    client = RecommendClient.from_settings(live_settings, default_object_id="test-record-123")
    yield client
    await client.close()
