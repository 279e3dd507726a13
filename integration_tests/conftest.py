"""Live AI API tests. Skipped unless ANTHROPIC_API_KEY is set."""

from pathlib import Path

import pytest

from hoop_metrics.config import Settings


def pytest_collection_modifyitems(config, items):
    live = bool(Settings().anthropic_api_key)
    skip_live = pytest.mark.skip(reason="ANTHROPIC_API_KEY not set")
    here = Path(__file__).parent
    for item in items:
        if here not in item.path.parents:
            continue
        item.add_marker(pytest.mark.integration)
        if not live:
            item.add_marker(skip_live)


@pytest.fixture
def live_settings(tmp_path):
    """Real API key from the environment, throwaway data directory."""
    return Settings(data_dir=tmp_path, log_level="WARNING")
