"""Shared test fixtures."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import ee
import httpx
import pytest

# Add src/ to path so tests can import carbonmap
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from carbonmap.satellite import gee  # noqa: E402
from carbonmap.server.app import create_app  # noqa: E402


@pytest.fixture
def sample_polygon():
    """Small GeoJSON polygon (roughly 1 km square in the Amazon)."""
    return {
        "type": "Polygon",
        "coordinates": [
            [
                [-60.00, -3.00],
                [-59.99, -3.00],
                [-59.99, -2.99],
                [-60.00, -2.99],
                [-60.00, -3.00],
            ]
        ],
    }


@pytest.fixture
def sample_multipolygon(sample_polygon):
    return {"type": "MultiPolygon", "coordinates": [sample_polygon["coordinates"]]}


@pytest.fixture
def fake_ee(monkeypatch):
    """Replace the Earth Engine module used by the gee module.

    Keeps the real EEException so except clauses still match.
    """
    mock = MagicMock()
    mock.EEException = ee.EEException
    monkeypatch.setattr(gee, "ee", mock)
    return mock


@pytest.fixture
def reduce_region_result(fake_ee):
    """Set the dict returned by reduceRegion().getInfo()."""

    def _set(result):
        image = fake_ee.ImageCollection.return_value.first.return_value.select.return_value
        image.reduceRegion.return_value.getInfo.return_value = result
        return image

    return _set


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Disable tenacity backoff for reduceRegion retries."""
    from tenacity import wait_none

    monkeypatch.setattr(gee._reduce_region.retry, "wait", wait_none())


@pytest.fixture
def skip_gee_init(monkeypatch):
    """Pretend Earth Engine is already initialized."""
    monkeypatch.setattr(gee, "ensure_initialized", lambda: None)


@pytest.fixture
async def api_client():
    """Async HTTP client bound to a fresh app instance."""
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
