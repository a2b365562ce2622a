"""Tests for the HTTP API."""

import pytest

from carbonmap.satellite import gee


@pytest.fixture
def fixed_totals(monkeypatch, skip_gee_init):
    """Make calculate_carbon return fixed totals."""

    def _set(agb: float, bgb: float):
        totals = {"aboveground_tonnes": agb, "belowground_tonnes": bgb, "total_tonnes": agb + bgb}
        calls = []

        def fake_calculate(geometry):
            calls.append(geometry)
            return totals

        monkeypatch.setattr(gee, "calculate_carbon", fake_calculate)
        return calls

    return _set


class TestHealth:
    """Tests for the health endpoints."""

    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    async def test_health(self, api_client, path):
        response = await api_client.get(path)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCalculateCarbon:
    """Tests for POST /api/calculate-carbon."""

    async def test_returns_totals_credits_and_suggestions(self, api_client, fixed_totals, sample_polygon):
        calls = fixed_totals(40000.0, 10000.0)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        assert response.status_code == 200
        body = response.json()
        assert body["aboveground_tonnes"] == 40000.0
        assert body["belowground_tonnes"] == 10000.0
        assert body["total_tonnes"] == 50000.0
        assert body["credits"]["project_size"] == "large"
        assert body["credits"]["co2_equivalent_tonnes"] == pytest.approx(183500)
        assert len(body["suggestions"]) == 5
        assert calls == [sample_polygon]

    async def test_small_region(self, api_client, fixed_totals, sample_polygon):
        fixed_totals(800.0, 200.0)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        body = response.json()
        assert body["credits"]["credit_estimates"]["voluntary"]["avg"] == pytest.approx(55050)
        assert [s["type"] for s in body["suggestions"]] == ["methodology", "next_steps", "risk"]

    async def test_zero_carbon_has_no_credits(self, api_client, fixed_totals, sample_polygon):
        """Water or bare ground is a valid result, not an error."""
        fixed_totals(0.0, 0.0)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        assert response.status_code == 200
        body = response.json()
        assert body["credits"] is None
        assert body["suggestions"] == []

    async def test_missing_geometry(self, api_client, fixed_totals):
        calls = fixed_totals(1.0, 1.0)

        response = await api_client.post("/api/calculate-carbon", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "geometry required (GeoJSON geometry)"}
        assert calls == []

    async def test_missing_body(self, api_client, fixed_totals):
        response = await api_client.post("/api/calculate-carbon")

        assert response.status_code == 400
        assert response.json()["error"] == "invalid request"

    async def test_unsupported_geometry(self, api_client, skip_gee_init, fake_ee):
        response = await api_client.post(
            "/api/calculate-carbon",
            json={"geometry": {"type": "Point", "coordinates": [0, 0]}},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid geometry"
        assert "Point" in body["message"]

    async def test_malformed_coordinates(self, api_client, skip_gee_init, fake_ee):
        fake_ee.Geometry.Polygon.side_effect = gee.ee.EEException("Invalid geometry.")

        response = await api_client.post(
            "/api/calculate-carbon",
            json={"geometry": {"type": "Polygon", "coordinates": [1, 2]}},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid geometry"

    async def test_reducer_failure(self, api_client, skip_gee_init, monkeypatch, sample_polygon):
        def boom(geometry):
            raise gee.EarthEngineError("User memory limit exceeded.")

        monkeypatch.setattr(gee, "calculate_carbon", boom)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "calculation failed"
        assert body["message"] == "User memory limit exceeded."
        assert body["details"] is None

    async def test_reducer_failure_details_in_debug(self, api_client, skip_gee_init, monkeypatch, sample_polygon):
        def boom(geometry):
            raise gee.EarthEngineError("quota")

        monkeypatch.setattr(gee, "calculate_carbon", boom)
        monkeypatch.setattr(gee.settings, "debug", True)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        assert response.status_code == 500
        assert "Traceback" in response.json()["details"]

    async def test_init_failure(self, api_client, monkeypatch, sample_polygon):
        def fail():
            raise gee.EarthEngineConfigError("No GEE credentials found.")

        monkeypatch.setattr(gee, "ensure_initialized", fail)

        response = await api_client.post("/api/calculate-carbon", json={"geometry": sample_polygon})

        assert response.status_code == 500
        assert response.json()["message"] == "No GEE credentials found."

    async def test_get_not_allowed(self, api_client):
        response = await api_client.get("/api/calculate-carbon")

        assert response.status_code == 405

    async def test_cors_preflight(self, api_client):
        response = await api_client.options(
            "/api/calculate-carbon",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]


class TestEstimate:
    """Tests for POST /api/estimate."""

    async def test_estimate(self, api_client):
        response = await api_client.post("/api/estimate", json={"total_tonnes": 1000})

        assert response.status_code == 200
        body = response.json()
        assert body["total_tonnes"] == 1000
        assert body["credits"]["project_size"] == "small"
        assert len(body["suggestions"]) == 3

    @pytest.mark.parametrize("payload", [{}, {"total_tonnes": 0}, {"total_tonnes": -5}, {"total_tonnes": None}])
    async def test_no_estimate(self, api_client, payload):
        response = await api_client.post("/api/estimate", json=payload)

        assert response.status_code == 200
        assert response.json()["credits"] is None
        assert response.json()["suggestions"] == []

    @pytest.mark.parametrize(
        "raw, echoed",
        [
            (b'{"total_tonnes": NaN}', None),
            (b'{"total_tonnes": Infinity}', None),
            (b'{"total_tonnes": -Infinity}', None),
            (b'{"total_tonnes": 1e308}', 1e308),
        ],
    )
    async def test_unpriceable_totals(self, api_client, raw, echoed):
        """Non-finite and overflowing totals give no estimate rather than a server error."""
        response = await api_client.post("/api/estimate", content=raw, headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        body = response.json()
        assert body["total_tonnes"] == echoed
        assert body["credits"] is None
        assert body["suggestions"] == []

    async def test_non_numeric(self, api_client):
        response = await api_client.post("/api/estimate", json={"total_tonnes": "lots"})

        assert response.status_code == 400
