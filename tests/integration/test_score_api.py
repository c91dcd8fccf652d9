"""
Integration tests for the score endpoints.

These tests verify:
1. POST /v1/users/{user_id}/score computes, stores and explains a score
2. GET /v1/users/{user_id}/score returns the latest snapshot
3. GET /v1/users/{user_id}/score/history lists snapshots newest first
4. Polished explanations are sanitized before delivery
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from credscore.service.sanitizer import SHORT_DISCLAIMER, contains_prohibited_terms
from tests.integration.conftest import (
    CLEAN_POLISHED,
    TODAY,
    MockTextPolisherClient,
)


# =============================================================================
# Compute Tests
# =============================================================================

class TestComputeScore:
    """Tests for POST /v1/users/{user_id}/score."""

    @pytest.mark.asyncio
    async def test_cold_start(self, client: AsyncClient):
        response = await client.post("/v1/users/new_user/score")

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 0
        assert data["confidence"] == 50
        assert data["band"] == "D"
        assert data["flags"] == ["R1 Low reliability"]
        assert data["as_of_date"] == TODAY.isoformat()
        assert data["feature_breakdown"] == {
            "dd": 0.1, "rs": 0.0, "ep": 0.5, "bb": 0.4, "tm": 0.5, "sr": 0.8,
        }

    @pytest.mark.asyncio
    async def test_steady_user(self, client: AsyncClient, steady_user: str):
        response = await client.post(f"/v1/users/{steady_user}/score")

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 903
        assert data["confidence"] == 100
        assert data["band"] == "A"
        assert data["flags"] == []
        assert data["feature_breakdown"]["tm"] == pytest.approx(1 / 3)

    @pytest.mark.asyncio
    async def test_low_buffer_keeps_band_a_with_one_flag(
        self,
        client: AsyncClient,
        post_entries,
    ):
        await post_entries(client, "user_buffer", range(14), 10000, 6000)
        await client.post(
            "/v1/users/user_buffer/cash-estimate",
            json={"cash_available_cents": 5000},
        )

        response = await client.post("/v1/users/user_buffer/score")

        data = response.json()
        assert data["score"] == 727
        assert data["flags"] == ["R4 Low buffer"]
        assert data["band"] == "A"

    @pytest.mark.asyncio
    async def test_latest_recorded_estimate_is_used_even_if_backdated(
        self,
        client: AsyncClient,
        steady_user: str,
        clock,
    ):
        clock.advance(minutes=1)
        await client.post(
            f"/v1/users/{steady_user}/cash-estimate",
            json={
                "cash_available_cents": 5000,
                "as_of_date": (TODAY - timedelta(days=2)).isoformat(),
            },
        )

        response = await client.post(f"/v1/users/{steady_user}/score")

        data = response.json()
        assert data["score"] == 727
        assert data["flags"] == ["R4 Low buffer"]

    @pytest.mark.asyncio
    async def test_explanation(self, client: AsyncClient, steady_user: str):
        response = await client.post(f"/v1/users/{steady_user}/score")

        explanation = response.json()["explanation"]
        assert explanation["polished"] is False
        assert explanation["sanitized"] is False
        assert explanation["used_fallback"] is False

        entrepreneur = explanation["entrepreneur_text"]
        assert entrepreneur.startswith("Lower observed risk indicators")
        assert "Score: 903/1000 (Band A)" in entrepreneur
        assert "Data confidence: 100%" in entrepreneur

        lender = explanation["lender"]
        assert lender["positive_drivers"] == [
            "Consistent daily data submission",
            "Revenue stream is stable",
            "Expenses are well-proportioned relative to revenue",
        ]
        assert lender["negative_drivers"] == ["Revenue trend is flat"]
        assert lender["improvements"] == [
            "Double down on activities that drove recent revenue growth",
            "Set incremental weekly revenue targets",
        ]
        assert explanation["lender_text"].startswith(
            "CREDIT ASSESSMENT - LOWER OBSERVED RISK INDICATORS"
        )
        assert explanation["breakdown"]["raw"]["business_type"] == "general"

    @pytest.mark.asyncio
    async def test_template_texts_are_clean(self, client: AsyncClient, post_entries):
        await post_entries(client, "user_sparse", range(3), 10000)

        response = await client.post("/v1/users/user_sparse/score")

        explanation = response.json()["explanation"]
        assert contains_prohibited_terms(explanation["entrepreneur_text"]) == []
        assert contains_prohibited_terms(explanation["lender_text"]) == []

    @pytest.mark.asyncio
    async def test_dutch_explanation(self, client: AsyncClient, steady_user: str):
        response = await client.post(
            f"/v1/users/{steady_user}/score",
            params={"language": "nl", "business_type": "bakery"},
        )

        assert response.status_code == 200
        explanation = response.json()["explanation"]
        assert "Wat gaat goed:" in explanation["entrepreneur_text"]
        assert "Betrouwbaarheid: 100%" in explanation["entrepreneur_text"]
        assert explanation["breakdown"]["raw"]["business_type"] == "bakery"

    @pytest.mark.asyncio
    async def test_unsupported_language_returns_422(self, client: AsyncClient):
        response = await client.post("/v1/users/user_a/score", params={"language": "fr"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_calls_polisher_with_templates(
        self,
        client: AsyncClient,
        steady_user: str,
        mock_polisher: MockTextPolisherClient,
    ):
        response = await client.post(f"/v1/users/{steady_user}/score")

        assert len(mock_polisher.calls) == 1
        call = mock_polisher.calls[0]
        assert call["language"] == "en"
        assert call["entrepreneur_text"] == response.json()["explanation"]["entrepreneur_text"]

    @pytest.mark.asyncio
    async def test_entries_outside_lookback_are_ignored(
        self,
        client: AsyncClient,
        post_entries,
    ):
        await post_entries(client, "user_old", range(20, 30), 10000)

        response = await client.post("/v1/users/user_old/score")

        assert response.json()["score"] == 0


# =============================================================================
# Read Tests
# =============================================================================

class TestGetLatestScore:
    """Tests for GET /v1/users/{user_id}/score."""

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient):
        response = await client.get("/v1/users/nobody/score")

        assert response.status_code == 404
        assert response.json()["error"] == "SCORE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_returns_stored_snapshot(
        self,
        client: AsyncClient,
        steady_user: str,
        mock_polisher: MockTextPolisherClient,
    ):
        computed = (await client.post(f"/v1/users/{steady_user}/score")).json()

        response = await client.get(f"/v1/users/{steady_user}/score")

        assert response.status_code == 200
        data = response.json()
        assert data["snapshot_id"] == computed["snapshot_id"]
        assert data["score"] == 903
        assert data["explanation"]["entrepreneur_text"] == computed["explanation"]["entrepreneur_text"]
        # Reading never polishes
        assert len(mock_polisher.calls) == 1

    @pytest.mark.asyncio
    async def test_does_not_recompute(
        self,
        client: AsyncClient,
        steady_user: str,
        post_entries,
    ):
        await client.post(f"/v1/users/{steady_user}/score")
        # Wipe out the revenue for today; the stored snapshot must not change
        await post_entries(client, steady_user, range(1), 0)

        response = await client.get(f"/v1/users/{steady_user}/score")

        assert response.json()["score"] == 903


class TestScoreHistory:
    """Tests for GET /v1/users/{user_id}/score/history."""

    @pytest.mark.asyncio
    async def test_newest_first(self, client: AsyncClient, clock, post_entries):
        first = (await client.post("/v1/users/user_h/score")).json()
        clock.advance(minutes=5)
        await post_entries(client, "user_h", range(14), 10000, 6000)
        second = (await client.post("/v1/users/user_h/score")).json()

        response = await client.get("/v1/users/user_h/score/history")

        assert response.status_code == 200
        snapshots = response.json()["snapshots"]
        assert [s["snapshot_id"] for s in snapshots] == [
            second["snapshot_id"],
            first["snapshot_id"],
        ]
        assert snapshots[1]["score"] == 0

        latest = await client.get("/v1/users/user_h/score")
        assert latest.json()["snapshot_id"] == second["snapshot_id"]

    @pytest.mark.asyncio
    async def test_limit(self, client: AsyncClient, clock):
        for _ in range(3):
            await client.post("/v1/users/user_h/score")
            clock.advance(minutes=1)

        response = await client.get("/v1/users/user_h/score/history", params={"limit": 2})

        assert len(response.json()["snapshots"]) == 2

    @pytest.mark.asyncio
    async def test_invalid_limit_returns_422(self, client: AsyncClient):
        response = await client.get("/v1/users/user_h/score/history", params={"limit": 0})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_history(self, client: AsyncClient):
        response = await client.get("/v1/users/nobody/score/history")

        assert response.status_code == 200
        assert response.json() == {"user_id": "nobody", "snapshots": []}


# =============================================================================
# Polishing Tests
# =============================================================================

class TestPolishedExplanations:
    """Polished text is sanitized and carries the short disclaimer."""

    @pytest.mark.asyncio
    async def test_clean_polish_gets_disclaimer(
        self,
        client_with_clean_polisher: AsyncClient,
    ):
        response = await client_with_clean_polisher.post("/v1/users/user_p/score")

        explanation = response.json()["explanation"]
        assert explanation["polished"] is True
        assert explanation["sanitized"] is False
        assert explanation["entrepreneur_text"] == f"{CLEAN_POLISHED}\n\n{SHORT_DISCLAIMER}"
        assert explanation["lender_text"] == f"{CLEAN_POLISHED}\n\n{SHORT_DISCLAIMER}"

    @pytest.mark.asyncio
    async def test_prohibited_polish_falls_back_to_template(
        self,
        client_with_prohibited_polisher: AsyncClient,
    ):
        response = await client_with_prohibited_polisher.post("/v1/users/user_p/score")

        explanation = response.json()["explanation"]
        entrepreneur = explanation["entrepreneur_text"]
        assert explanation["used_fallback"] is True
        assert explanation["sanitized"] is True
        assert entrepreneur.startswith("Higher observed risk indicators")
        assert entrepreneur.endswith(SHORT_DISCLAIMER)
        assert contains_prohibited_terms(entrepreneur) == []
        assert explanation["lender_text"] == f"{CLEAN_POLISHED}\n\n{SHORT_DISCLAIMER}"

    @pytest.mark.asyncio
    async def test_get_returns_templates(
        self,
        client_with_clean_polisher: AsyncClient,
    ):
        await client_with_clean_polisher.post("/v1/users/user_p/score")

        response = await client_with_clean_polisher.get("/v1/users/user_p/score")

        explanation = response.json()["explanation"]
        assert explanation["polished"] is False
        assert explanation["entrepreneur_text"].startswith("Higher observed risk indicators")
