"""Unit tests for election API routes.

Tests for the FastAPI router over ElectionService, using a fake clock and
an in-memory store injected through dependency overrides.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ballotbox.api.dependencies.election import (
    CALLER_IDENTITY_HEADER,
    get_election_service,
)
from ballotbox.api.routes.election import router
from ballotbox.application.services.election_service import ElectionService
from ballotbox.config.election_config import TEST_ELECTION_CONFIG
from ballotbox.infrastructure.stubs.election_repository_stub import (
    ElectionRepositoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

OWNER_HEADERS = {CALLER_IDENTITY_HEADER: "alice"}
BASE = "/v1/elections/alice/board"


def _as(identity: str) -> dict[str, str]:
    return {CALLER_IDENTITY_HEADER: identity}


class TestElectionRoutes:
    """Tests for election API routes."""

    @pytest.fixture
    def clock(self) -> FakeTimeAuthority:
        return FakeTimeAuthority(start=1000)

    @pytest.fixture
    def client(self, clock: FakeTimeAuthority) -> TestClient:
        """Create test client with an isolated service."""
        service = ElectionService(
            repository=ElectionRepositoryStub(),
            time_authority=clock,
            config=TEST_ELECTION_CONFIG,
        )
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_election_service] = lambda: service
        return TestClient(app)

    @pytest.fixture
    def enrolled(self, client: TestClient) -> TestClient:
        """Election alice/board with candidates A (1) and B (2)."""
        assert client.post("/v1/elections", json={"name": "board"}, headers=OWNER_HEADERS).status_code == 201
        for name in ("A", "B"):
            response = client.post(
                f"{BASE}/candidates",
                json={"name": name, "proposal": f"Plan {name}"},
                headers=OWNER_HEADERS,
            )
            assert response.status_code == 201
        return client

    def test_router_prefix_and_tag(self) -> None:
        assert router.prefix == "/v1/elections"
        assert "elections" in router.tags

    def test_create_election(self, client: TestClient) -> None:
        response = client.post("/v1/elections", json={"name": "board"}, headers=OWNER_HEADERS)

        assert response.status_code == 201
        assert response.json() == {
            "owner": "alice",
            "name": "board",
            "phase": "NOT_STARTED",
            "expiration": 0,
            "candidate_count": 0,
        }

    def test_create_requires_identity(self, client: TestClient) -> None:
        response = client.post("/v1/elections", json={"name": "board"})
        assert response.status_code == 401

    @pytest.mark.parametrize("name", ["a/b", "..", "."])
    def test_unroutable_name_rejected(self, client: TestClient, name: str) -> None:
        response = client.post("/v1/elections", json={"name": name}, headers=OWNER_HEADERS)

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "INVALID_ARGUMENT"
        assert client.get("/v1/elections/alice/a%2Fb").status_code == 404

    def test_unroutable_owner_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/v1/elections", json={"name": "board"}, headers=_as("team/alice")
        )

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "INVALID_ARGUMENT"

    def test_slash_identity_may_still_vote(self, enrolled: TestClient) -> None:
        enrolled.post(f"{BASE}/start", json={"duration": 1000}, headers=OWNER_HEADERS)
        response = enrolled.post(
            f"{BASE}/votes", json={"candidate_id": 1}, headers=_as("team/bob")
        )
        assert response.status_code == 204

    def test_summary_reflects_start(self, enrolled: TestClient) -> None:
        enrolled.post(f"{BASE}/start", json={"duration": 1000}, headers=OWNER_HEADERS)
        body = enrolled.get(BASE).json()
        assert body["phase"] == "OPEN"
        assert body["expiration"] == 2000
        assert body["candidate_count"] == 2

    def test_duplicate_create_conflicts(self, enrolled: TestClient) -> None:
        response = enrolled.post("/v1/elections", json={"name": "board"}, headers=OWNER_HEADERS)
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "ALREADY_EXISTS"

    def test_unknown_election_404(self, client: TestClient) -> None:
        response = client.get("/v1/elections/alice/missing")
        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "NOT_FOUND"

    def test_candidate_ids_and_lookup(self, enrolled: TestClient) -> None:
        response = enrolled.get(f"{BASE}/candidates/2")
        assert response.status_code == 200
        assert response.json() == {"candidate_id": 2, "name": "B", "proposal": "Plan B"}

        listing = enrolled.get(f"{BASE}/candidates").json()["candidates"]
        assert [c["candidate_id"] for c in listing] == [1, 2]

    def test_empty_candidate_text_accepted(self, enrolled: TestClient) -> None:
        response = enrolled.post(f"{BASE}/candidates", json={"name": ""}, headers=OWNER_HEADERS)
        assert response.status_code == 201
        assert response.json() == {"candidate_id": 3}

    def test_non_owner_cannot_enroll(self, enrolled: TestClient) -> None:
        response = enrolled.post(
            f"{BASE}/candidates", json={"name": "C"}, headers=_as("mallory")
        )
        assert response.status_code == 403
        assert response.json()["detail"]["kind"] == "PERMISSION_DENIED"

    def test_invalid_duration_400(self, enrolled: TestClient) -> None:
        response = enrolled.post(f"{BASE}/start", json={"duration": 0}, headers=OWNER_HEADERS)
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "INVALID_ARGUMENT"

    def test_start_twice_conflicts(self, enrolled: TestClient) -> None:
        first = enrolled.post(f"{BASE}/start", json={"duration": 1000}, headers=OWNER_HEADERS)
        assert first.status_code == 200
        assert first.json() == {"expiration": 2000}

        second = enrolled.post(f"{BASE}/start", json={"duration": 1000}, headers=OWNER_HEADERS)
        assert second.status_code == 409
        assert second.json()["detail"]["kind"] == "ALREADY_EXISTS"

    def test_vote_before_start_conflicts(self, enrolled: TestClient) -> None:
        response = enrolled.post(
            f"{BASE}/votes", json={"candidate_id": 1}, headers=_as("bob")
        )
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "INVALID_STATE"

    def test_vote_unknown_candidate_404(self, enrolled: TestClient) -> None:
        response = enrolled.post(
            f"{BASE}/votes", json={"candidate_id": 9}, headers=_as("bob")
        )
        assert response.status_code == 404

    def test_full_flow(self, enrolled: TestClient, clock: FakeTimeAuthority) -> None:
        enrolled.post(f"{BASE}/start", json={"duration": 1000}, headers=OWNER_HEADERS)
        for voter, choice in [("v1", 1), ("v2", 1), ("v3", 2), ("v4", 1)]:
            response = enrolled.post(
                f"{BASE}/votes", json={"candidate_id": choice}, headers=_as(voter)
            )
            assert response.status_code == 204

        duplicate = enrolled.post(f"{BASE}/votes", json={"candidate_id": 2}, headers=_as("v1"))
        assert duplicate.status_code == 409

        hidden = enrolled.get(f"{BASE}/candidates/1/votes")
        assert hidden.status_code == 403
        assert hidden.json()["detail"]["kind"] == "PERMISSION_DENIED"

        clock.advance(1000)
        assert enrolled.get(BASE).json()["phase"] == "CLOSED"
        assert enrolled.get(f"{BASE}/candidates/1/votes").json() == {
            "candidate_id": 1,
            "vote_count": 3,
        }
        assert enrolled.get(f"{BASE}/candidates/2/votes").json()["vote_count"] == 1
