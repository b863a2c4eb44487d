"""Integration tests for the assembled ballotbox application.

Exercises create_app(): middleware, dependency wiring, and the default
in-memory store with the system clock.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ballotbox.api.dependencies.election import (
    CALLER_IDENTITY_HEADER,
    get_election_service,
    reset_election_dependencies,
)
from ballotbox.api.main import create_app
from ballotbox.api.middleware.logging_middleware import CORRELATION_HEADER
from ballotbox.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)


@pytest.fixture
def client() -> Iterator[TestClient]:
    reset_election_dependencies()
    yield TestClient(create_app())
    reset_election_dependencies()


class TestApplication:
    """Tests for the assembled application."""

    def test_default_wiring_uses_system_clock(self) -> None:
        reset_election_dependencies()
        service = get_election_service()
        assert isinstance(service._time, SystemTimeAuthority)
        assert get_election_service() is service
        reset_election_dependencies()

    def test_app_metadata(self, project_version: str) -> None:
        application = create_app()
        assert application.version == project_version
        paths = {route.path for route in application.routes}
        assert "/v1/elections/{owner}/{name}/votes" in paths

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get(
            "/v1/elections/alice/none", headers={CORRELATION_HEADER: "corr-42"}
        )
        assert response.status_code == 404
        assert response.headers[CORRELATION_HEADER] == "corr-42"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.get("/v1/elections/alice/none")
        assert response.headers[CORRELATION_HEADER]

    def test_open_election_via_app(self, client: TestClient) -> None:
        headers = {CALLER_IDENTITY_HEADER: "alice"}
        assert client.post("/v1/elections", json={"name": "board"}, headers=headers).status_code == 201
        assert client.post(
            "/v1/elections/alice/board/candidates",
            json={"name": "A", "proposal": "Plan A"},
            headers=headers,
        ).json() == {"candidate_id": 1}

        started = client.post(
            "/v1/elections/alice/board/start", json={"duration": 3600}, headers=headers
        )
        assert started.status_code == 200

        vote = client.post(
            "/v1/elections/alice/board/votes",
            json={"candidate_id": 1},
            headers={CALLER_IDENTITY_HEADER: "bob"},
        )
        assert vote.status_code == 204
        summary = client.get("/v1/elections/alice/board").json()
        assert summary["phase"] == "OPEN"
        assert summary["expiration"] == started.json()["expiration"]
        assert client.get("/v1/elections/alice/board/candidates/1/votes").status_code == 403
