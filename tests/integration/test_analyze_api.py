"""End-to-end tests of the HTTP API."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from party_optimizer.api.app import (
    ANALYSIS_FAILED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    create_app,
)
from party_optimizer.core.exceptions import AnalysisError, ConfigurationError
from party_optimizer.engine.orchestrator import PartyAnalyzer
from party_optimizer.engine.recommendations import DODGE_ACTION


def analyze_body(party: list[dict[str, Any]], event_type: str, current: str) -> dict[str, Any]:
    return {
        "party": party,
        "encounter": {"event_type": event_type},
        "current_turn_character": current,
    }


@pytest.fixture
def client() -> TestClient:
    """API client with no success model and no generative collaborator."""
    return TestClient(create_app(analyzer=PartyAnalyzer()))


class TestAnalyzeEndpoint:
    """Tests for POST /api/analyze."""

    def test_single_barbarian_dragon_fight(
        self,
        client: TestClient,
        character_payload: dict[str, Any],
    ) -> None:
        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Thane"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        analysis = body["analysis"]
        assert analysis["encounter_difficulty"] == "Hard"
        assert analysis["individual_success_rates"] == [
            {"character": "Thane", "success_rate": 80, "recommended_action": "Power Attack"},
        ]
        assert analysis["current_turn_actions"][0] == "Primary: Power Attack"

    def test_unavailable_model_gives_default_chance(
        self,
        client: TestClient,
        character_payload: dict[str, Any],
    ) -> None:
        response = client.post("/api/analyze", json=analyze_body([character_payload], "Ancient Trap", "Thane"))

        assert response.json()["analysis"]["party_success_chance"] == 50

    def test_trained_model_is_used(
        self,
        model_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        character_payload: dict[str, Any],
    ) -> None:
        monkeypatch.setenv("PARTY_OPTIMIZER_MODEL_MODEL_DIR", str(model_dir))
        client = TestClient(create_app(analyzer=PartyAnalyzer()))

        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Thane"))

        assert response.status_code == 200
        assert 0 <= response.json()["analysis"]["party_success_chance"] <= 100
        assert client.get("/health").json()["model_available"] is True

    def test_class_key_accepted(self, client: TestClient, character_payload: dict[str, Any]) -> None:
        payload = dict(character_payload)
        payload["class"] = payload.pop("type")

        response = client.post("/api/analyze", json=analyze_body([payload], "Dragon Fight", "Thane"))

        assert response.status_code == 200

    def test_wisdom_tie_names_first_member(self, client: TestClient) -> None:
        mage = {"type": "Mage", "strength": 5, "agility": 10, "health": 5, "mana": 25, "dexterity": 10, "wisdom": 25}
        party = [{"name": "Elara", **mage}, {"name": "Mirel", **mage}]

        response = client.post("/api/analyze", json=analyze_body(party, "Mystic Puzzle", "Mirel"))

        recommendations = response.json()["analysis"]["strategic_recommendations"]
        assert recommendations[1] == "The party should rely on Elara's wisdom to solve the core puzzle."
        assert len(recommendations) == 2

    def test_generative_failure_falls_back(
        self,
        failing_tactician,
        character_payload: dict[str, Any],
    ) -> None:
        client = TestClient(create_app(analyzer=PartyAnalyzer(tactician=failing_tactician)))

        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Thane"))

        assert response.status_code == 200
        assert DODGE_ACTION in response.json()["analysis"]["current_turn_actions"]
        assert failing_tactician.calls == 1

    def test_generated_actions(self, fake_tactician, character_payload: dict[str, Any]) -> None:
        client = TestClient(create_app(analyzer=PartyAnalyzer(tactician=fake_tactician)))

        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Thane"))

        assert response.json()["analysis"]["current_turn_actions"] == fake_tactician.actions

    def test_unknown_current_character(self, client: TestClient, character_payload: dict[str, Any]) -> None:
        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Nobody"))

        assert response.json()["analysis"]["current_turn_actions"] == []

    @pytest.mark.parametrize("missing", ["party", "encounter", "current_turn_character"])
    def test_missing_field(self, client: TestClient, character_payload: dict[str, Any], missing: str) -> None:
        body = analyze_body([character_payload], "Dragon Fight", "Thane")
        del body[missing]

        response = client.post("/api/analyze", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": MISSING_FIELDS_MESSAGE}

    def test_null_encounter_rejected(self, client: TestClient, character_payload: dict[str, Any]) -> None:
        body = analyze_body([character_payload], "Dragon Fight", "Thane")
        body["encounter"] = None

        response = client.post("/api/analyze", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": MISSING_FIELDS_MESSAGE}

    def test_empty_encounter_is_unknown_event(
        self,
        client: TestClient,
        character_payload: dict[str, Any],
    ) -> None:
        body = analyze_body([character_payload], "Dragon Fight", "Thane")
        body["encounter"] = {}

        response = client.post("/api/analyze", json=body)

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["encounter_difficulty"] == "Unknown"
        assert analysis["individual_success_rates"][0]["success_rate"] == 83

    def test_empty_party_rejected(self, client: TestClient) -> None:
        response = client.post("/api/analyze", json=analyze_body([], "Dragon Fight", "Thane"))

        assert response.status_code == 400
        assert "analysis" not in response.json()

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_invalid_character(self, client: TestClient) -> None:
        body = analyze_body([{"name": "Bad", "strength": "lots"}], "Dragon Fight", "Bad")

        response = client.post("/api/analyze", json=body)

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request")

    def test_analysis_failure_is_generic_500(self, character_payload: dict[str, Any]) -> None:
        class ExplodingAnalyzer(PartyAnalyzer):
            def analyze(self, party, encounter, current_turn_character):  # type: ignore[override]
                raise AnalysisError("secret internals", stage="scoring")

        client = TestClient(create_app(analyzer=ExplodingAnalyzer()))

        response = client.post("/api/analyze", json=analyze_body([character_payload], "Dragon Fight", "Thane"))

        assert response.status_code == 500
        assert response.json() == {"error": ANALYSIS_FAILED_MESSAGE}


class TestCatalogEndpoints:
    """Tests for the read-only endpoints."""

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok", "model_available": False}

    def test_classes(self, client: TestClient) -> None:
        classes = client.get("/api/classes").json()

        barbarian = next(c for c in classes if c["name"] == "Barbarian")
        assert barbarian["base_stats"]["strength"] == 25
        assert len(classes) == 4

    def test_encounters(self, client: TestClient) -> None:
        encounters = client.get("/api/encounters").json()

        assert [e["event_type"] for e in encounters] == ["Dragon Fight", "Ancient Trap", "Mystic Puzzle"]
        assert encounters[0]["enemy"] == "Ancient Red Dragon"


class TestAppFactory:
    """Tests for building the application."""

    def test_import_does_not_read_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARTY_OPTIMIZER_DEFAULT_PROVIDER", "openai")
        import party_optimizer.api.app as api_module

        reloaded = importlib.reload(api_module)

        assert not hasattr(reloaded, "app")
        with pytest.raises(ConfigurationError):
            reloaded.create_app()
