"""Tests for the campaign memory route."""

import pytest
from fastapi import FastAPI

from contentcraft.agents.schemas import CampaignMemoryOutput
from contentcraft.services.authorization import Caller


@pytest.mark.unit
class TestMemoryRoutes:
    """Test recall over a user's campaign history."""

    def test_requires_authentication(self, client_for) -> None:
        response = client_for(None).post("/api/memory/recall", json={"current_campaign_brief": "x"})
        assert response.status_code == 401

    def test_empty_history(self, app: FastAPI, client_for, owner: Caller) -> None:
        response = client_for(owner).post(
            "/api/memory/recall", json={"current_campaign_brief": "Autumn sale"}
        )

        assert response.status_code == 200
        assert response.json()["confidence_score"] == 10
        app.state.completion.complete.assert_not_awaited()

    def test_recall_with_history(self, app: FastAPI, client_for, owner: Caller) -> None:
        client = client_for(owner)
        client.post("/api/campaigns/", json={"title": "Spring", "brief": "B", "tone": "Playful"})
        app.state.completion.complete.return_value = CampaignMemoryOutput(
            insights=["Playful works."], suggestions=["Stay playful."], confidence_score=55
        )

        response = client.post("/api/memory/recall", json={"current_campaign_brief": "Autumn sale"})

        assert response.status_code == 200
        assert response.json()["insights"] == ["Playful works."]
        inputs = app.state.completion.complete.await_args.args[1]
        assert inputs.past_campaigns_summary[0].tone == "Playful"

    def test_blank_brief_is_400(self, client_for, owner: Caller) -> None:
        response = client_for(owner).post("/api/memory/recall", json={"current_campaign_brief": " "})
        assert response.status_code == 400

    def test_other_user_is_admin_only(self, client_for, owner: Caller, stranger: Caller) -> None:
        response = client_for(stranger).post(
            "/api/memory/recall",
            json={"current_campaign_brief": "x", "user_id": owner.user_id},
        )
        assert response.status_code == 403
