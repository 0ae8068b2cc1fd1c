"""
Tests for OnboardingPlanService
"""

import json
from unittest.mock import AsyncMock

import pytest

from ..errors import StoreError
from ..schemas.plan import PlannerResult
from ..service import OnboardingPlanService
from .factories import plan_payload


class TestOnboardingPlanService:
    """Tests for generate_initial_plan"""

    @pytest.mark.asyncio
    async def test_returns_ai_plan(self, answers, store, mock_inference):
        mock_inference(json.dumps(plan_payload(["tpl-01", "tpl-02"])))
        service = OnboardingPlanService(store=store)

        plan = await service.generate_initial_plan("user-1", answers, "session-1")

        assert plan == store.plans["user-1"]
        assert plan.plan_summary == "Form an LLC in Texas and launch in twelve weeks."
        assert plan.confidence_score == 43
        assert plan.business_id == store.businesses["user-1"].id

    @pytest.mark.asyncio
    async def test_falls_back_when_planner_fails(self, answers, store, mock_inference):
        mock_inference("no json here")
        service = OnboardingPlanService(store=store)

        plan = await service.generate_initial_plan("user-1", answers, "session-1")

        assert plan.confidence_score == 5
        assert plan.ideation_score == 10
        assert plan.recommended_entity_type == "LLC"
        assert plan.onboarding_session_id == "session-1"
        assert store.plans["user-1"].id == plan.id
        assert store.tasks == {}

    @pytest.mark.asyncio
    async def test_success_without_stored_plan_raises(self, answers, store):
        service = OnboardingPlanService(store=store)
        service.workflow.run = AsyncMock(return_value=PlannerResult(success=True))

        with pytest.raises(StoreError, match="Plan not found"):
            await service.generate_initial_plan("user-1", answers)

    @pytest.mark.asyncio
    async def test_uses_global_store_by_default(self, answers, store, mock_inference):
        mock_inference("still no json")

        plan = await OnboardingPlanService().generate_initial_plan("user-9", answers)

        assert store.plans["user-9"] == plan
