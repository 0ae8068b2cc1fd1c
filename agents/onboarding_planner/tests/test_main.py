"""
Tests for the planner's task handlers
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from ..main import build_handlers, build_store
from ..tools.store import InMemoryPlannerStore, get_store
from ..tools.supabase_store import SupabasePlannerStore
from .factories import plan_payload

SEED_PATH = Path(__file__).resolve().parents[1] / "data" / "task_templates.yaml"


class TestBuildStore:
    """Tests for build_store"""

    def test_memory_backend_loads_seed_templates(self, planner_config):
        planner_config.store.seed_templates_path = str(SEED_PATH)

        store = build_store(planner_config)

        assert isinstance(store, InMemoryPlannerStore)
        assert "tpl-validate-idea" in store.templates

    def test_memory_backend_without_seed(self, planner_config):
        planner_config.store.seed_templates_path = None

        assert build_store(planner_config).templates == {}

    def test_supabase_backend(self, planner_config):
        planner_config.store.backend = "supabase"
        planner_config.store.url = "https://project.supabase.co/"

        store = build_store(planner_config)

        assert isinstance(store, SupabasePlannerStore)
        assert store.base_url == "https://project.supabase.co"


class TestGenerateOnboardingPlanHandler:
    """Tests for the generate_onboarding_plan handler"""

    @pytest.mark.asyncio
    async def test_returns_serialized_plan(self, planner_config, answers, mock_inference):
        planner_config.store.seed_templates_path = str(SEED_PATH)
        mock_inference(json.dumps(plan_payload(["tpl-validate-idea", "tpl-launch-plan"])))
        handlers = await build_handlers(planner_config)

        result = await handlers["generate_onboarding_plan"]({
            "user_id": "user-1",
            "session_id": "session-1",
            "onboarding_data": answers,
        })

        plan = result["business_plan"]
        assert plan["user_id"] == "user-1"
        assert plan["onboarding_session_id"] == "session-1"
        assert plan["confidence_score"] == 43
        assert isinstance(plan["created_at"], str)
        assert len(get_store().tasks) == 2

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_validation_error(self, planner_config):
        handlers = await build_handlers(planner_config)

        with pytest.raises(ValidationError):
            await handlers["generate_onboarding_plan"]({"onboarding_data": {}})
