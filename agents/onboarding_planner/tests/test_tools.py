"""
Tests for planner tool contracts and the in-memory store
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from ..errors import StoreError
from ..schemas.records import BusinessPlan
from ..tools.planner_tools import (
    bulk_create_tasks,
    create_business_from_onboarding,
    get_task_templates,
    store_business_plan,
)
from ..tools.store import InMemoryPlannerStore, load_seed_templates
from .factories import make_templates

PLAN_FIELDS = {
    "user_id": "user-1",
    "business_id": "biz-1",
    "onboarding_session_id": "session-1",
    "plan_summary": "Form an LLC.",
    "recommended_entity_type": "LLC",
    "recommended_state": "TX",
    "executive_summary": {"overview": "Bakery"},
    "phase_recommendations": {},
    "confidence_score": 50,
    "ideation_score": 60,
    "legal_score": 40,
    "financial_score": 30,
    "launch_prep_score": 20,
}


async def call(tool, args):
    return json.loads(await tool.ainvoke(args))


class TestGetTaskTemplates:
    """Tests for get_task_templates"""

    @pytest.mark.asyncio
    async def test_returns_all_templates(self):
        result = await call(get_task_templates, {})

        assert result["success"] is True
        assert result["count"] == 20
        assert [t["id"] for t in result["templates"][:3]] == ["tpl-01", "tpl-02", "tpl-03"]

    @pytest.mark.asyncio
    async def test_category_filter(self):
        result = await call(get_task_templates, {"category": "financial"})

        assert result["count"] == 10
        assert {t["category"] for t in result["templates"]} == {"financial"}

    @pytest.mark.asyncio
    async def test_store_failure_is_reported(self, store):
        store.list_task_templates = AsyncMock(side_effect=StoreError("task_templates: timeout"))

        result = await call(get_task_templates, {})

        assert result == {"success": False, "error": "task_templates: timeout"}


class TestCreateBusinessFromOnboarding:
    """Tests for create_business_from_onboarding"""

    @pytest.mark.asyncio
    async def test_creates_then_updates(self, store):
        args = {
            "user_id": "user-1",
            "business_name": "Acme",
            "business_category": "local",
            "state_code": "TX",
            "current_stage": "idea",
        }

        first = await call(create_business_from_onboarding, args)
        second = await call(create_business_from_onboarding, {**args, "current_stage": "started"})

        assert first["success"] and second["success"]
        assert first["business"]["id"] == second["business"]["id"]
        assert store.businesses["user-1"].stage == "started"


class TestBulkCreateTasks:
    """Tests for bulk_create_tasks"""

    @pytest.mark.asyncio
    async def test_creates_in_selection_order(self, store):
        business = await store.upsert_business("user-1", "Acme", "local", "TX", "idea")

        result = await call(bulk_create_tasks, {
            "user_id": "user-1",
            "business_id": business.id,
            "template_ids": ["tpl-05", "tpl-02"],
        })

        assert result["count"] == 2
        assert [t["template_id"] for t in result["tasks"]] == ["tpl-05", "tpl-02"]
        assert result["tasks"][0]["title"] == "Template 5"
        assert result["tasks"][0]["priority_order"] == 5
        assert result["tasks"][0]["status"] == "pending"

    @pytest.mark.asyncio
    async def test_unknown_business_is_reported(self):
        result = await call(bulk_create_tasks, {
            "user_id": "user-1",
            "business_id": "nope",
            "template_ids": ["tpl-01"],
        })

        assert result == {"success": False, "error": "Business not found: nope"}


class TestStoreBusinessPlan:
    """Tests for store_business_plan"""

    @pytest.mark.asyncio
    async def test_upserts_one_plan_per_user(self, store):
        first = await call(store_business_plan, PLAN_FIELDS)
        second = await call(store_business_plan, {**PLAN_FIELDS, "legal_score": 90})

        assert first["business_plan"]["id"] == second["business_plan"]["id"]
        assert store.plans["user-1"].legal_score == 90

    @pytest.mark.asyncio
    async def test_out_of_range_score_rejected(self, store):
        with pytest.raises(ValidationError):
            await store_business_plan.ainvoke({**PLAN_FIELDS, "confidence_score": 101})

        assert store.plans == {}


class TestInMemoryPlannerStore:
    """Tests for InMemoryPlannerStore"""

    @pytest.mark.asyncio
    async def test_templates_sorted_by_week(self):
        store = InMemoryPlannerStore(templates=list(reversed(make_templates(5))))

        templates = await store.list_task_templates()

        assert [t.week_number for t in templates] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_plan_upsert_keeps_id_and_created_at(self):
        store = InMemoryPlannerStore()
        first = await store.upsert_business_plan(BusinessPlan(**PLAN_FIELDS))
        second = await store.upsert_business_plan(BusinessPlan(**{**PLAN_FIELDS, "legal_score": 1}))

        assert second.id == first.id
        assert second.created_at == first.created_at
        assert (await store.get_business_plan("user-1")).legal_score == 1

    @pytest.mark.asyncio
    async def test_missing_plan_is_none(self):
        assert await InMemoryPlannerStore().get_business_plan("nobody") is None


class TestLoadSeedTemplates:
    """Tests for load_seed_templates"""

    def test_loads_yaml(self, tmp_path):
        seed = tmp_path / "templates.yaml"
        seed.write_text(
            "- id: a\n  title: First\n  priority: high\n  week_number: 1\n"
            "- id: b\n  title: Second\n"
        )

        templates = load_seed_templates(str(seed))

        assert [t.id for t in templates] == ["a", "b"]
        assert templates[0].priority == "high"
        assert templates[1].priority == "medium"

    def test_missing_file_is_empty(self, tmp_path):
        assert load_seed_templates(str(tmp_path / "missing.yaml")) == []

    def test_bundled_seed_file_parses(self):
        path = Path(__file__).resolve().parents[1] / "data" / "task_templates.yaml"
        templates = load_seed_templates(str(path))

        assert len(templates) >= 15
        assert len({t.id for t in templates}) == len(templates)
