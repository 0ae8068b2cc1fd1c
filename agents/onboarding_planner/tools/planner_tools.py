"""
Planner Tool Contracts

LangChain tools for the onboarding planner. Each takes a typed input and
returns a JSON string discriminated by ``success``; the side effects go
through the configured PlannerStore.

The same tools are bound to the model during plan generation, so the
model may call them, but the planner steps invoke them directly.
"""

import json
from typing import Any, Optional

import structlog
from langchain_core.tools import tool
from pydantic import BaseModel, Field

from ..schemas.records import BusinessPlan
from .store import get_store

logger = structlog.get_logger(__name__)


def _ok(**payload: Any) -> str:
    return json.dumps({"success": True, **payload})


def _error(tool_name: str, error: Exception) -> str:
    logger.error("Tool failed", tool=tool_name, error=str(error))
    return json.dumps({"success": False, "error": str(error)})


# ============== Input Schemas ==============


class GetTaskTemplatesInput(BaseModel):
    category: Optional[str] = Field(
        None,
        description="Optional category filter (legal, financial, product, marketing, testing, analytics)",
    )


class CreateBusinessInput(BaseModel):
    user_id: str = Field(..., description="Owner user ID")
    business_name: str = Field(..., description="Business name")
    business_category: str = Field(..., description="tech_saas, service, ecommerce or local")
    state_code: str = Field(..., description="Two-letter US state code")
    current_stage: str = Field(..., description="idea, planning or started")


class BulkCreateTasksInput(BaseModel):
    user_id: str = Field(..., description="Owner user ID")
    business_id: str = Field(..., description="Business the tasks belong to")
    template_ids: list[str] = Field(..., description="Task template IDs to instantiate")


class StoreBusinessPlanInput(BaseModel):
    user_id: str
    business_id: Optional[str] = None
    onboarding_session_id: Optional[str] = None
    plan_summary: str
    recommended_entity_type: str
    recommended_state: str
    executive_summary: dict[str, Any]
    phase_recommendations: dict[str, Any] = Field(default_factory=dict)
    confidence_score: int = Field(..., ge=0, le=100)
    ideation_score: int = Field(..., ge=0, le=100)
    legal_score: int = Field(..., ge=0, le=100)
    financial_score: int = Field(..., ge=0, le=100)
    launch_prep_score: int = Field(..., ge=0, le=100)


# ============== Tools ==============


@tool("get_task_templates", args_schema=GetTaskTemplatesInput)
async def get_task_templates(category: Optional[str] = None) -> str:
    """Get available task templates for business formation, optionally filtered by category."""
    try:
        templates = await get_store().list_task_templates(category)
        return _ok(
            templates=[t.model_dump(mode="json") for t in templates],
            count=len(templates),
        )
    except Exception as e:
        return _error("get_task_templates", e)


@tool("create_business_from_onboarding", args_schema=CreateBusinessInput)
async def create_business_from_onboarding(
    user_id: str,
    business_name: str,
    business_category: str,
    state_code: str,
    current_stage: str,
) -> str:
    """Create the user's business record from onboarding answers, or update the existing one."""
    try:
        business = await get_store().upsert_business(
            owner_id=user_id,
            name=business_name,
            category=business_category,
            state_code=state_code,
            stage=current_stage,
        )
        return _ok(business=business.model_dump(mode="json"))
    except Exception as e:
        return _error("create_business_from_onboarding", e)


@tool("bulk_create_tasks", args_schema=BulkCreateTasksInput)
async def bulk_create_tasks(user_id: str, business_id: str, template_ids: list[str]) -> str:
    """Create one task for the user per selected task template."""
    try:
        tasks = await get_store().create_tasks_from_templates(
            user_id=user_id,
            business_id=business_id,
            template_ids=template_ids,
        )
        return _ok(
            tasks=[t.model_dump(mode="json") for t in tasks],
            count=len(tasks),
        )
    except Exception as e:
        return _error("bulk_create_tasks", e)


@tool("store_business_plan", args_schema=StoreBusinessPlanInput)
async def store_business_plan(**plan_fields: Any) -> str:
    """Store the user's business plan with confidence scores, replacing any previous plan."""
    try:
        plan = await get_store().upsert_business_plan(BusinessPlan(**plan_fields))
        return _ok(business_plan=plan.model_dump(mode="json"))
    except Exception as e:
        return _error("store_business_plan", e)


PLANNER_TOOLS = [
    get_task_templates,
    create_business_from_onboarding,
    bulk_create_tasks,
    store_business_plan,
]
