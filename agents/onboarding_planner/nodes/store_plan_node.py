"""
Store Plan Node

Persist the generated plan and its confidence scores.
"""

import json
from typing import Any

import structlog

from ..errors import PreconditionError, ToolInvocationError
from ..schemas.state import Step
from ..tools.planner_tools import store_business_plan
from .outcomes import step_failed, step_succeeded

logger = structlog.get_logger(__name__)


async def store_plan_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Store Plan Node - upsert the plan document.

    Args:
        state: Current workflow state

    Returns:
        Partial state update with business_plan_id
    """
    session = state["session"]
    plan = state.get("generated_plan")
    scores = state.get("confidence_scores")

    logger.info("Running store_plan node", user_id=session.user_id)

    try:
        if plan is None or scores is None:
            raise PreconditionError("Business plan and confidence scores are required")

        result = json.loads(await store_business_plan.ainvoke({
            "user_id": session.user_id,
            "business_id": state.get("business_id"),
            "onboarding_session_id": session.onboarding_session_id,
            "plan_summary": plan.plan_summary,
            "recommended_entity_type": plan.recommended_entity_type,
            "recommended_state": plan.recommended_state,
            "executive_summary": plan.executive_summary,
            "phase_recommendations": plan.phase_recommendations,
            "confidence_score": scores.total,
            "ideation_score": scores.ideation,
            "legal_score": scores.legal,
            "financial_score": scores.financial,
            "launch_prep_score": scores.launch_prep,
        }))

        if not result.get("success"):
            raise ToolInvocationError(result.get("error") or "Failed to store business plan")

        business_plan_id = result["business_plan"]["id"]

    except Exception as e:
        logger.error("Store plan failed", user_id=session.user_id, error=str(e))
        return step_failed(Step.STORE_PLAN, f"Error storing plan: {e}")

    logger.info(
        "Plan stored",
        user_id=session.user_id,
        business_plan_id=business_plan_id,
    )

    return step_succeeded(Step.STORE_PLAN, business_plan_id=business_plan_id)
