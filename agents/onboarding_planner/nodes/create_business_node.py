"""
Create Business Node

Create (or update) the user's business record from onboarding answers.
"""

import json
from typing import Any

import structlog

from ..errors import PreconditionError, ToolInvocationError
from ..schemas.state import Step
from ..tools.planner_tools import create_business_from_onboarding
from .outcomes import step_failed, step_succeeded

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORY = "service"
DEFAULT_STATE_CODE = "CA"
DEFAULT_STAGE = "idea"


async def create_business_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Create Business Node - upsert the business.

    Requires a business name; category, state and stage fall back to
    service / CA / idea. The upsert itself is keyed by owner in the store.

    Args:
        state: Current workflow state

    Returns:
        Partial state update with business_id
    """
    session = state["session"]
    answers = session.onboarding_data

    logger.info("Running create_business node", user_id=session.user_id)

    try:
        if not answers.business_name:
            raise PreconditionError("Business name is required")

        result = json.loads(await create_business_from_onboarding.ainvoke({
            "user_id": session.user_id,
            "business_name": answers.business_name,
            "business_category": answers.business_category or DEFAULT_CATEGORY,
            "state_code": answers.state_code or DEFAULT_STATE_CODE,
            "current_stage": answers.current_stage or DEFAULT_STAGE,
        }))

        if not result.get("success"):
            raise ToolInvocationError(result.get("error") or "Failed to create business")

        business_id = result["business"]["id"]

    except Exception as e:
        logger.error("Create business failed", user_id=session.user_id, error=str(e))
        return step_failed(Step.CREATE_BUSINESS, f"Error creating business: {e}")

    logger.info("Business ready", user_id=session.user_id, business_id=business_id)

    return step_succeeded(Step.CREATE_BUSINESS, business_id=business_id)
