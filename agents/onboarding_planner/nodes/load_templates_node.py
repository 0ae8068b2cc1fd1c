"""
Load Templates Node

Fetch all task templates once; they bound what the model may select.
"""

import json
from typing import Any

import structlog

from ..schemas.state import Step
from ..tools.planner_tools import get_task_templates
from .outcomes import step_failed, step_succeeded

logger = structlog.get_logger(__name__)


async def load_templates_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Load Templates Node - fetch task templates.

    Replaces ``task_templates`` wholesale with every template, unfiltered.

    Args:
        state: Current workflow state

    Returns:
        Partial state update
    """
    session = state["session"]

    logger.info("Running load_templates node", user_id=session.user_id)

    try:
        result = json.loads(await get_task_templates.ainvoke({"category": None}))
    except Exception as e:
        logger.exception("Template lookup raised", user_id=session.user_id)
        return step_failed(Step.LOAD_TEMPLATES, f"Error loading templates: {e}")

    if not result.get("success"):
        logger.error(
            "Template lookup failed",
            user_id=session.user_id,
            error=result.get("error"),
        )
        return step_failed(Step.LOAD_TEMPLATES, f"Failed to load templates: {result.get('error')}")

    templates = result.get("templates") or []
    logger.info("Loaded task templates", user_id=session.user_id, count=len(templates))

    return step_succeeded(Step.LOAD_TEMPLATES, task_templates=templates)
