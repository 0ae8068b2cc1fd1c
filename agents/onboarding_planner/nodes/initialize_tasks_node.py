"""
Initialize Tasks Node

Instantiate the model's selected templates as tasks and pick the hero task.
"""

import json
from typing import Any, Optional

import structlog

from ..errors import PreconditionError, ToolInvocationError
from ..schemas.state import Step
from ..tools.planner_tools import bulk_create_tasks
from .outcomes import step_failed, step_succeeded

logger = structlog.get_logger(__name__)


def resolve_hero_task(
    tasks: list[dict[str, Any]],
    hero_template_id: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the hero task.

    Order: the task created from the model's hero template, else the first
    high-priority task, else the first task.
    """
    if hero_template_id:
        for task in tasks:
            if task.get("template_id") == hero_template_id:
                return task["id"]

    for task in tasks:
        if task.get("priority") == "high":
            return task["id"]

    return tasks[0]["id"] if tasks else None


async def initialize_tasks_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Initialize Tasks Node - bulk-create tasks.

    Reads the selection from the typed plan response produced by
    generate_plan.

    Args:
        state: Current workflow state

    Returns:
        Partial state update with created_task_ids and hero_task_id
    """
    session = state["session"]
    business_id = state.get("business_id")
    plan = state.get("plan_response")

    logger.info(
        "Running initialize_tasks node",
        user_id=session.user_id,
        business_id=business_id,
    )

    try:
        if not business_id:
            raise PreconditionError("Business ID is required to create tasks")
        if plan is None:
            raise PreconditionError("Plan response is required to select tasks")

        template_ids = plan.selected_task_template_ids
        if not template_ids:
            raise PreconditionError("No task templates selected by AI")

        result = json.loads(await bulk_create_tasks.ainvoke({
            "user_id": session.user_id,
            "business_id": business_id,
            "template_ids": template_ids,
        }))

        if not result.get("success"):
            raise ToolInvocationError(result.get("error") or "Failed to create tasks")

    except Exception as e:
        logger.error("Initialize tasks failed", user_id=session.user_id, error=str(e))
        return step_failed(Step.INITIALIZE_TASKS, f"Error initializing tasks: {e}")

    tasks = result.get("tasks") or []
    if len(tasks) < len(template_ids):
        logger.warning(
            "Some selected templates were not instantiated",
            selected=len(template_ids),
            created=len(tasks),
        )

    hero_task_id = resolve_hero_task(tasks, plan.hero_task_template_id)

    logger.info(
        "Tasks initialized",
        user_id=session.user_id,
        task_count=len(tasks),
        hero_task_id=hero_task_id,
    )

    return step_succeeded(
        Step.INITIALIZE_TASKS,
        created_task_ids=[task["id"] for task in tasks],
        hero_task_id=hero_task_id,
    )
