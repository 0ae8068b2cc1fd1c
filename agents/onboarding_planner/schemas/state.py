"""
Onboarding Planner State Schema

The single record threaded through every planner step, its step/terminal
enumerations, and the merge rule for each field.

Merge rules (one per field):
    session             write_once          set at start, never changed
    task_templates      replace             overwritten wholesale
    conversation_log    append_log          append-only
    plan_response       write_once
    generated_plan      write_once
    confidence_scores   write_once
    business_id         write_once
    business_plan_id    write_once
    hero_task_id        write_once
    created_task_ids    replace             overwritten wholesale
    completed_steps     union_steps         never shrinks
    failure             keep_first_failure  first failure wins
    failed_step         keep_first_failure
    started_at          write_once

The LangGraph annotations below use the same rule functions as reducers,
so ``merge_state`` and the compiled graph always agree.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Callable, Optional, TypedDict, TypeVar

from langchain_core.messages import BaseMessage

from ..errors import StateInvariantError
from .plan import ConfidenceScores, GeneratedPlan, PlanResponse, SessionInputs

T = TypeVar("T")


class Step(str, Enum):
    """Planner steps, in execution order"""
    LOAD_TEMPLATES = "load_templates"
    GENERATE_PLAN = "generate_plan"
    CREATE_BUSINESS = "create_business"
    INITIALIZE_TASKS = "initialize_tasks"
    STORE_PLAN = "store_plan"


class Terminal(str, Enum):
    """Router outputs that end a run"""
    SUCCESS = "success"
    ERROR = "error"


STEP_ORDER: tuple[Step, ...] = (
    Step.LOAD_TEMPLATES,
    Step.GENERATE_PLAN,
    Step.CREATE_BUSINESS,
    Step.INITIALIZE_TASKS,
    Step.STORE_PLAN,
)


# ============== Merge Rules ==============


def replace(old: Any, new: T) -> T:
    """New value overwrites the old one."""
    return new


def append_log(old: list[BaseMessage], new: list[BaseMessage]) -> list[BaseMessage]:
    """Append new messages after the existing ones."""
    return list(old or []) + list(new or [])


def union_steps(old: set[Step], new: set[Step]) -> set[Step]:
    """Completed steps only grow."""
    return set(old or ()) | set(new or ())


def write_once(old: Optional[T], new: Optional[T]) -> Optional[T]:
    """Accept the first non-null value; reject a different second one."""
    if old is None:
        return new
    if new is None or new == old:
        return old
    raise StateInvariantError(
        f"Refusing to overwrite write-once field ({old!r} -> {new!r})"
    )


def keep_first_failure(old: Optional[T], new: Optional[T]) -> Optional[T]:
    """A failure, once recorded, is never overwritten."""
    return old if old else new


class OnboardingPlannerState(TypedDict, total=False):
    """
    Onboarding Planner State

    Created fresh per onboarding-completion request and discarded at the end
    of the run; only the rows written by the tools outlive it.
    """

    # ============== Session Inputs (immutable) ==============
    session: Annotated[SessionInputs, write_once]

    # ============== Fetched Data ==============
    task_templates: Annotated[list[dict[str, Any]], replace]

    # ============== Inference ==============
    conversation_log: Annotated[list[BaseMessage], append_log]
    plan_response: Annotated[Optional[PlanResponse], write_once]

    # ============== AI-Generated Outputs ==============
    generated_plan: Annotated[Optional[GeneratedPlan], write_once]
    confidence_scores: Annotated[Optional[ConfidenceScores], write_once]

    # ============== Created Resources ==============
    business_id: Annotated[Optional[str], write_once]
    business_plan_id: Annotated[Optional[str], write_once]
    hero_task_id: Annotated[Optional[str], write_once]
    created_task_ids: Annotated[list[str], replace]

    # ============== Execution Tracking ==============
    completed_steps: Annotated[set[Step], union_steps]
    failure: Annotated[Optional[str], keep_first_failure]
    failed_step: Annotated[Optional[Step], keep_first_failure]
    started_at: Annotated[Optional[str], write_once]


MERGE_RULES: dict[str, Callable[[Any, Any], Any]] = {
    "session": write_once,
    "task_templates": replace,
    "conversation_log": append_log,
    "plan_response": write_once,
    "generated_plan": write_once,
    "confidence_scores": write_once,
    "business_id": write_once,
    "business_plan_id": write_once,
    "hero_task_id": write_once,
    "created_task_ids": replace,
    "completed_steps": union_steps,
    "failure": keep_first_failure,
    "failed_step": keep_first_failure,
    "started_at": write_once,
}


def merge_state(
    state: OnboardingPlannerState,
    update: dict[str, Any],
) -> OnboardingPlannerState:
    """
    Merge a step's partial update into state.

    Returns a new dict; ``state`` is left untouched. Unknown keys are
    rejected so a typo in a step cannot silently add fields.
    """
    merged: dict[str, Any] = dict(state)
    for key, value in update.items():
        if key not in MERGE_RULES:
            raise StateInvariantError(f"Unknown state field: {key}")
        if key in merged:
            merged[key] = MERGE_RULES[key](merged[key], value)
        else:
            merged[key] = value
    return OnboardingPlannerState(**merged)


def create_initial_state(session: SessionInputs) -> OnboardingPlannerState:
    """
    Create initial state for a planner run.

    Args:
        session: Immutable session inputs

    Returns:
        Initial OnboardingPlannerState
    """
    return OnboardingPlannerState(
        # Session inputs
        session=session,
        # Fetched data (populated by load_templates)
        task_templates=[],
        # Inference (populated by generate_plan)
        conversation_log=[],
        plan_response=None,
        generated_plan=None,
        confidence_scores=None,
        # Created resources
        business_id=None,
        business_plan_id=None,
        hero_task_id=None,
        created_task_ids=[],
        # Execution tracking
        completed_steps=set(),
        failure=None,
        failed_step=None,
        started_at=datetime.utcnow().isoformat(),
    )
