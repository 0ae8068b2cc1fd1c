"""
Schemas for the onboarding planner: run state, plan types, and store records.
"""

from .plan import (
    OnboardingAnswers,
    SessionInputs,
    ConfidenceScores,
    PlanResponse,
    GeneratedPlan,
    PlannerResult,
)
from .records import TaskTemplate, Business, UserTask, BusinessPlan
from .state import (
    Step,
    Terminal,
    STEP_ORDER,
    OnboardingPlannerState,
    merge_state,
    create_initial_state,
)

__all__ = [
    "OnboardingAnswers",
    "SessionInputs",
    "ConfidenceScores",
    "PlanResponse",
    "GeneratedPlan",
    "PlannerResult",
    "TaskTemplate",
    "Business",
    "UserTask",
    "BusinessPlan",
    "Step",
    "Terminal",
    "STEP_ORDER",
    "OnboardingPlannerState",
    "merge_state",
    "create_initial_state",
]
