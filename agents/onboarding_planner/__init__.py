"""
Onboarding Planner Agent

Turns a user's onboarding answers into a persisted business, an AI-generated
plan with confidence scores, and a curated set of tasks.

Flow (every edge goes through the router):
    START -> load_templates -> generate_plan -> create_business
          -> initialize_tasks -> store_plan -> END

    Any step failure -> END (error)

When the planner reports failure, OnboardingPlanService stores a
deterministic fallback plan instead.
"""

from .workflow import OnboardingPlannerWorkflow, run_onboarding_planner
from .service import OnboardingPlanService
from .schemas.state import OnboardingPlannerState, create_initial_state
from .schemas.plan import PlannerResult

__version__ = "1.0.0"

__all__ = [
    "OnboardingPlannerWorkflow",
    "run_onboarding_planner",
    "OnboardingPlanService",
    "OnboardingPlannerState",
    "create_initial_state",
    "PlannerResult",
]
