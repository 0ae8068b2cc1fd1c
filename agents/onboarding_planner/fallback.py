"""
Fallback Plan

Deterministic, template-based plan used when the AI planner reports
failure. It needs no model and no task templates.
"""

from typing import Any, Optional

from .schemas.plan import OnboardingAnswers
from .schemas.records import BusinessPlan

DEFAULT_STATE_CODE = "DE"

# Initial scores right after onboarding
FALLBACK_SCORES = {
    "confidence_score": 5,
    "ideation_score": 10,
    "legal_score": 0,
    "financial_score": 0,
    "launch_prep_score": 0,
}


def recommend_entity_type(answers: OnboardingAnswers) -> str:
    """Tech/SaaS seeking investment -> CORPORATION; everyone else -> LLC."""
    if answers.business_category == "tech_saas" and answers.funding_approach == "investment":
        return "CORPORATION"
    return "LLC"


def build_plan_summary(answers: OnboardingAnswers) -> str:
    category = answers.business_category or "business"
    stage = answers.current_stage or "planning"
    timeline = answers.timeline or "soon"

    return (
        f"You're starting a {category} business in the {stage} stage, planning to "
        f"launch {timeline}. We've created a customized roadmap to guide you through "
        f"the legal, financial, and operational steps needed to launch successfully."
    )


def build_executive_summary(answers: OnboardingAnswers) -> dict[str, Any]:
    return {
        "businessType": answers.business_category,
        "stage": answers.current_stage,
        "state": answers.state_code,
        "timeline": answers.timeline,
        "teamSize": answers.team_size,
        "fundingApproach": answers.funding_approach,
        "experience": answers.previous_experience,
        "primaryConcern": answers.primary_concern,
        "primaryGoals": list(answers.primary_goals),
    }


def build_phase_recommendations(answers: OnboardingAnswers, state_code: str) -> dict[str, Any]:
    return {
        "ideation": {
            "focus": "Finalize your business concept and validate market fit",
            "priority": "high" if answers.current_stage == "idea" else "medium",
        },
        "legal": {
            "focus": f"Form your business entity in {state_code} and handle compliance",
            "priority": "high",
        },
        "financial": {
            "focus": "Set up accounting, taxes, and financial projections",
            "priority": "high" if answers.primary_concern == "financial" else "medium",
        },
        "launch_prep": {
            "focus": "Prepare for launch with final operational setup",
            "priority": "high" if answers.timeline == "asap" else "medium",
        },
    }


def build_fallback_plan(
    user_id: str,
    answers: OnboardingAnswers,
    onboarding_session_id: Optional[str] = None,
) -> BusinessPlan:
    """
    Build the fallback plan document for a user.

    Args:
        user_id: Plan owner
        answers: Onboarding answers
        onboarding_session_id: Session the plan came from

    Returns:
        Unsaved BusinessPlan
    """
    state_code = answers.state_code or DEFAULT_STATE_CODE

    return BusinessPlan(
        user_id=user_id,
        onboarding_session_id=onboarding_session_id,
        plan_summary=build_plan_summary(answers),
        recommended_entity_type=recommend_entity_type(answers),
        recommended_state=state_code,
        executive_summary=build_executive_summary(answers),
        phase_recommendations=build_phase_recommendations(answers, state_code),
        **FALLBACK_SCORES,
    )
