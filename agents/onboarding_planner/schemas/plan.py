"""
Onboarding Planner Plan Schemas

Typed inputs and outputs of the planner: the user's onboarding answers,
the model's structured plan response, and the run result returned to callers.
"""

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LLMProvider = Literal["openrouter", "openai", "anthropic"]


class CamelModel(BaseModel):
    """Accepts camelCase keys from the model / frontend as well as snake_case"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OnboardingAnswers(CamelModel):
    """Answers collected by the onboarding wizard"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    business_name: Optional[str] = None
    business_category: Optional[str] = None   # tech_saas, service, ecommerce, local
    current_stage: Optional[str] = None       # idea, planning, started
    state_code: Optional[str] = None          # two-letter US state
    primary_goals: list[str] = Field(default_factory=list)
    timeline: Optional[str] = None            # asap, soon, later, exploring
    team_size: Optional[int] = None
    funding_approach: Optional[str] = None
    previous_experience: Optional[str] = None
    primary_concern: Optional[str] = None


class SessionInputs(BaseModel):
    """Immutable per-run inputs, set once when the run starts"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    onboarding_data: OnboardingAnswers
    onboarding_session_id: Optional[str] = None
    llm_provider: LLMProvider = "openrouter"
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = Field(default=None, repr=False)


def round_score(value: Any) -> int:
    """Round half-up to an integer and clamp to 0-100."""
    rounded = math.floor(float(value) + 0.5)
    return max(0, min(100, rounded))


class ConfidenceScores(CamelModel):
    """Per-phase confidence scores plus total, each 0-100"""
    total: int
    ideation: int
    legal: int
    financial: int
    launch_prep: int

    @field_validator("total", "ideation", "legal", "financial", "launch_prep", mode="before")
    @classmethod
    def _round(cls, value: Any) -> int:
        if value is None or isinstance(value, bool):
            raise ValueError("score must be a number")
        return round_score(value)


class PlanResponse(CamelModel):
    """
    The model's full structured response, produced once by extraction.

    Both plan generation and task initialization read this value; the
    template selection and hero template are not part of the stored plan.
    """
    executive_summary: dict[str, Any]
    recommended_entity_type: str
    recommended_state: Optional[str] = None
    phase_recommendations: dict[str, Any] = Field(default_factory=dict)
    plan_summary: str
    confidence_scores: ConfidenceScores
    selected_task_template_ids: list[str] = Field(min_length=1)
    hero_task_template_id: Optional[str] = None

    @field_validator("phase_recommendations", mode="before")
    @classmethod
    def _default_phases(cls, value: Any) -> Any:
        return value or {}

    @field_validator("selected_task_template_ids", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Any:
        # Models occasionally emit numeric IDs
        if isinstance(value, list):
            return [str(item) for item in value]
        return value

    @field_validator("hero_task_template_id", mode="before")
    @classmethod
    def _stringify_hero(cls, value: Any) -> Any:
        return str(value) if value not in (None, "") else None


class GeneratedPlan(CamelModel):
    """Plan document persisted by the store_plan step"""
    executive_summary: dict[str, Any]
    recommended_entity_type: str
    recommended_state: str
    phase_recommendations: dict[str, Any] = Field(default_factory=dict)
    plan_summary: str


class PlannerResult(BaseModel):
    """Result of one planner run; failures are reported, never raised"""
    success: bool
    business_id: Optional[str] = None
    business_plan_id: Optional[str] = None
    hero_task_id: Optional[str] = None
    task_count: Optional[int] = None
    confidence_scores: Optional[ConfidenceScores] = None
    error: Optional[str] = None
