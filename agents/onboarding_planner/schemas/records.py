"""
Persistence Records

Rows read and written by the planner store. Field names match the
database columns (snake_case) so rows round-trip unchanged.
"""

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

TaskPriority = Literal["high", "medium", "low"]


def _new_id() -> str:
    return str(uuid4())


class TaskTemplate(BaseModel):
    """Reusable task definition from the task_templates table"""
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None   # legal, financial, product, marketing, testing, analytics
    phase: Optional[str] = None      # ideation, legal, financial, launch_prep
    priority: TaskPriority = "medium"
    week_number: Optional[int] = None


class Business(BaseModel):
    """Business row, one per owner"""
    id: str = Field(default_factory=_new_id)
    owner_id: str
    name: str
    category: str
    state: str
    stage: str
    status: str = "DRAFT"
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class UserTask(BaseModel):
    """Task instantiated from a template for one user"""
    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=_new_id)
    user_id: str
    business_id: Optional[str] = None
    template_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    priority: TaskPriority = "medium"
    priority_order: Optional[int] = None
    status: str = "pending"
    is_hero_task: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


class BusinessPlan(BaseModel):
    """Stored plan document, one per user"""
    id: str = Field(default_factory=_new_id)
    user_id: str
    business_id: Optional[str] = None
    onboarding_session_id: Optional[str] = None
    plan_summary: str
    recommended_entity_type: str
    recommended_state: str
    executive_summary: dict[str, Any] = Field(default_factory=dict)
    phase_recommendations: dict[str, Any] = Field(default_factory=dict)
    confidence_score: int = 0
    ideation_score: int = 0
    legal_score: int = 0
    financial_score: int = 0
    launch_prep_score: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
