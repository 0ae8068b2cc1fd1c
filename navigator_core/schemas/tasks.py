"""
Task Schemas

Input/output envelopes for tasks submitted to the agent's HTTP server.
"""

from typing import Any, Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from uuid import uuid4


class TaskStatus(BaseModel):
    """Status of a submitted task"""
    state: Literal["pending", "running", "completed", "failed"]
    progress: Optional[int] = Field(None, ge=0, le=100, description="Progress percentage")
    message: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class TaskInput(BaseModel):
    """
    Task Input Schema

    This is what the agent receives on POST /tasks.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "task_id": "task-123-456",
                "task_type": "generate_onboarding_plan",
                "payload": {
                    "user_id": "user-1",
                    "session_id": "session-1",
                    "onboarding_data": {
                        "businessName": "Acme Bakery",
                        "businessCategory": "local",
                        "stateCode": "TX",
                    },
                },
                "timeout_seconds": 120,
            }
        }
    )

    # Task identification
    task_id: str = Field(default_factory=lambda: str(uuid4()))
    task_type: str = Field(..., description="Type of task to perform")

    # Context
    correlation_id: Optional[str] = Field(None, description="For distributed tracing")

    # Payload
    payload: dict[str, Any] = Field(default_factory=dict)

    # Metadata
    timeout_seconds: int = Field(default=300, gt=0)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)


class TaskOutput(BaseModel):
    """
    Task Output Schema

    This is what the agent returns after processing a task.
    """
    # Task identification
    task_id: str
    task_type: str

    # Status
    status: TaskStatus

    # Result
    result: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    # Metadata
    agent_name: str
    agent_version: str

    # Timing
    started_at: datetime
    completed_at: datetime = Field(default_factory=datetime.utcnow)
    duration_ms: Optional[int] = None


# ============== Agent-Specific Task Types ==============


class GenerateOnboardingPlanInput(BaseModel):
    """Payload for the generate_onboarding_plan task"""
    user_id: str
    onboarding_data: dict[str, Any]
    session_id: Optional[str] = None
    llm_provider: Optional[Literal["openrouter", "openai", "anthropic"]] = None
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = Field(default=None, repr=False)
