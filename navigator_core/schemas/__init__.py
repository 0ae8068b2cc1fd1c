"""
Pydantic schemas for task server input/output.
"""

from .tasks import (
    TaskInput,
    TaskOutput,
    TaskStatus,
    GenerateOnboardingPlanInput,
)

__all__ = [
    "TaskInput",
    "TaskOutput",
    "TaskStatus",
    "GenerateOnboardingPlanInput",
]
