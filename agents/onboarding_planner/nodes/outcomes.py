"""
Step Outcomes

Every planner step returns one of two partial-update shapes: success marks
the step completed; failure records the message and the failing step.
"""

from typing import Any

from ..schemas.state import Step


def step_succeeded(step: Step, **updates: Any) -> dict[str, Any]:
    return {**updates, "completed_steps": {step}}


def step_failed(step: Step, message: str) -> dict[str, Any]:
    return {"failure": message, "failed_step": step}
