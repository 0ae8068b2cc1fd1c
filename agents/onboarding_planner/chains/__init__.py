from .prompts import (
    PLANNER_SYSTEM_PROMPT,
    MAX_PROMPT_TEMPLATES,
    render_templates,
    render_onboarding_profile,
)

__all__ = [
    "PLANNER_SYSTEM_PROMPT",
    "MAX_PROMPT_TEMPLATES",
    "render_templates",
    "render_onboarding_profile",
]
