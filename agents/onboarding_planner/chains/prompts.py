"""
Prompt Templates for the Onboarding Planner

The planner asks for one JSON object; extraction tolerates fences and prose
around it, but the instruction still asks for bare JSON.
"""

import json
from typing import Any

from ..schemas.plan import OnboardingAnswers

# Only this many templates are shown to the model, to bound prompt size
MAX_PROMPT_TEMPLATES = 50

NOT_PROVIDED = "Not provided"

# ============== Plan Generation ==============

PLANNER_SYSTEM_PROMPT = """You are a business formation advisor.
Based on the user's onboarding profile, recommend the best business structure
and select the task templates that form their launch roadmap.

You may call the available tools, but your final answer must be a single JSON
object (no markdown, no explanation) with this shape:
{
  "recommendedEntityType": "LLC",
  "recommendedState": "CA",
  "planSummary": "Brief 1-2 sentence recommendation",
  "executiveSummary": {"overview": "Brief overview"},
  "phaseRecommendations": {
    "ideation": {"focus": "...", "priority": "high"},
    "legal": {"focus": "...", "priority": "high"},
    "financial": {"focus": "...", "priority": "medium"},
    "launch_prep": {"focus": "...", "priority": "medium"}
  },
  "confidenceScores": {"total": 80, "ideation": 75, "legal": 80, "financial": 75, "launchPrep": 70},
  "selectedTaskTemplateIds": ["id1", "id2"],
  "heroTaskTemplateId": "id1"
}

Rules:
- recommendedEntityType is one of LLC, CORPORATION, SOLE_PROPRIETORSHIP, PARTNERSHIP.
- Confidence scores are integers from 0 to 100.
- Select 15-20 templates, using only IDs from the AVAILABLE TASK TEMPLATES list.
- heroTaskTemplateId is the single most important next action and must be one of the selected IDs.
"""

ONBOARDING_PROFILE_TEMPLATE = """**Business Information:**
- Business Name: {business_name}
- Category: {business_category}
- Current Stage: {current_stage}
- State: {state_code}

**Goals & Timeline:**
- Primary Goals: {primary_goals}
- Timeline: {timeline}

**Team & Funding:**
- Team Size: {team_size}
- Funding Approach: {funding_approach}

**Experience & Concerns:**
- Previous Experience: {previous_experience}
- Primary Concern: {primary_concern}

**Available Task Templates:**
{templates}
"""

TEMPLATE_PROMPT_FIELDS = ("id", "title", "category", "phase", "priority", "week_number")


def render_templates(templates: list[dict[str, Any]], limit: int = MAX_PROMPT_TEMPLATES) -> str:
    """JSON listing of the first ``limit`` templates, trimmed to prompt fields."""
    trimmed = [
        {key: template.get(key) for key in TEMPLATE_PROMPT_FIELDS if template.get(key) is not None}
        for template in templates[:limit]
    ]
    return json.dumps(trimmed, indent=1)


def render_onboarding_profile(
    answers: OnboardingAnswers,
    templates: list[dict[str, Any]],
    limit: int = MAX_PROMPT_TEMPLATES,
) -> str:
    """Human-readable onboarding profile followed by the template listing."""
    return ONBOARDING_PROFILE_TEMPLATE.format(
        business_name=answers.business_name or NOT_PROVIDED,
        business_category=answers.business_category or NOT_PROVIDED,
        current_stage=answers.current_stage or NOT_PROVIDED,
        state_code=answers.state_code or NOT_PROVIDED,
        primary_goals=", ".join(answers.primary_goals) or NOT_PROVIDED,
        timeline=answers.timeline or NOT_PROVIDED,
        team_size=answers.team_size or "Solo founder",
        funding_approach=answers.funding_approach or NOT_PROVIDED,
        previous_experience=answers.previous_experience or NOT_PROVIDED,
        primary_concern=answers.primary_concern or NOT_PROVIDED,
        templates=render_templates(templates, limit),
    )
