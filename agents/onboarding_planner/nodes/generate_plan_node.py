"""
Generate Plan Node

Ask the model for a personalized plan and template selection, then
extract and validate its JSON answer.
"""

from typing import Any

import structlog
from langchain_core.messages import AIMessage, HumanMessage

from navigator_core.chains.inference import create_inference_client
from navigator_core.config_loader import get_config

from ..chains.prompts import PLANNER_SYSTEM_PROMPT, render_onboarding_profile
from ..errors import PlannerError
from ..schemas.plan import GeneratedPlan
from ..schemas.state import Step
from ..tools.extractor import parse_plan_response, response_text
from ..tools.planner_tools import PLANNER_TOOLS
from .outcomes import step_failed, step_succeeded

logger = structlog.get_logger(__name__)

DEFAULT_STATE_CODE = "CA"


async def generate_plan_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Generate Plan Node - call the model.

    Actions:
    1. Render the onboarding profile and the first N templates
    2. Invoke the model with the planner tools available
    3. Concatenate the text content and extract the JSON plan
    4. Store the typed plan response, the plan document and rounded scores
    5. Append the request and the model's answer to the conversation log

    Nothing is stored unless every stage succeeds.

    Args:
        state: Current workflow state

    Returns:
        Partial state update
    """
    session = state["session"]
    answers = session.onboarding_data
    templates = state.get("task_templates", [])
    limit = get_config().workflow.max_prompt_templates

    logger.info(
        "Running generate_plan node",
        user_id=session.user_id,
        provider=session.llm_provider,
        model=session.llm_model,
        template_count=len(templates),
    )

    request = HumanMessage(content=render_onboarding_profile(answers, templates, limit))

    try:
        client = create_inference_client(
            provider=session.llm_provider,
            model=session.llm_model,
            api_key=session.llm_api_key,
        )
        response = await client.invoke(PLANNER_SYSTEM_PROMPT, PLANNER_TOOLS, [request])
        ai_content = response_text(response.content)
        logger.debug("Model responded", user_id=session.user_id, length=len(ai_content))

        plan = parse_plan_response(ai_content)

    except PlannerError as e:
        logger.error("Plan generation failed", user_id=session.user_id, error=str(e))
        return step_failed(Step.GENERATE_PLAN, f"Error generating plan: {e}")
    except Exception as e:
        logger.exception("Inference call failed", user_id=session.user_id)
        return step_failed(Step.GENERATE_PLAN, f"Error generating plan: {e}")

    generated_plan = GeneratedPlan(
        executive_summary=plan.executive_summary,
        recommended_entity_type=plan.recommended_entity_type,
        recommended_state=plan.recommended_state or answers.state_code or DEFAULT_STATE_CODE,
        phase_recommendations=plan.phase_recommendations,
        plan_summary=plan.plan_summary,
    )

    logger.info(
        "Plan generated",
        user_id=session.user_id,
        entity_type=generated_plan.recommended_entity_type,
        selected_templates=len(plan.selected_task_template_ids),
        confidence=plan.confidence_scores.total,
    )

    return step_succeeded(
        Step.GENERATE_PLAN,
        plan_response=plan,
        generated_plan=generated_plan,
        confidence_scores=plan.confidence_scores,
        conversation_log=[request, AIMessage(content=ai_content)],
    )
