"""
Onboarding Planner Workflow

LangGraph workflow that turns onboarding answers into a business, a plan,
and a curated task list.
"""

from typing import Any, Optional, Union

import structlog
from langgraph.graph import StateGraph, START

from navigator_core.config_loader import get_config
from navigator_core.workflow import BaseWorkflow, add_router_edges, make_path_map

from .schemas.plan import OnboardingAnswers, PlannerResult, SessionInputs
from .schemas.state import (
    OnboardingPlannerState,
    Step,
    Terminal,
    create_initial_state,
    merge_state,
)
from .nodes import (
    load_templates_node,
    generate_plan_node,
    create_business_node,
    initialize_tasks_node,
    store_plan_node,
    route_next,
)

logger = structlog.get_logger(__name__)

STEP_NODES = {
    Step.LOAD_TEMPLATES: load_templates_node,
    Step.GENERATE_PLAN: generate_plan_node,
    Step.CREATE_BUSINESS: create_business_node,
    Step.INITIALIZE_TASKS: initialize_tasks_node,
    Step.STORE_PLAN: store_plan_node,
}


class OnboardingPlannerWorkflow(BaseWorkflow):
    """
    Onboarding Planner Workflow

    Every edge is the router:
    - START -> first incomplete step
    - each step -> next incomplete step | END (success or error)
    """

    def __init__(
        self,
        agent_name: str = "onboarding_planner",
        agent_version: str = "1.0.0",
        **kwargs,
    ):
        super().__init__(agent_name=agent_name, agent_version=agent_version, **kwargs)

    def get_state_class(self) -> type:
        """Return OnboardingPlannerState TypedDict"""
        return OnboardingPlannerState

    def merge_update(self, state: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        return merge_state(state, update)

    def build_graph(self, graph: StateGraph) -> None:
        """Build the planner graph."""
        for step, node in STEP_NODES.items():
            graph.add_node(step.value, node)

        path_map = make_path_map(
            node_names=[step.value for step in Step],
            terminal_names=[terminal.value for terminal in Terminal],
        )

        add_router_edges(
            graph,
            sources=[START, *(step.value for step in Step)],
            router=route_next,
            path_map=path_map,
        )

    async def run(self, session: SessionInputs) -> PlannerResult:
        """
        Run the planner for one session.

        Args:
            session: Immutable session inputs

        Returns:
            PlannerResult; failures are reported, not raised
        """
        logger.info(
            "Starting onboarding planner",
            user_id=session.user_id,
            session_id=session.onboarding_session_id,
        )

        try:
            final_state = await self.run_state(create_initial_state(session))
        except Exception as e:
            return PlannerResult(success=False, error=str(e))

        return build_result(final_state)


def build_result(state: dict[str, Any]) -> PlannerResult:
    """Project the final state onto the caller-facing result."""
    failure = state.get("failure")
    if failure:
        logger.error(
            "Onboarding planner failed",
            failed_step=state.get("failed_step"),
            error=failure,
        )
        return PlannerResult(success=False, error=failure)

    scores = state.get("confidence_scores")
    result = PlannerResult(
        success=True,
        business_id=state.get("business_id"),
        business_plan_id=state.get("business_plan_id"),
        hero_task_id=state.get("hero_task_id"),
        task_count=len(state.get("created_task_ids") or []),
        confidence_scores=scores,
    )

    logger.info(
        "Onboarding planner completed",
        business_id=result.business_id,
        business_plan_id=result.business_plan_id,
        task_count=result.task_count,
        confidence=scores.total if scores else None,
    )
    return result


async def run_onboarding_planner(
    user_id: str,
    onboarding_data: Union[OnboardingAnswers, dict[str, Any]],
    session_id: Optional[str] = None,
    llm_provider: Optional[str] = None,
    llm_model: Optional[str] = None,
    llm_api_key: Optional[str] = None,
    workflow: Optional[OnboardingPlannerWorkflow] = None,
) -> PlannerResult:
    """
    Generate and persist an onboarding plan.

    Args:
        user_id: Owner of the business being planned
        onboarding_data: Onboarding answers (model or camelCase/snake_case dict)
        session_id: Onboarding session to link the plan to
        llm_provider: openrouter, openai or anthropic
        llm_model: Model identifier
        llm_api_key: User-supplied key for the provider
        workflow: Workflow instance to reuse (compiled graph is cached on it)

    Returns:
        PlannerResult; never raises
    """
    try:
        session = SessionInputs(
            user_id=user_id,
            onboarding_data=onboarding_data,
            onboarding_session_id=session_id,
            llm_provider=llm_provider or get_config().llm.provider,
            llm_model=llm_model,
            llm_api_key=llm_api_key,
        )
    except Exception as e:
        logger.error("Invalid planner inputs", user_id=user_id, error=str(e))
        return PlannerResult(success=False, error=f"Invalid planner inputs: {e}")

    return await (workflow or OnboardingPlannerWorkflow()).run(session)
