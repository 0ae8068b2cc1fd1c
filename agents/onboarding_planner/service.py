"""
Onboarding Plan Service

Calling layer for onboarding completion: runs the AI planner and, when it
reports failure, silently substitutes the fallback plan.
"""

from typing import Any, Optional, Union

import structlog

from .errors import StoreError
from .fallback import build_fallback_plan
from .schemas.plan import OnboardingAnswers
from .schemas.records import BusinessPlan
from .tools.store import PlannerStore, get_store
from .workflow import OnboardingPlannerWorkflow, run_onboarding_planner

logger = structlog.get_logger(__name__)


class OnboardingPlanService:
    """Produces the user's initial business plan"""

    def __init__(
        self,
        store: Optional[PlannerStore] = None,
        workflow: Optional[OnboardingPlannerWorkflow] = None,
    ):
        self._store = store
        self.workflow = workflow or OnboardingPlannerWorkflow()

    @property
    def store(self) -> PlannerStore:
        return self._store or get_store()

    async def generate_initial_plan(
        self,
        user_id: str,
        onboarding_data: Union[OnboardingAnswers, dict[str, Any]],
        session_id: Optional[str] = None,
        llm_provider: Optional[str] = None,
        llm_model: Optional[str] = None,
        llm_api_key: Optional[str] = None,
    ) -> BusinessPlan:
        """
        Generate the initial plan for a user.

        Args:
            user_id: Plan owner
            onboarding_data: Onboarding answers
            session_id: Onboarding session ID
            llm_provider: Provider override
            llm_model: Model override
            llm_api_key: User-supplied API key

        Returns:
            The stored BusinessPlan (AI-generated or fallback)

        Raises:
            StoreError: If the plan cannot be read back or stored
        """
        result = await run_onboarding_planner(
            user_id=user_id,
            onboarding_data=onboarding_data,
            session_id=session_id,
            llm_provider=llm_provider,
            llm_model=llm_model,
            llm_api_key=llm_api_key,
            workflow=self.workflow,
        )

        if not result.success:
            logger.error(
                "AI plan generation failed, using fallback plan",
                user_id=user_id,
                error=result.error,
            )
            return await self.store_fallback_plan(user_id, onboarding_data, session_id)

        plan = await self.store.get_business_plan(user_id)
        if plan is None:
            raise StoreError("Failed to fetch business plan: Plan not found")

        logger.info(
            "Initial plan ready",
            user_id=user_id,
            business_plan_id=plan.id,
            task_count=result.task_count,
        )
        return plan

    async def store_fallback_plan(
        self,
        user_id: str,
        onboarding_data: Union[OnboardingAnswers, dict[str, Any]],
        session_id: Optional[str] = None,
    ) -> BusinessPlan:
        """Build and upsert the deterministic fallback plan."""
        answers = (
            onboarding_data
            if isinstance(onboarding_data, OnboardingAnswers)
            else OnboardingAnswers.model_validate(onboarding_data)
        )
        plan = build_fallback_plan(user_id, answers, session_id)
        stored = await self.store.upsert_business_plan(plan)

        logger.info(
            "Fallback plan stored",
            user_id=user_id,
            business_plan_id=stored.id,
            entity_type=stored.recommended_entity_type,
        )
        return stored
