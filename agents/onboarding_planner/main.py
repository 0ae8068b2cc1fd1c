"""
Onboarding Planner Main Entry Point

Run with: python -m agents.onboarding_planner.main
"""

import os
from typing import Any

import structlog

from navigator_core.config_loader import Config, get_provider_settings
from navigator_core.main import TaskHandler, run_agent
from navigator_core.schemas.tasks import GenerateOnboardingPlanInput

from .service import OnboardingPlanService
from .tools.store import InMemoryPlannerStore, PlannerStore, configure_store, load_seed_templates
from .tools.supabase_store import SupabasePlannerStore

logger = structlog.get_logger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


def build_store(config: Config) -> PlannerStore:
    """Create the planner store selected by ``store.backend``."""
    if config.store.backend == "supabase":
        return SupabasePlannerStore(
            base_url=config.store.url,
            service_key=get_provider_settings().supabase_service_role_key,
            timeout=config.store.timeout_seconds,
        )

    templates = []
    if config.store.seed_templates_path:
        templates = load_seed_templates(config.store.seed_templates_path)
    return InMemoryPlannerStore(templates=templates)


async def build_handlers(config: Config) -> dict[str, TaskHandler]:
    """Task handlers for the planner's task server."""
    store = configure_store(build_store(config))
    service = OnboardingPlanService(store=store)

    async def generate_onboarding_plan(payload: dict[str, Any]) -> dict[str, Any]:
        request = GenerateOnboardingPlanInput.model_validate(payload)
        plan = await service.generate_initial_plan(
            user_id=request.user_id,
            onboarding_data=request.onboarding_data,
            session_id=request.session_id,
            llm_provider=request.llm_provider,
            llm_model=request.llm_model,
            llm_api_key=request.llm_api_key,
        )
        return {"business_plan": plan.model_dump(mode="json")}

    return {"generate_onboarding_plan": generate_onboarding_plan}


def main():
    """Run the Onboarding Planner Agent"""
    run_agent(build_handlers, os.getenv("CONFIG_PATH", CONFIG_PATH))


if __name__ == "__main__":
    main()
