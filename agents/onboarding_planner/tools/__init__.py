"""
Onboarding Planner Tools

- Tool contracts (LangChain tools) invoked by planner steps
- Planner stores (in-memory, Supabase) behind the tools
- Response extractor for model output
"""

from .planner_tools import (
    get_task_templates,
    create_business_from_onboarding,
    bulk_create_tasks,
    store_business_plan,
    PLANNER_TOOLS,
)
from .store import (
    PlannerStore,
    InMemoryPlannerStore,
    get_store,
    configure_store,
    load_seed_templates,
)
from .supabase_store import SupabasePlannerStore
from .extractor import (
    response_text,
    extract_json_text,
    extract_json_object,
    parse_plan_response,
)

__all__ = [
    "get_task_templates",
    "create_business_from_onboarding",
    "bulk_create_tasks",
    "store_business_plan",
    "PLANNER_TOOLS",
    "PlannerStore",
    "InMemoryPlannerStore",
    "SupabasePlannerStore",
    "get_store",
    "configure_store",
    "load_seed_templates",
    "response_text",
    "extract_json_text",
    "extract_json_object",
    "parse_plan_response",
]
