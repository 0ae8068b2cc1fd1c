"""
Onboarding Planner Nodes

LangGraph nodes for the plan-generation steps, and the router that
sequences them.
"""

from .load_templates_node import load_templates_node
from .generate_plan_node import generate_plan_node
from .create_business_node import create_business_node
from .initialize_tasks_node import initialize_tasks_node, resolve_hero_task
from .store_plan_node import store_plan_node

from .conditions import route, route_next

__all__ = [
    # Nodes
    "load_templates_node",
    "generate_plan_node",
    "create_business_node",
    "initialize_tasks_node",
    "store_plan_node",
    "resolve_hero_task",
    # Conditions
    "route",
    "route_next",
]
