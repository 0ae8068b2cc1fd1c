"""
Conditional Edge Functions

The planner has a single router: every edge out of START and out of every
step node goes through it.

    load_templates -> generate_plan -> create_business -> initialize_tasks -> store_plan

Any recorded failure ends the run.
"""

from typing import Union

from ..schemas.state import STEP_ORDER, Step, Terminal


def route(state: dict) -> Union[Step, Terminal]:
    """
    Pick the next step.

    Returns Terminal.ERROR when a failure is set, otherwise the first step in
    STEP_ORDER that has not completed, otherwise Terminal.SUCCESS.
    """
    if state.get("failure"):
        return Terminal.ERROR

    completed = state.get("completed_steps") or set()
    for step in STEP_ORDER:
        if step not in completed:
            return step

    return Terminal.SUCCESS


def route_next(state: dict) -> str:
    """Graph adapter for ``route``: the branch name as a plain string."""
    return route(state).value
