"""
Navigator Core

Shared runtime for Business Navigator agents: the LangGraph workflow base,
configuration, LLM construction, and the task server.

Example:
    from navigator_core import BaseWorkflow, run_agent

    class MyWorkflow(BaseWorkflow):
        def get_state_class(self):
            return MyState

        def build_graph(self, graph):
            ...

        def merge_update(self, state, update):
            return {**state, **update}
"""

from .workflow import BaseWorkflow
from .main import run_agent, AgentRunner, configure_logging
from .config_loader import load_config, get_config, Config

__version__ = "1.0.0"

__all__ = [
    "BaseWorkflow",
    "run_agent",
    "AgentRunner",
    "configure_logging",
    "load_config",
    "get_config",
    "Config",
]
