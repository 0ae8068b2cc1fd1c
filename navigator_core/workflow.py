"""
Base LangGraph Workflow

This module provides the base workflow structure that agents extend.
Customize by:
1. Returning the agent's TypedDict state class
2. Adding agent nodes and edges in build_graph
3. Supplying the merge function that folds node updates into state
"""

from typing import Any, Callable, Iterable, Optional
from abc import ABC, abstractmethod

import structlog
from langgraph.graph import StateGraph, END

logger = structlog.get_logger(__name__)


class BaseWorkflow(ABC):
    """
    Abstract base class for LangGraph workflows.

    Subclass this to create agent-specific workflows.
    Override the abstract methods to customize behavior.
    """

    def __init__(
        self,
        agent_name: str,
        agent_version: str,
        recursion_limit: int = 25,
    ):
        """
        Initialize workflow.

        Args:
            agent_name: Name of this agent
            agent_version: Version string
            recursion_limit: Maximum graph super-steps per run
        """
        self.agent_name = agent_name
        self.agent_version = agent_version
        self.recursion_limit = recursion_limit

        self._graph: Optional[StateGraph] = None
        self._compiled = None

    @abstractmethod
    def get_state_class(self) -> type:
        """Return the TypedDict class for this workflow's state"""
        pass

    @abstractmethod
    def build_graph(self, graph: StateGraph) -> None:
        """
        Build the workflow graph.

        Add nodes and edges to the graph.
        Called by compile() before compilation.
        """
        pass

    @abstractmethod
    def merge_update(self, state: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        """Fold one node's partial update into the accumulated state."""
        pass

    def compile(self) -> Any:
        """
        Compile the workflow graph.

        Returns the compiled LangGraph application.
        """
        if self._compiled:
            return self._compiled

        state_class = self.get_state_class()
        self._graph = StateGraph(state_class)

        # Let subclass build the graph
        self.build_graph(self._graph)

        # Compile
        self._compiled = self._graph.compile()
        logger.info("Compiled workflow", agent=self.agent_name)
        return self._compiled

    async def run_state(self, initial_state: dict[str, Any]) -> dict[str, Any]:
        """
        Drive the graph to termination.

        Node updates are streamed as they complete and folded into the
        returned state with ``merge_update``; no step is retried.

        Args:
            initial_state: Fully initialized workflow state

        Returns:
            Final accumulated state
        """
        app = self.compile()
        state = dict(initial_state)

        logger.info("Executing workflow", agent=self.agent_name)

        try:
            async for chunk in app.astream(
                initial_state,
                stream_mode="updates",
                config={"recursion_limit": self.recursion_limit},
            ):
                for node_name, update in chunk.items():
                    if not update:
                        continue
                    state = self.merge_update(state, update)
                    logger.info(
                        "Node finished",
                        agent=self.agent_name,
                        node=node_name,
                        failed=bool(update.get("failure")),
                    )
        except Exception:
            logger.exception("Workflow exception", agent=self.agent_name)
            raise

        return state


# ============== Common Graph Helpers ==============


def make_path_map(
    node_names: Iterable[str],
    terminal_names: Iterable[str],
) -> dict[str, str]:
    """
    Build a conditional-edge path map.

    Each node name routes to itself; each terminal name routes to END.
    """
    path_map = {name: name for name in node_names}
    path_map.update({name: END for name in terminal_names})
    return path_map


def add_router_edges(
    graph: StateGraph,
    sources: Iterable[str],
    router: Callable[[dict], str],
    path_map: dict[str, str],
) -> None:
    """Attach the same router as the conditional edge out of every source."""
    for source in sources:
        graph.add_conditional_edges(source, router, path_map)
