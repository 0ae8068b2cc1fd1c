"""
Tests for Workflow Base Class
"""

import operator
from typing import Annotated, TypedDict

import pytest
from langgraph.graph import StateGraph, START, END

from ..workflow import BaseWorkflow, add_router_edges, make_path_map


class CounterState(TypedDict, total=False):
    count: int
    visited: Annotated[list[str], operator.add]


class CounterWorkflow(BaseWorkflow):
    """Counts to three through a single router-driven node"""

    def get_state_class(self):
        return CounterState

    def build_graph(self, graph: StateGraph):
        async def bump(state: dict) -> dict:
            return {"count": state["count"] + 1, "visited": ["bump"]}

        def router(state: dict) -> str:
            return "done" if state["count"] >= 3 else "bump"

        graph.add_node("bump", bump)
        add_router_edges(graph, [START, "bump"], router, make_path_map(["bump"], ["done"]))

    def merge_update(self, state, update):
        merged = dict(state)
        merged["count"] = update["count"]
        merged["visited"] = state.get("visited", []) + update["visited"]
        return merged


@pytest.fixture
def workflow():
    """Create test workflow"""
    return CounterWorkflow(
        agent_name="test_agent",
        agent_version="1.0.0",
    )


class TestBaseWorkflow:
    """Tests for BaseWorkflow"""

    def test_init(self, workflow):
        """Test workflow initialization"""
        assert workflow.agent_name == "test_agent"
        assert workflow.agent_version == "1.0.0"
        assert workflow.recursion_limit == 25

    def test_compile_is_cached(self, workflow):
        """Test workflow compilation"""
        app = workflow.compile()
        assert app is not None
        assert workflow.compile() is app

    @pytest.mark.asyncio
    async def test_run_state_folds_every_update(self, workflow):
        """Streamed node updates are merged in order"""
        final = await workflow.run_state({"count": 0, "visited": []})

        assert final["count"] == 3
        assert final["visited"] == ["bump", "bump", "bump"]

    @pytest.mark.asyncio
    async def test_run_state_router_can_end_immediately(self, workflow):
        final = await workflow.run_state({"count": 5, "visited": []})

        assert final == {"count": 5, "visited": []}

    @pytest.mark.asyncio
    async def test_run_state_propagates_node_exceptions(self):
        class BrokenWorkflow(CounterWorkflow):
            def build_graph(self, graph: StateGraph):
                async def explode(state: dict) -> dict:
                    raise RuntimeError("boom")

                graph.add_node("explode", explode)
                graph.add_edge(START, "explode")
                graph.add_edge("explode", END)

        with pytest.raises(RuntimeError, match="boom"):
            await BrokenWorkflow("broken", "1.0.0").run_state({"count": 0})


class TestPathMap:
    """Tests for conditional-edge helpers"""

    def test_make_path_map(self):
        path_map = make_path_map(["a", "b"], ["success", "error"])

        assert path_map == {"a": "a", "b": "b", "success": END, "error": END}
