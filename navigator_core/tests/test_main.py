"""
Tests for the agent runner
"""

import pytest

from ..config_loader import get_config, set_config
from ..main import AgentRunner


async def handler_factory(config):
    async def greet(payload):
        return {"hello": payload.get("name", config.agent.name)}

    return {"generate_onboarding_plan": greet}


@pytest.fixture
def runner(tmp_path):
    runner = AgentRunner(handler_factory, str(tmp_path / "absent.yaml"))
    yield runner
    set_config(None)


class TestAgentRunner:
    """Tests for AgentRunner"""

    def test_installs_global_config(self, runner):
        assert get_config() is runner.config

    @pytest.mark.asyncio
    async def test_executes_registered_handler(self, runner):
        await runner.initialize()

        result = await runner.execute_task("t-1", "generate_onboarding_plan", {"name": "Acme"})

        assert result == {"hello": "Acme"}

    @pytest.mark.asyncio
    async def test_unknown_task_type(self, runner):
        await runner.initialize()

        with pytest.raises(ValueError, match="No handler for task type"):
            await runner.execute_task("t-1", "audit", {})

    @pytest.mark.asyncio
    async def test_requires_initialize(self, runner):
        with pytest.raises(RuntimeError, match="not initialized"):
            await runner.execute_task("t-1", "generate_onboarding_plan", {})

    def test_create_server_uses_capabilities(self, runner):
        server = runner.create_server()

        assert server.supported_task_types == ["generate_onboarding_plan"]
        assert server.agent_name == "onboarding_planner"
