"""
Shared fixtures for onboarding planner tests
"""

from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage

from navigator_core.config_loader import (
    AgentConfig,
    Config,
    ProviderSettings,
    set_config,
    set_provider_settings,
)

from ..schemas.plan import SessionInputs
from ..schemas.records import TaskTemplate
from ..tools.store import InMemoryPlannerStore, configure_store
from .factories import make_templates

INFERENCE_TARGET = "agents.onboarding_planner.nodes.generate_plan_node.create_inference_client"


@pytest.fixture(autouse=True)
def planner_config():
    """Deterministic config and secrets for every test"""
    config = Config(
        agent=AgentConfig(
            name="onboarding_planner",
            type="planner",
            version="1.0.0",
            description="test",
        )
    )
    set_config(config)
    set_provider_settings(ProviderSettings(_env_file=None, openrouter_api_key="test-key"))
    yield config
    set_provider_settings(None)


@pytest.fixture
def templates() -> list[TaskTemplate]:
    return make_templates()


@pytest.fixture(autouse=True)
def store(templates) -> InMemoryPlannerStore:
    """Fresh in-memory store, installed as the global store"""
    return configure_store(InMemoryPlannerStore(templates=templates))


@pytest.fixture
def answers() -> dict[str, Any]:
    return {
        "businessName": "Acme Bakery",
        "businessCategory": "local",
        "currentStage": "idea",
        "stateCode": "TX",
        "primaryGoals": ["launch", "profit"],
        "timeline": "asap",
        "teamSize": 2,
        "fundingApproach": "personal_savings",
        "previousExperience": "first_time",
        "primaryConcern": "financial",
    }


@pytest.fixture
def session(answers) -> SessionInputs:
    return SessionInputs(
        user_id="user-1",
        onboarding_data=answers,
        onboarding_session_id="session-1",
    )


@pytest.fixture
def mock_inference():
    """
    Patch the inference client used by generate_plan.

    Returns a function that sets the model's reply content (or exception).
    """
    client = MagicMock()
    client.invoke = AsyncMock(return_value=AIMessage(content=""))

    def reply(content: Any = None, error: Optional[Exception] = None) -> MagicMock:
        if error is not None:
            client.invoke.side_effect = error
        else:
            client.invoke.side_effect = None
            client.invoke.return_value = AIMessage(content=content)
        return client

    with patch(INFERENCE_TARGET, return_value=client) as factory:
        reply.factory = factory
        reply.client = client
        yield reply
