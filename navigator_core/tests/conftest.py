"""
Shared fixtures for navigator core tests
"""

import pytest

from ..config_loader import (
    AgentConfig,
    Config,
    ProviderSettings,
    set_config,
    set_provider_settings,
)

PROVIDER_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "DEFAULT_LLM_MODEL",
    "SUPABASE_SERVICE_ROLE_KEY",
)


@pytest.fixture
def config():
    """Install a default config as the global config"""
    cfg = Config(
        agent=AgentConfig(
            name="test_agent",
            type="planner",
            version="1.0.0",
            description="test",
        )
    )
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def provider_settings(monkeypatch):
    """Install provider secrets; pass keyword overrides to the returned setter"""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    def install(**values) -> ProviderSettings:
        settings = ProviderSettings(_env_file=None, **values)
        set_provider_settings(settings)
        return settings

    yield install
    set_provider_settings(None)
