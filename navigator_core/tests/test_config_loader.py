"""
Tests for configuration loading
"""

import pytest

from ..config_loader import _substitute_env_vars, get_config, load_config, set_config


class TestSubstituteEnvVars:
    """Tests for ${VAR:-default} substitution"""

    def test_uses_environment_value(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "supabase")
        assert _substitute_env_vars("${STORE_BACKEND:-memory}") == "supabase"

    def test_falls_back_to_default(self, monkeypatch):
        monkeypatch.delenv("STORE_BACKEND", raising=False)
        assert _substitute_env_vars("${STORE_BACKEND:-memory}") == "memory"

    def test_missing_without_default_is_empty(self, monkeypatch):
        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
        assert _substitute_env_vars("x${NOT_SET_ANYWHERE}y") == "xy"

    def test_recurses_into_collections(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        value = {"server": {"port": "${PORT:-8080}", "tags": ["${PORT}"]}, "n": 3}

        assert _substitute_env_vars(value) == {"server": {"port": "9000", "tags": ["9000"]}, "n": 3}


class TestLoadConfig:
    """Tests for load_config"""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.yaml"))

        assert config.agent.name == "onboarding_planner"
        assert config.store.backend == "memory"
        assert config.workflow.max_prompt_templates == 50
        assert config.llm.model == "openai/gpt-4o"
        assert config.server.capabilities == ["generate_onboarding_plan"]

    def test_parses_yaml_with_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "anthropic/claude-3.5-sonnet")
        path = tmp_path / "config.yaml"
        path.write_text(
            "agent:\n"
            "  name: onboarding_planner\n"
            "  type: planner\n"
            "  version: '2.0.0'\n"
            "  description: test\n"
            "llm:\n"
            "  model: ${LLM_MODEL:-openai/gpt-4o}\n"
            "  temperature: 0.2\n"
            "store:\n"
            "  backend: supabase\n"
            "  timeout_seconds: 5\n"
            "server:\n"
            "  port: ${SERVER_PORT:-9090}\n"
        )

        config = load_config(str(path))

        assert config.agent.version == "2.0.0"
        assert config.llm.model == "anthropic/claude-3.5-sonnet"
        assert config.llm.temperature == 0.2
        assert config.store.backend == "supabase"
        assert config.server.port == 9090

    def test_bundled_agent_config_loads(self, monkeypatch):
        from pathlib import Path

        for name in ("STORE_BACKEND", "LLM_PROVIDER", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        path = Path(__file__).resolve().parents[2] / "agents" / "onboarding_planner" / "config.yaml"

        config = load_config(str(path))

        assert config.agent.name == "onboarding_planner"
        assert config.llm.provider == "openrouter"
        assert config.store.seed_templates_path.endswith("task_templates.yaml")

    def test_rejects_unknown_store_backend(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "agent: {name: a, type: b, version: '1', description: c}\n"
            "store: {backend: mongo}\n"
        )

        with pytest.raises(ValueError):
            load_config(str(path))


class TestGlobalConfig:
    """Tests for get_config / set_config"""

    def test_set_then_get(self, config):
        assert get_config() is config

    def test_get_loads_from_config_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.yaml"))
        set_config(None)

        try:
            assert get_config().agent.name == "onboarding_planner"
        finally:
            set_config(None)
