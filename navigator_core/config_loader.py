"""
Configuration Loader

Loads agent configuration from YAML file with environment variable substitution.
Provider secrets are read separately from the environment (and .env).
"""

import os
import re
from typing import Any, Literal, Optional
from pathlib import Path

import yaml
import structlog
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration.

    Supports format: ${VAR_NAME:-default_value}
    """
    if isinstance(value, str):
        # Pattern: ${VAR:-default} or ${VAR}
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replace(match):
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.getenv(var_name, default)

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    return value


class AgentConfig(BaseModel):
    """Agent identification configuration"""
    name: str
    type: str
    version: str
    description: str


class ServerConfig(BaseModel):
    """Task server configuration"""
    host: str = "0.0.0.0"
    port: int = 8080
    capabilities: list[str] = Field(default_factory=lambda: ["generate_onboarding_plan"])


class WorkflowConfig(BaseModel):
    """Workflow configuration"""
    timeout_seconds: int = 300
    max_prompt_templates: int = 50


class LLMSettings(BaseModel):
    """LLM configuration"""
    provider: Literal["openrouter", "openai", "anthropic"] = "openrouter"
    model: str = "openai/gpt-4o"
    temperature: float = 0.7
    max_tokens: int = 2000


class StoreConfig(BaseModel):
    """Planner store configuration"""
    backend: Literal["memory", "supabase"] = "memory"
    url: str = "http://localhost:54321"
    timeout_seconds: float = 30.0
    seed_templates_path: Optional[str] = None


class ObservabilityConfig(BaseModel):
    """Observability configuration"""
    log_level: str = "INFO"
    log_format: str = "json"


class Config(BaseModel):
    """Complete agent configuration"""
    agent: AgentConfig
    server: ServerConfig = Field(default_factory=lambda: ServerConfig())
    workflow: WorkflowConfig = Field(default_factory=lambda: WorkflowConfig())
    llm: LLMSettings = Field(default_factory=lambda: LLMSettings())
    store: StoreConfig = Field(default_factory=lambda: StoreConfig())
    observability: ObservabilityConfig = Field(default_factory=lambda: ObservabilityConfig())


class ProviderSettings(BaseSettings):
    """API keys and provider defaults, read from the environment"""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    openrouter_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    default_llm_model: Optional[str] = None
    supabase_service_role_key: Optional[str] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, looks for config.yaml in current dir.

    Returns:
        Parsed Config object
    """
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", "config.yaml")

    path = Path(config_path)
    if not path.exists():
        logger.warning(
            "Config file not found, using defaults",
            path=str(path),
        )
        return Config(
            agent=AgentConfig(
                name="onboarding_planner",
                type="planner",
                version="1.0.0",
                description="Default onboarding planner configuration",
            )
        )

    logger.info("Loading configuration", path=str(path))

    with open(path, "r") as f:
        raw_config = yaml.safe_load(f)

    # Substitute environment variables
    config_data = _substitute_env_vars(raw_config)

    # Parse into Config model
    config = Config(**config_data)

    logger.info(
        "Configuration loaded",
        agent_name=config.agent.name,
        agent_version=config.agent.version,
        store_backend=config.store.backend,
    )

    return config


# Global config instances
_config: Optional[Config] = None
_provider_settings: Optional[ProviderSettings] = None


def get_config() -> Config:
    """Get global configuration (loads on first call)"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[Config]) -> None:
    """Set global configuration (for testing); None forces a reload"""
    global _config
    _config = config


def get_provider_settings() -> ProviderSettings:
    """Get provider secrets (read from the environment on first call)"""
    global _provider_settings
    if _provider_settings is None:
        _provider_settings = ProviderSettings()
    return _provider_settings


def set_provider_settings(settings: Optional[ProviderSettings]) -> None:
    """Set provider secrets (for testing); None forces a re-read"""
    global _provider_settings
    _provider_settings = settings
