"""
LLM Factory

Provides unified LLM instantiation for different providers.
Supports: OpenRouter, OpenAI, Anthropic
"""

from typing import Any, Optional, Literal
from dataclasses import dataclass

import structlog

from ..config_loader import get_config, get_provider_settings

logger = structlog.get_logger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass
class LLMConfig:
    """LLM Configuration"""
    provider: Literal["openrouter", "openai", "anthropic"] = "openrouter"
    model: str = "openai/gpt-4o"
    temperature: float = 0.7
    max_tokens: int = 2000
    # User-supplied key; falls back to the environment
    api_key: Optional[str] = None


def llm_config_for(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
) -> LLMConfig:
    """
    Build an LLMConfig from per-request overrides and configured defaults.

    Model precedence: explicit model, DEFAULT_LLM_MODEL, config.yaml.
    """
    settings = get_config().llm
    return LLMConfig(
        provider=provider or settings.provider,
        model=model or get_provider_settings().default_llm_model or settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        api_key=api_key,
    )


def get_llm(config: LLMConfig = None) -> Any:
    """
    Get LLM instance based on configuration.

    Args:
        config: LLM configuration. If None, uses configured defaults.

    Returns:
        LangChain chat model instance
    """
    if config is None:
        config = llm_config_for()

    logger.info(
        "Creating LLM",
        provider=config.provider,
        model=config.model,
        user_key=config.api_key is not None,
    )

    if config.provider == "openrouter":
        return _get_openrouter_llm(config)
    elif config.provider == "openai":
        return _get_openai_llm(config)
    elif config.provider == "anthropic":
        return _get_anthropic_llm(config)
    else:
        raise ValueError(f"Unknown LLM provider: {config.provider}")


def _missing_key(provider: str) -> ValueError:
    return ValueError(
        f"No API key available for provider: {provider}. "
        f"Set {provider.upper()}_API_KEY in the environment or provide a user API key."
    )


def _get_openrouter_llm(config: LLMConfig) -> Any:
    """Get OpenRouter LLM (OpenAI-compatible endpoint)"""
    from langchain_openai import ChatOpenAI

    api_key = config.api_key or get_provider_settings().openrouter_api_key
    if not api_key:
        raise _missing_key("openrouter")

    return ChatOpenAI(
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
    )


def _get_openai_llm(config: LLMConfig) -> Any:
    """Get OpenAI LLM"""
    from langchain_openai import ChatOpenAI

    api_key = config.api_key or get_provider_settings().openai_api_key
    if not api_key:
        raise _missing_key("openai")

    return ChatOpenAI(
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        api_key=api_key,
    )


def _get_anthropic_llm(config: LLMConfig) -> Any:
    """
    Get Anthropic LLM.

    User keys and OpenRouter keys route through OpenRouter; only a bare
    ANTHROPIC_API_KEY talks to Anthropic directly.
    """
    settings = get_provider_settings()
    routed_key = config.api_key or settings.openrouter_api_key
    if routed_key:
        return _get_openrouter_llm(LLMConfig(
            provider="openrouter",
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            api_key=routed_key,
        ))

    if not settings.anthropic_api_key:
        raise _missing_key("anthropic")

    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        api_key=settings.anthropic_api_key,
    )
