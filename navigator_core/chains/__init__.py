"""
LangChain Chains for Navigator Agents

Provides model construction and invocation shared by agents.
"""

from .llm_factory import get_llm, llm_config_for, LLMConfig
from .inference import InferenceClient, create_inference_client

__all__ = [
    "get_llm",
    "llm_config_for",
    "LLMConfig",
    "InferenceClient",
    "create_inference_client",
]
