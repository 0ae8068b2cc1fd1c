"""
Inference Client

Thin wrapper that invokes a chat model with a system prompt, tool
descriptions and conversation messages.
"""

from typing import Any, Optional, Sequence

import structlog
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_core.tools import BaseTool

from .llm_factory import get_llm, llm_config_for

logger = structlog.get_logger(__name__)


class InferenceClient:
    """
    Invokes a LangChain chat model.

    Tools are offered to the model but never required; callers consume
    the text content of the returned message.
    """

    def __init__(self, llm: Any):
        self.llm = llm

    def _with_tools(self, tools: Sequence[BaseTool]) -> Any:
        if not tools:
            return self.llm
        try:
            return self.llm.bind_tools(list(tools))
        except NotImplementedError:
            logger.warning(
                "Model does not support tool binding, invoking without tools",
                model=type(self.llm).__name__,
            )
            return self.llm

    async def invoke(
        self,
        system_prompt: str,
        tools: Sequence[BaseTool],
        messages: Sequence[BaseMessage],
    ) -> AIMessage:
        """
        Invoke the model.

        Args:
            system_prompt: Fixed instruction prepended as a system message
            tools: Tools the model may call
            messages: Conversation messages

        Returns:
            The model's response message
        """
        model = self._with_tools(tools)
        response = await model.ainvoke([SystemMessage(content=system_prompt), *messages])

        tool_calls = getattr(response, "tool_calls", None) or []
        logger.info(
            "Inference complete",
            tool_calls=[tc["name"] for tc in tool_calls],
        )
        return response


def create_inference_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
) -> InferenceClient:
    """Create an InferenceClient for the given provider/model selection."""
    return InferenceClient(get_llm(llm_config_for(provider, model, api_key)))
