"""
Agent Main Entry Point

Wires configuration, logging and the task server together. Agents supply
a handler factory mapping task types to async handlers.
"""

import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, Optional

import structlog
import uvicorn
from dotenv import load_dotenv

from .config_loader import Config, load_config, set_config
from .api.server import PlannerTaskServer

TaskHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]
HandlerFactory = Callable[[Config], Awaitable[dict[str, TaskHandler]]]

logger = structlog.get_logger(__name__)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging for the process."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AgentRunner:
    """
    Agent Runner

    Initializes and runs an agent behind the task server.
    """

    def __init__(
        self,
        handler_factory: HandlerFactory,
        config_path: Optional[str] = None,
    ):
        """
        Initialize agent runner.

        Args:
            handler_factory: Async factory returning {task_type: handler}
            config_path: Path to config.yaml
        """
        # Load environment variables
        load_dotenv()

        self.config = load_config(config_path)
        set_config(self.config)
        configure_logging(
            self.config.observability.log_level,
            self.config.observability.log_format,
        )

        self.handler_factory = handler_factory
        self._handlers: Optional[dict[str, TaskHandler]] = None
        self._server: Optional[PlannerTaskServer] = None

    async def initialize(self) -> None:
        """Initialize all components"""
        logger.info(
            "Initializing agent",
            name=self.config.agent.name,
            version=self.config.agent.version,
        )

        self._handlers = await self.handler_factory(self.config)

        logger.info("Agent initialized successfully", task_types=sorted(self._handlers))

    async def execute_task(
        self,
        task_id: str,
        task_type: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Execute a task (called by the task server).

        Args:
            task_id: Task identifier
            task_type: Type of task
            payload: Task payload

        Returns:
            Task result
        """
        if self._handlers is None:
            raise RuntimeError("Agent not initialized")

        handler = self._handlers.get(task_type)
        if handler is None:
            raise ValueError(f"No handler for task type: {task_type}")

        logger.info("Executing task", task_id=task_id, task_type=task_type)
        return await handler(payload)

    def create_server(self) -> PlannerTaskServer:
        """Create task server"""
        self._server = PlannerTaskServer(
            agent_name=self.config.agent.name,
            agent_version=self.config.agent.version,
            agent_description=self.config.agent.description,
            task_executor=self.execute_task,
            supported_task_types=self.config.server.capabilities,
        )
        return self._server

    def run(self) -> None:
        """Run the agent server"""
        # Initialize asynchronously
        asyncio.run(self.initialize())

        # Create server
        server = self.create_server()

        # Run with uvicorn
        logger.info(
            "Starting task server",
            host=self.config.server.host,
            port=self.config.server.port,
        )

        uvicorn.run(
            server.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level=self.config.observability.log_level.lower(),
        )


def run_agent(handler_factory: HandlerFactory, config_path: Optional[str] = None) -> None:
    """
    Convenience function to run an agent.

    Args:
        handler_factory: Async factory returning {task_type: handler}
        config_path: Path to configuration file
    """
    runner = AgentRunner(handler_factory, config_path)
    runner.run()
