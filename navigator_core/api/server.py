"""
Task Server Implementation

Provides the HTTP surface for submitting planner tasks.
"""

import asyncio
from typing import Any, Awaitable, Callable
from datetime import datetime
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..schemas.tasks import TaskInput, TaskOutput, TaskStatus

logger = structlog.get_logger(__name__)

TaskExecutor = Callable[..., Awaitable[dict[str, Any]]]


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    agent_name: str
    version: str
    timestamp: str


class PlannerTaskServer:
    """
    Task Server for receiving and processing tasks.

    Features:
    - Synchronous task execution (POST /tasks)
    - Task result lookup (GET /tasks/{task_id})
    - Health checks (GET /health, GET /ready)
    """

    def __init__(
        self,
        agent_name: str,
        agent_version: str,
        agent_description: str,
        task_executor: TaskExecutor,
        supported_task_types: list[str],
    ):
        """
        Initialize Task Server.

        Args:
            agent_name: Name of this agent
            agent_version: Version string
            agent_description: Human-readable description
            task_executor: Async function ``(task_id, task_type, payload) -> dict``
            supported_task_types: List of task types this agent handles
        """
        self.agent_name = agent_name
        self.agent_version = agent_version
        self.agent_description = agent_description
        self.task_executor = task_executor
        self.supported_task_types = supported_task_types

        # Task tracking
        self._tasks: dict[str, TaskOutput] = {}

        # Health state
        self._ready = False

        # Create FastAPI app
        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application with routes"""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            """Lifecycle management"""
            logger.info(
                "Task Server starting",
                agent=self.agent_name,
                version=self.agent_version,
            )
            self._ready = True
            yield
            logger.info("Task Server shutting down")
            self._ready = False

        app = FastAPI(
            title=f"{self.agent_name} Task Server",
            version=self.agent_version,
            description=self.agent_description,
            lifespan=lifespan,
        )

        # Register routes
        self._register_routes(app)
        return app

    def _failed_output(self, task: TaskInput, started_at: datetime, error: str) -> TaskOutput:
        return TaskOutput(
            task_id=task.task_id,
            task_type=task.task_type,
            status=TaskStatus(state="failed", message=error),
            error=error,
            agent_name=self.agent_name,
            agent_version=self.agent_version,
            started_at=started_at,
            completed_at=datetime.utcnow(),
        )

    def _register_routes(self, app: FastAPI) -> None:
        """Register all API routes"""

        # ============== Health Endpoints ==============

        @app.get("/health", response_model=HealthResponse)
        async def health_check():
            """Basic health check"""
            return HealthResponse(
                status="healthy",
                agent_name=self.agent_name,
                version=self.agent_version,
                timestamp=datetime.utcnow().isoformat(),
            )

        @app.get("/ready")
        async def readiness_check():
            """Readiness check for orchestration"""
            if not self._ready:
                raise HTTPException(status_code=503, detail="Not ready")
            return {"status": "ready"}

        # ============== Task Endpoints ==============

        @app.post("/tasks", response_model=TaskOutput)
        async def execute_task(task: TaskInput):
            """
            Execute a task synchronously.

            Blocks until the task completes and returns the result.
            """
            logger.info(
                "Received task",
                task_id=task.task_id,
                task_type=task.task_type,
                correlation_id=task.correlation_id,
            )

            # Validate task type
            if task.task_type not in self.supported_task_types:
                raise HTTPException(
                    status_code=400,
                    detail=f"Unsupported task type: {task.task_type}. "
                    f"Supported: {self.supported_task_types}",
                )

            started_at = datetime.utcnow()
            try:
                result = await asyncio.wait_for(
                    self.task_executor(
                        task_id=task.task_id,
                        task_type=task.task_type,
                        payload=task.payload,
                    ),
                    timeout=task.timeout_seconds,
                )

            except asyncio.TimeoutError:
                logger.error("Task timed out", task_id=task.task_id)
                self._tasks[task.task_id] = self._failed_output(
                    task, started_at, f"Timeout after {task.timeout_seconds} seconds"
                )
                raise HTTPException(status_code=504, detail="Task timed out")

            except ValueError as e:
                logger.warning("Rejected task payload", task_id=task.task_id, error=str(e))
                self._tasks[task.task_id] = self._failed_output(task, started_at, str(e))
                raise HTTPException(status_code=422, detail=str(e))

            except Exception as e:
                logger.exception("Task failed", task_id=task.task_id, error=str(e))
                self._tasks[task.task_id] = self._failed_output(task, started_at, str(e))
                raise HTTPException(status_code=500, detail=str(e))

            completed_at = datetime.utcnow()
            duration_ms = int((completed_at - started_at).total_seconds() * 1000)

            output = TaskOutput(
                task_id=task.task_id,
                task_type=task.task_type,
                status=TaskStatus(
                    state="completed",
                    progress=100,
                    message="Task completed successfully",
                ),
                result=result,
                agent_name=self.agent_name,
                agent_version=self.agent_version,
                started_at=started_at,
                completed_at=completed_at,
                duration_ms=duration_ms,
            )

            # Store for result queries
            self._tasks[task.task_id] = output
            logger.info(
                "Task completed",
                task_id=task.task_id,
                duration_ms=duration_ms,
            )
            return output

        @app.get("/tasks/{task_id}", response_model=TaskOutput)
        async def get_task_result(task_id: str):
            """Get full task result"""
            if task_id not in self._tasks:
                raise HTTPException(status_code=404, detail="Task not found")
            return self._tasks[task_id]
