"""
Supabase Planner Store

PlannerStore backed by Supabase's PostgREST API.

Tables:
- task_templates  GET ?order=week_number.asc[&category=eq.{category}]
- businesses      find by owner_id, PATCH by id, else POST
- user_tasks      POST one row per template
- business_plans  find by user_id, PATCH by id, else POST
"""

import os
from typing import Any, Optional

import httpx
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import StoreError
from ..schemas.records import Business, BusinessPlan, TaskTemplate, UserTask
from .store import PlannerStore

logger = structlog.get_logger(__name__)

_SERVER_MANAGED = {"id", "created_at", "updated_at"}


class SupabasePlannerStore(PlannerStore):
    """
    PostgREST client for planner persistence.

    Reads retry on transport errors; writes are sent once, since a retried
    insert after an ambiguous failure could duplicate rows.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Supabase store.

        Args:
            base_url: Supabase project URL (defaults to SUPABASE_URL env var)
            service_key: Service role key (defaults to SUPABASE_SERVICE_ROLE_KEY env var)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or os.getenv("SUPABASE_URL", "http://localhost:54321")).rstrip("/")
        self.service_key = service_key or os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/rest/v1",
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "apikey": self.service_key,
                    "Authorization": f"Bearer {self.service_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ============== HTTP Helpers ==============

    @staticmethod
    def _raise_for_status(response: httpx.Response, table: str) -> None:
        if response.is_success:
            return
        try:
            message = response.json().get("message", response.text)
        except ValueError:
            message = response.text
        logger.error(
            "Supabase request failed",
            table=table,
            status_code=response.status_code,
            error=message,
        )
        raise StoreError(f"{table}: {message}")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        reraise=True,
    )
    async def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        response = await self._get_client().get(f"/{table}", params={"select": "*", **params})
        self._raise_for_status(response, table)
        return response.json()

    async def _insert(self, table: str, rows: Any) -> list[dict[str, Any]]:
        response = await self._get_client().post(
            f"/{table}",
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        self._raise_for_status(response, table)
        return response.json()

    async def _update(self, table: str, row_id: str, values: dict[str, Any]) -> list[dict[str, Any]]:
        response = await self._get_client().patch(
            f"/{table}",
            params={"id": f"eq.{row_id}"},
            json=values,
            headers={"Prefer": "return=representation"},
        )
        self._raise_for_status(response, table)
        return response.json()

    @staticmethod
    def _first(rows: list[dict[str, Any]], table: str) -> dict[str, Any]:
        if not rows:
            raise StoreError(f"{table}: no row returned")
        return rows[0]

    # ============== PlannerStore ==============

    async def list_task_templates(self, category: Optional[str] = None) -> list[TaskTemplate]:
        params = {"order": "week_number.asc"}
        if category:
            params["category"] = f"eq.{category}"

        rows = await self._select("task_templates", params)
        logger.info("Fetched task templates", count=len(rows), category=category)
        return [TaskTemplate(**row) for row in rows]

    async def upsert_business(
        self,
        owner_id: str,
        name: str,
        category: str,
        state_code: str,
        stage: str,
    ) -> Business:
        values = {
            "owner_id": owner_id,
            "name": name,
            "category": category,
            "state": state_code,
            "stage": stage,
        }

        existing = await self._select(
            "businesses",
            {"owner_id": f"eq.{owner_id}", "order": "created_at.desc", "limit": "1"},
        )
        if existing:
            rows = await self._update("businesses", existing[0]["id"], values)
        else:
            rows = await self._insert("businesses", values)

        return Business(**self._first(rows, "businesses"))

    async def create_tasks_from_templates(
        self,
        user_id: str,
        business_id: str,
        template_ids: list[str],
    ) -> list[UserTask]:
        if not template_ids:
            return []

        templates = await self._select(
            "task_templates",
            {"id": f"in.({','.join(template_ids)})"},
        )
        by_id = {str(t["id"]): TaskTemplate(**t) for t in templates}

        rows = []
        for template_id in template_ids:
            template = by_id.get(template_id)
            if template is None:
                logger.warning("Skipping unknown template", template_id=template_id)
                continue
            rows.append({
                "user_id": user_id,
                "business_id": business_id,
                "template_id": template.id,
                "title": template.title,
                "description": template.description,
                "category": template.category,
                "priority": template.priority,
                "priority_order": template.week_number,
                "status": "pending",
            })

        if not rows:
            return []

        created = await self._insert("user_tasks", rows)
        return [UserTask(**row) for row in created]

    async def upsert_business_plan(self, plan: BusinessPlan) -> BusinessPlan:
        values = plan.model_dump(mode="json", exclude=_SERVER_MANAGED)

        existing = await self._select("business_plans", {"user_id": f"eq.{plan.user_id}", "limit": "1"})
        if existing:
            rows = await self._update("business_plans", existing[0]["id"], values)
        else:
            rows = await self._insert("business_plans", values)

        return BusinessPlan(**self._first(rows, "business_plans"))

    async def get_business_plan(self, user_id: str) -> Optional[BusinessPlan]:
        rows = await self._select("business_plans", {"user_id": f"eq.{user_id}", "limit": "1"})
        return BusinessPlan(**rows[0]) if rows else None
