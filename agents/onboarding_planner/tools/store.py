"""
Planner Store

Persistence behind the planner's tool contracts. The engine never talks to
the store directly; tools do. Upsert-by-owner uniqueness is the store's
responsibility.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog
import yaml

from ..errors import StoreError
from ..schemas.records import Business, BusinessPlan, TaskTemplate, UserTask

logger = structlog.get_logger(__name__)

# Singleton instance
_store: Optional["PlannerStore"] = None


class PlannerStore(ABC):
    """Datastore operations used by the planner tools"""

    @abstractmethod
    async def list_task_templates(self, category: Optional[str] = None) -> list[TaskTemplate]:
        """Templates ordered by week number, optionally filtered by category"""

    @abstractmethod
    async def upsert_business(
        self,
        owner_id: str,
        name: str,
        category: str,
        state_code: str,
        stage: str,
    ) -> Business:
        """Update the owner's business if one exists, else insert it"""

    @abstractmethod
    async def create_tasks_from_templates(
        self,
        user_id: str,
        business_id: str,
        template_ids: list[str],
    ) -> list[UserTask]:
        """Instantiate one task per template, in the given order"""

    @abstractmethod
    async def upsert_business_plan(self, plan: BusinessPlan) -> BusinessPlan:
        """Update the user's plan if one exists, else insert it"""

    @abstractmethod
    async def get_business_plan(self, user_id: str) -> Optional[BusinessPlan]:
        """Fetch the user's stored plan"""

    async def close(self) -> None:
        """Release any held resources"""


def load_seed_templates(path: str) -> list[TaskTemplate]:
    """Load task templates from a YAML file (a list of template mappings)."""
    seed_path = Path(path)
    if not seed_path.exists():
        logger.warning("Seed templates file not found", path=str(seed_path))
        return []

    with open(seed_path, "r") as f:
        raw = yaml.safe_load(f) or []

    templates = [TaskTemplate(**item) for item in raw]
    logger.info("Loaded seed templates", path=str(seed_path), count=len(templates))
    return templates


class InMemoryPlannerStore(PlannerStore):
    """
    Dict-backed store for local development and tests.

    Tables are keyed the same way the database enforces uniqueness:
    businesses by owner, plans by user.
    """

    def __init__(self, templates: Optional[list[TaskTemplate]] = None):
        self.templates: dict[str, TaskTemplate] = {t.id: t for t in templates or []}
        self.businesses: dict[str, Business] = {}       # owner_id -> business
        self.tasks: dict[str, UserTask] = {}            # task_id -> task
        self.plans: dict[str, BusinessPlan] = {}        # user_id -> plan

    async def list_task_templates(self, category: Optional[str] = None) -> list[TaskTemplate]:
        templates = [
            t for t in self.templates.values()
            if category is None or t.category == category
        ]
        return sorted(templates, key=lambda t: (t.week_number is None, t.week_number or 0))

    async def upsert_business(
        self,
        owner_id: str,
        name: str,
        category: str,
        state_code: str,
        stage: str,
    ) -> Business:
        existing = self.businesses.get(owner_id)
        if existing:
            business = existing.model_copy(update={
                "name": name,
                "category": category,
                "state": state_code,
                "stage": stage,
                "updated_at": datetime.utcnow(),
            })
            logger.debug("Updated business", business_id=business.id, owner_id=owner_id)
        else:
            business = Business(
                owner_id=owner_id,
                name=name,
                category=category,
                state=state_code,
                stage=stage,
            )
            logger.debug("Inserted business", business_id=business.id, owner_id=owner_id)

        self.businesses[owner_id] = business
        return business

    async def create_tasks_from_templates(
        self,
        user_id: str,
        business_id: str,
        template_ids: list[str],
    ) -> list[UserTask]:
        if not any(b.id == business_id for b in self.businesses.values()):
            raise StoreError(f"Business not found: {business_id}")

        created = []
        for template_id in template_ids:
            template = self.templates.get(template_id)
            if template is None:
                logger.warning("Skipping unknown template", template_id=template_id)
                continue

            task = UserTask(
                user_id=user_id,
                business_id=business_id,
                template_id=template.id,
                title=template.title,
                description=template.description,
                category=template.category,
                priority=template.priority,
                priority_order=template.week_number,
            )
            self.tasks[task.id] = task
            created.append(task)

        return created

    async def upsert_business_plan(self, plan: BusinessPlan) -> BusinessPlan:
        existing = self.plans.get(plan.user_id)
        if existing:
            plan = plan.model_copy(update={
                "id": existing.id,
                "created_at": existing.created_at,
                "updated_at": datetime.utcnow(),
            })
        self.plans[plan.user_id] = plan
        return plan

    async def get_business_plan(self, user_id: str) -> Optional[BusinessPlan]:
        return self.plans.get(user_id)


def get_store() -> PlannerStore:
    """Get global store instance (in-memory until configured)"""
    global _store
    if _store is None:
        _store = InMemoryPlannerStore()
    return _store


def configure_store(store: PlannerStore) -> PlannerStore:
    """Set global store instance"""
    global _store
    _store = store
    logger.info("Configured planner store", store=type(store).__name__)
    return store
