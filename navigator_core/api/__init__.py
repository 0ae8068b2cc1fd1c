"""
API module for navigator core.

Provides:
- PlannerTaskServer for receiving tasks
- Health check endpoints
"""

from .server import PlannerTaskServer

__all__ = ["PlannerTaskServer"]
