"""Planka API access: the authenticated HTTP client and the resource resolver."""

from .planka_client import PlankaClient
from .resolver import DEFAULT_POSITION, PlankaResolver

__all__ = ["DEFAULT_POSITION", "PlankaClient", "PlankaResolver"]
