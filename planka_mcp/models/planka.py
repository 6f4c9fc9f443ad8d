"""Pydantic models for Planka resources.

Planka documents use camelCase keys; models accept and emit them through an
alias generator. Unknown keys are dropped. Every attribute besides ``id`` is
optional because Planka omits or nulls fields freely across versions.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PlankaModel(BaseModel):
    """Base for all Planka resource models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_json(self) -> dict:
        """Serialize with Planka's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class User(PlankaModel):
    id: str
    email: str | None = None
    name: str | None = None
    username: str | None = None


class Project(PlankaModel):
    id: str
    name: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Board(PlankaModel):
    id: str
    name: str | None = None
    description: str | None = None
    project_id: str | None = None
    position: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BoardList(PlankaModel):
    """A Planka list (column) on a board."""

    id: str
    name: str | None = None
    board_id: str | None = None
    position: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Card(PlankaModel):
    id: str
    name: str | None = None
    description: str | None = None
    list_id: str | None = None
    board_id: str | None = None
    position: float | None = None
    due_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Task(PlankaModel):
    id: str
    name: str | None = None
    card_id: str | None = None
    position: float | None = None
    is_completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Comment(PlankaModel):
    id: str
    text: str | None = None
    card_id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Stopwatch(PlankaModel):
    """Time tracking state of a card."""

    id: str | None = None
    card_id: str | None = None
    started_at: datetime | None = None
    duration: int = Field(default=0, description="Accumulated seconds")
