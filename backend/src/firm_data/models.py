"""Firm entities: clients, cases, tasks and team members."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityKind(str, Enum):
    CLIENT = "client"
    CASE = "case"
    TASK = "task"
    TEAM_MEMBER = "team_member"


ClientStatus = Literal["active", "inactive", "prospect"]
CaseStatus = Literal["intake", "discovery", "trial", "closed"]
TaskStatus = Literal["pending", "in-progress", "completed"]
Priority = Literal["high", "medium", "low"]
Role = Literal["partner", "associate", "paralegal", "staff"]


class Note(BaseModel):
    content: str
    author: str
    created_at: datetime = Field(default_factory=_utc_now)


class Client(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    email: str
    phone: str = ""
    company_name: str = ""
    status: ClientStatus = "prospect"
    notes: list[Note] = Field(default_factory=list)
    total_matters: int = 0


class Case(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str
    case_number: str
    client: str  # client id
    assigned_team: list[str] = Field(default_factory=list)  # team member ids
    status: CaseStatus = "intake"
    priority: Priority = "medium"
    deadline: datetime | None = None
    description: str = ""


class Task(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str
    description: str = ""
    status: TaskStatus = "pending"
    priority: Priority = "medium"
    assigned_to: str  # team member id
    related_case: str | None = None  # case id
    due_date: datetime | None = None


class TeamMember(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    email: str
    role: Role = "associate"
    specialties: list[str] = Field(default_factory=list)


Entity = Union[Client, Case, Task, TeamMember]

MODEL_BY_KIND: dict[EntityKind, type[BaseModel]] = {
    EntityKind.CLIENT: Client,
    EntityKind.CASE: Case,
    EntityKind.TASK: Task,
    EntityKind.TEAM_MEMBER: TeamMember,
}

# Fields searched by fuzzy lookups; the first entity matching any of them wins.
FUZZY_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.CLIENT: ("name",),
    EntityKind.CASE: ("title", "case_number"),
    EntityKind.TASK: ("title",),
    EntityKind.TEAM_MEMBER: ("name",),
}


def kind_of(entity: BaseModel) -> EntityKind:
    for kind, model in MODEL_BY_KIND.items():
        if isinstance(entity, model):
            return kind
    raise TypeError(f"Not a firm entity: {type(entity).__name__}")


def to_document(entity: BaseModel) -> dict[str, Any]:
    return entity.model_dump(mode="json")


def from_document(kind: EntityKind, doc: dict[str, Any]) -> Entity:
    return MODEL_BY_KIND[kind].model_validate(doc)  # type: ignore[return-value]
