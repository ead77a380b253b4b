"""Tool protocol and argument models shared by the firm tools."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from src.firm_data import FirmGateway
from src.firm_data.models import CaseStatus, ClientStatus, Priority, Role, TaskStatus

from ..models import ToolResult


def _lower_or_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip().lower()
        return value or None
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


# Enum-valued fields accept any case; a blank optional value means absent.
ClientStatusArg = Annotated[Optional[ClientStatus], BeforeValidator(_lower_or_none)]
CaseStatusArg = Annotated[Optional[CaseStatus], BeforeValidator(_lower_or_none)]
TaskStatusArg = Annotated[Optional[TaskStatus], BeforeValidator(_lower_or_none)]
PriorityArg = Annotated[Optional[Priority], BeforeValidator(_lower_or_none)]
RoleArg = Annotated[Optional[Role], BeforeValidator(_lower_or_none)]
RequiredCaseStatus = Annotated[CaseStatus, BeforeValidator(_lower_or_none)]
RequiredTaskStatus = Annotated[TaskStatus, BeforeValidator(_lower_or_none)]
RequiredPriority = Annotated[Priority, BeforeValidator(_lower_or_none)]


class ToolArgs(BaseModel):
    """Base for tool argument models; field aliases are the catalog's camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BaseTool(ABC):
    """Base class for Lex tools. The declaration lives in the catalog under ``name``."""

    name: ClassVar[str]
    args_model: ClassVar[type[ToolArgs]] = ToolArgs

    def __init__(self, gateway: FirmGateway) -> None:
        self._gateway = gateway

    async def execute(self, params: dict[str, Any]) -> ToolResult:
        """Validate ``params`` against ``args_model`` and run the tool.

        Raises pydantic.ValidationError for arguments the model cannot accept.
        """
        args = self.args_model.model_validate(params)
        return await self.run(args)

    @abstractmethod
    async def run(self, args: Any) -> ToolResult:
        ...


def to_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def fmt_date(value: datetime | None, default: str = "Not set") -> str:
    return value.strftime("%Y-%m-%d") if value else default
