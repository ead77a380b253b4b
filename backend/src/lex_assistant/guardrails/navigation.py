"""List queries answered with a count and a link to the matching page."""

from __future__ import annotations

import asyncio
import re
from typing import Any

from src.firm_data import EntityKind

from ..config import PRIORITIES
from . import states
from .rules import GuardrailRule, GuardrailServices, TurnContext


def _match(*patterns: re.Pattern[str]):
    def predicate(ctx: TurnContext) -> Any:
        if ctx.last_user is None:
            return None
        for pattern in patterns:
            found = pattern.search(ctx.text)
            if found:
                return found
        return None

    return predicate


def _filter_field(value: str) -> str:
    return "priority" if value in PRIORITIES else "status"


async def all_clients(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    count = await svc.gateway.count(EntityKind.CLIENT)
    return states.NAV_ALL_CLIENTS.format(count=count)


async def clients_by_status(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    status = hit.group(1).lower()
    count = await svc.gateway.count(EntityKind.CLIENT, {"status": status})
    return states.NAV_CLIENTS_BY_STATUS.format(count=count, status=status, label=status.capitalize())


async def all_cases(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    total, active = await asyncio.gather(
        svc.gateway.count(EntityKind.CASE),
        svc.gateway.count(EntityKind.CASE, {"status": {"$ne": "closed"}}),
    )
    return states.NAV_ALL_CASES.format(count=total, active=active)


async def cases_filtered(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    value = hit.group(1).lower()
    field = _filter_field(value)
    count = await svc.gateway.count(EntityKind.CASE, {field: value})
    return states.NAV_CASES_FILTERED.format(count=count, value=value, field=field, label=value.capitalize())


async def all_tasks(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    total, pending = await asyncio.gather(
        svc.gateway.count(EntityKind.TASK),
        svc.gateway.count(EntityKind.TASK, {"status": "pending"}),
    )
    return states.NAV_ALL_TASKS.format(count=total, pending=pending)


async def tasks_filtered(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    value = hit.group(1).lower()
    field = _filter_field(value)
    count = await svc.gateway.count(EntityKind.TASK, {field: value})
    return states.NAV_TASKS_FILTERED.format(count=count, value=value, field=field, label=value.capitalize())


async def team(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    count = await svc.gateway.count(EntityKind.TEAM_MEMBER)
    return states.NAV_TEAM.format(count=count)


async def team_by_role(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    role = re.sub(r"s$", "", hit.group(1).lower())
    count = await svc.gateway.count(EntityKind.TEAM_MEMBER, {"role": role})
    return states.NAV_TEAM_BY_ROLE.format(count=count, role=role, label=role.capitalize())


RULES = [
    GuardrailRule("nav_all_clients", _match(states.NAV_ALL_CLIENTS_RE, states.NAV_ALL_CLIENTS_ASK_RE), all_clients),
    GuardrailRule("nav_clients_by_status", _match(states.NAV_CLIENTS_BY_STATUS_RE), clients_by_status),
    GuardrailRule("nav_all_cases", _match(states.NAV_ALL_CASES_RE, states.NAV_ALL_CASES_ASK_RE), all_cases),
    GuardrailRule("nav_cases_filtered", _match(states.NAV_CASES_FILTERED_RE), cases_filtered),
    GuardrailRule("nav_all_tasks", _match(states.NAV_ALL_TASKS_RE, states.NAV_ALL_TASKS_ASK_RE), all_tasks),
    GuardrailRule("nav_tasks_filtered", _match(states.NAV_TASKS_FILTERED_RE), tasks_filtered),
    GuardrailRule("nav_team", _match(states.NAV_TEAM_RE, states.NAV_TEAM_ASK_RE), team),
    GuardrailRule("nav_team_by_role", _match(states.NAV_TEAM_BY_ROLE_RE), team_by_role),
]
