"""Multi-turn task creation: title, assignee, priority, then ``create_task``."""

from __future__ import annotations

import re
from typing import Any, Optional

from src.firm_data import EntityKind

from . import states
from .rules import GuardrailRule, GuardrailServices, TurnContext


def _is_ambiguous(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and bool(states.TASK_AMBIGUOUS_RE.match(ctx.text))


def _answers_title(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and ctx.prev_assistant == states.ASK_TASK_TITLE


def _answers_assignee(ctx: TurnContext) -> Optional[str]:
    """Task title when the previous turn asked for an assignee."""
    if ctx.last_user is None or not ctx.prev_assistant:
        return None
    asked = states.ASK_TASK_ASSIGNEE_RE.search(ctx.prev_assistant)
    if asked:
        return asked.group(1)
    # Retry after an unknown assignee: the title is further back
    if states.ASSIGNEE_NOT_FOUND_RE.search(ctx.prev_assistant):
        earlier = ctx.scan_assistant(states.TASK_TITLE_RE)
        if earlier:
            return earlier.group(1)
    return None


def _answers_priority(ctx: TurnContext) -> Optional[re.Match[str]]:
    if ctx.last_user is None or not ctx.prev_assistant:
        return None
    asked = states.ASK_TASK_PRIORITY_RE.search(ctx.prev_assistant)
    if asked:
        return asked
    if ctx.prev_assistant == states.PRIORITY_REPROMPT:
        return ctx.scan_assistant(states.ASK_TASK_PRIORITY_RE)
    return None


async def ask_title(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    return states.ASK_TASK_TITLE


async def title_reply(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    # Double quotes delimit the title in every later question of the flow
    title = (ctx.last_user or "").strip().replace('"', "'")
    return states.ASK_TASK_ASSIGNEE.format(title=title)


async def assignee_reply(ctx: TurnContext, title: str, svc: GuardrailServices) -> str:
    name = (ctx.last_user or "").strip()
    member = await svc.gateway.find_one_fuzzy(EntityKind.TEAM_MEMBER, name)
    if member is None:
        return states.ASSIGNEE_NOT_FOUND.format(name=name)
    return states.ASK_TASK_PRIORITY.format(title=title, assignee=member.name)


async def priority_reply(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    title, assignee = hit.group(1), hit.group(2)
    priority = ctx.text
    if priority not in states.VALID_PRIORITIES:
        return states.PRIORITY_REPROMPT
    result = await svc.executor.execute(
        "create_task", {"title": title, "assigneeName": assignee, "priority": priority}
    )
    if not result.success:
        return result.text
    return states.TASK_CREATED.format(title=title, assignee=assignee, priority=priority)


RULES = [
    GuardrailRule("task_ambiguous", _is_ambiguous, ask_title),
    GuardrailRule("task_title_reply", _answers_title, title_reply),
    GuardrailRule("task_assignee_reply", _answers_assignee, assignee_reply),
    GuardrailRule("task_priority_reply", _answers_priority, priority_reply),
]
