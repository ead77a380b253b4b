"""Multi-turn case status update."""

from __future__ import annotations

import re
from typing import Any, Optional

from src.firm_data import EntityKind

from . import states
from .rules import GuardrailRule, GuardrailServices, TurnContext


def _is_ambiguous(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and bool(states.CASE_UPDATE_AMBIGUOUS_RE.match(ctx.text))


def _answers_identifier(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and ctx.prev_assistant == states.ASK_CASE_IDENTIFIER


def _answers_status(ctx: TurnContext) -> Optional[re.Match[str]]:
    if ctx.last_user is None or not ctx.prev_assistant:
        return None
    asked = states.ASK_CASE_STATUS_RE.search(ctx.prev_assistant)
    if asked:
        return asked
    if ctx.prev_assistant == states.STATUS_REPROMPT:
        return ctx.scan_assistant(states.ASK_CASE_STATUS_RE)
    return None


async def ask_identifier(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    return states.ASK_CASE_IDENTIFIER


async def identifier_reply(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    identifier = (ctx.last_user or "").strip()
    case = await svc.gateway.find_one_fuzzy(EntityKind.CASE, identifier)
    if case is None:
        return states.CASE_NOT_FOUND.format(identifier=identifier)
    return states.ASK_CASE_STATUS.format(title=case.title, number=case.case_number, status=case.status)


async def status_reply(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    new_status = ctx.text
    if new_status not in states.VALID_CASE_STATUSES:
        return states.STATUS_REPROMPT
    # Case numbers are unique; titles are not
    return await svc.executor.run(
        "update_case_status", {"caseIdentifier": hit.group(2), "newStatus": new_status}
    )


RULES = [
    GuardrailRule("case_update_ambiguous", _is_ambiguous, ask_identifier),
    GuardrailRule("case_identifier_reply", _answers_identifier, identifier_reply),
    GuardrailRule("case_status_reply", _answers_status, status_reply),
]
