"""Multi-turn client note taking."""

from __future__ import annotations

import re
from typing import Any, Optional

from src.firm_data import EntityKind

from . import states
from .rules import GuardrailRule, GuardrailServices, TurnContext


def _strip_client_suffix(name: str) -> str:
    return states.NOTE_CLIENT_SUFFIX_RE.sub("", name).strip()


def extract_note_with_content(text: str) -> Optional[tuple[str, str]]:
    """``(client name, content)`` from "add a note to <name>: <content>"."""
    found = states.NOTE_ONE_SHOT_RE.search(text)
    if not found:
        return None
    client_name = _strip_client_suffix(found.group(1))
    content = found.group(2).strip()
    if not client_name or not content:
        return None
    return client_name, content


def extract_note_client(text: str) -> Optional[str]:
    """Client name from "add a note to <name>[ client]", or None."""
    found = states.NOTE_PARTIAL_RE.search(text.strip())
    if not found:
        return None
    return _strip_client_suffix(found.group(1)) or None


def note_request_missing_content(text: str) -> bool:
    t = text.lower()
    if "note" not in t or "add" not in t:
        return False
    return not any(marker in t for marker in states.NOTE_CONTENT_MARKERS)


async def _ask_for_content(svc: GuardrailServices, client_name: str) -> str:
    client = await svc.gateway.find_one_fuzzy(EntityKind.CLIENT, client_name)
    if client is None:
        return states.NOTE_CLIENT_NOT_FOUND.format(name=client_name)
    return states.ASK_NOTE_CONTENT.format(client=client.name)


# -- predicates ---------------------------------------------------------------


def _is_ambiguous(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and bool(states.NOTE_AMBIGUOUS_RE.match(ctx.text))


def _answers_target(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and states.ASK_NOTE_TARGET in (ctx.prev_assistant or "")


def _answers_client(ctx: TurnContext) -> bool:
    return ctx.last_user is not None and ctx.prev_assistant == states.ASK_NOTE_CLIENT


def _one_shot(ctx: TurnContext) -> Any:
    return extract_note_with_content(ctx.last_user) if ctx.last_user else None


def _partial(ctx: TurnContext) -> Any:
    if not ctx.last_user or not note_request_missing_content(ctx.last_user):
        return None
    return extract_note_client(ctx.last_user)


def _answers_content(ctx: TurnContext) -> Optional[re.Match[str]]:
    if ctx.last_user is None or not ctx.prev_assistant:
        return None
    return states.ASK_NOTE_CONTENT_RE.search(ctx.prev_assistant)


# -- handlers -----------------------------------------------------------------


async def ask_target(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    return states.ASK_NOTE_TARGET


async def target_reply(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> Optional[str]:
    if "client" in ctx.text:
        return states.ASK_NOTE_CLIENT
    if "case" in ctx.text:
        return states.CASE_NOTES_UNSUPPORTED
    return None


async def client_reply(ctx: TurnContext, hit: Any, svc: GuardrailServices) -> str:
    return await _ask_for_content(svc, (ctx.last_user or "").strip())


async def one_shot(ctx: TurnContext, hit: tuple[str, str], svc: GuardrailServices) -> str:
    client_name, content = hit
    return await svc.executor.run("add_client_note", {"clientName": client_name, "noteContent": content})


async def partial(ctx: TurnContext, hit: str, svc: GuardrailServices) -> str:
    return await _ask_for_content(svc, hit)


async def content_reply(ctx: TurnContext, hit: re.Match[str], svc: GuardrailServices) -> str:
    return await svc.executor.run(
        "add_client_note", {"clientName": hit.group(1), "noteContent": ctx.last_user}
    )


RULES = [
    GuardrailRule("note_ambiguous", _is_ambiguous, ask_target),
    GuardrailRule("note_target_reply", _answers_target, target_reply),
    GuardrailRule("note_client_reply", _answers_client, client_reply),
    GuardrailRule("note_one_shot", _one_shot, one_shot),
    GuardrailRule("note_partial", _partial, partial),
    GuardrailRule("note_content_reply", _answers_content, content_reply),
]
