"""Dialogue state table for the guardrail layer.

Every question the layer asks is defined here next to the pattern that
recognizes it in the following turn, so the asking side and the matching
side share one definition. Templates are ``str.format`` strings.
"""

from __future__ import annotations

import re

from ..config import CASE_STATUSES, PRIORITIES
from ..links import CASES_LINK, CLIENTS_LINK, TEAM_LINK

_I = re.IGNORECASE

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

_VERB = r"^(?:show|list|get|display|view)\s+(?:me\s+)?(?:all\s+)?(?:the\s+)?"
_END = r"\s*[?.!]*\s*$"

NAV_ALL_CLIENTS_RE = re.compile(_VERB + r"clients", _I)
NAV_ALL_CLIENTS_ASK_RE = re.compile(r"what\s+clients\s+(?:do\s+we\s+have|are\s+there)", _I)
NAV_CLIENTS_BY_STATUS_RE = re.compile(_VERB + r"(active|inactive|prospect)\s+clients", _I)
NAV_ALL_CASES_RE = re.compile(_VERB + r"cases", _I)
NAV_ALL_CASES_ASK_RE = re.compile(r"what\s+cases\s+(?:do\s+we\s+have|are\s+there)", _I)
NAV_CASES_FILTERED_RE = re.compile(
    _VERB + r"(high|medium|low|intake|discovery|trial|closed)(?:\s+priority)?\s+cases", _I
)
NAV_ALL_TASKS_RE = re.compile(_VERB + r"tasks", _I)
NAV_ALL_TASKS_ASK_RE = re.compile(r"what\s+tasks\s+(?:do\s+we\s+have|are\s+there)", _I)
NAV_TASKS_FILTERED_RE = re.compile(
    _VERB + r"(high|medium|low|pending|in-progress|completed)(?:\s+priority)?\s+tasks", _I
)
NAV_TEAM_RE = re.compile(_VERB + r"(?:team\s*members?|team|staff|employees)" + _END, _I)
NAV_TEAM_ASK_RE = re.compile(r"who(?:'s| is)\s+(?:on\s+)?(?:the\s+)?team", _I)
NAV_TEAM_BY_ROLE_RE = re.compile(_VERB + r"(partners?|associates?|paralegals?)" + _END, _I)

NAV_ALL_CLIENTS = "You have **{count} clients** in the system. " + CLIENTS_LINK
NAV_CLIENTS_BY_STATUS = "You have **{count} {status} clients**. [View {label} Clients →](/clients?status={status})"
NAV_ALL_CASES = "You have **{count} cases** total ({active} active). [View All Cases →](/cases)"
NAV_CASES_FILTERED = "You have **{count} {value} {field} cases**. [View {label} Cases →](/cases?{field}={value})"
NAV_ALL_TASKS = "You have **{count} tasks** total ({pending} pending). [View All Tasks →](/tasks)"
NAV_TASKS_FILTERED = "You have **{count} {value} {field} tasks**. [View {label} Tasks →](/tasks?{field}={value})"
NAV_TEAM = "You have **{count} team members**. " + TEAM_LINK
NAV_TEAM_BY_ROLE = "You have **{count} {role}(s)** on the team. [View {label}s →](/team?role={role})"

# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

NOTE_AMBIGUOUS_RE = re.compile(r"^add\s+(?:a\s+)?note\s*$", _I)
NOTE_ONE_SHOT_RE = re.compile(r"add\s+(?:a\s+)?note\s+(?:in|to|for)\s+(?:the\s+)?(.+?):\s*(.+)", _I | re.DOTALL)
NOTE_PARTIAL_RE = re.compile(r"add\s+(?:a\s+)?note\s+(?:in|to|for)\s+(?:the\s+)?(.+?)(?:\s+client)?\s*$", _I)
NOTE_CLIENT_SUFFIX_RE = re.compile(r"\s+client\s*$", _I)
# Phrasing that usually carries the note body, so the request is not partial
NOTE_CONTENT_MARKERS = ('"', "'", ":", "that says", "saying", "content")

ASK_NOTE_TARGET = "Would you like to add a note to a **client** or a **case**?"
ASK_NOTE_CLIENT = "Which client would you like to add the note to?"
CASE_NOTES_UNSUPPORTED = (
    "Adding notes to cases is not yet supported. Would you like to add a note to a client instead?"
)
ASK_NOTE_CONTENT = 'What note would you like to add to "{client}"?'
ASK_NOTE_CONTENT_RE = re.compile(r'What note would you like to add to\s+"([^"]+)"\?', _I)
NOTE_CLIENT_NOT_FOUND = (
    'Client "{name}" not found. Please check the name and try again, or '
    + CLIENTS_LINK
    + " to see available clients."
)

# ---------------------------------------------------------------------------
# Task creation
# ---------------------------------------------------------------------------

TASK_AMBIGUOUS_RE = re.compile(r"^(?:create|add|make)\s+(?:a\s+)?(?:new\s+)?task\s*$", _I)

ASK_TASK_TITLE = "I'd be happy to create a task! What should the task title be?"
ASK_TASK_ASSIGNEE = 'Got it! Task: "{title}". Who should this task be assigned to?'
ASK_TASK_ASSIGNEE_RE = re.compile(r'Got it! Task: "([^"]+)"\. Who should this task be assigned to\?', _I)
TASK_TITLE_RE = re.compile(r'Got it! Task: "([^"]+)"\.', _I)
ASSIGNEE_NOT_FOUND = (
    'Team member "{name}" not found. '
    + TEAM_LINK
    + " to see available team members. Who should this task be assigned to?"
)
ASSIGNEE_NOT_FOUND_RE = re.compile(
    r'Team member "[^"]+" not found\..*Who should this task be assigned to\?', _I | re.DOTALL
)
ASK_TASK_PRIORITY = 'Task "{title}" will be assigned to {assignee}. What priority should it have? (high, medium, or low)'
ASK_TASK_PRIORITY_RE = re.compile(
    r'Task "([^"]+)" will be assigned to ([^.]+)\. What priority should it have\?', _I
)
PRIORITY_REPROMPT = "Please choose a priority: **high**, **medium**, or **low**."
TASK_CREATED = '✅ Task "{title}" created and assigned to {assignee} with {priority} priority. [View Tasks →](/tasks)'
VALID_PRIORITIES = PRIORITIES

# ---------------------------------------------------------------------------
# Case status update
# ---------------------------------------------------------------------------

CASE_UPDATE_AMBIGUOUS_RE = re.compile(r"^(?:update|change|modify)\s+(?:a\s+)?(?:the\s+)?case\s*$", _I)

ASK_CASE_IDENTIFIER = "Which case would you like to update? Please provide the case title or case number."
CASE_NOT_FOUND = 'Case "{identifier}" not found. ' + CASES_LINK + " to see all cases."
ASK_CASE_STATUS = (
    'Found case "{title}" ({number}). Current status: **{status}**. '
    "What would you like to change the status to? (intake, discovery, trial, or closed)"
)
ASK_CASE_STATUS_RE = re.compile(
    r'Found case "([^"]+)" \(([^)]+)\)\. Current status: \*\*([^*]+)\*\*\. '
    r"What would you like to change the status to\?",
    _I,
)
STATUS_REPROMPT = "Please choose a valid status: **intake**, **discovery**, **trial**, or **closed**."
VALID_CASE_STATUSES = CASE_STATUSES
