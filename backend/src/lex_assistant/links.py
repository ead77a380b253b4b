"""Navigation links embedded in assistant text.

The UI renders ``[label](/path)`` as in-app navigation, so every not-found
answer carries one of the listing links below.
"""

from __future__ import annotations


def nav_link(label: str, path: str) -> str:
    return f"[{label} →]({path})"


CLIENTS_LINK = nav_link("View All Clients", "/clients")
CASES_LINK = nav_link("View Cases Page", "/cases")
TASKS_LINK = nav_link("View Tasks", "/tasks")
TEAM_LINK = nav_link("View Team Page", "/team")


def client_link(client_id: str, label: str = "View Client") -> str:
    return nav_link(label, f"/clients/{client_id}")


def case_link(case_id: str, label: str = "View Case") -> str:
    return nav_link(label, f"/cases/{case_id}")
