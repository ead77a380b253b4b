"""Demo data for a fresh store: a small firm with team, clients, cases and tasks."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from .gateway import FirmGateway
from .models import EntityKind

logger = logging.getLogger(__name__)

TEAM = [
    ("Margaret Chen", "mchen@hartfordlegal.com", "partner", ["Corporate Law", "Mergers & Acquisitions"]),
    ("David Richardson", "drichardson@hartfordlegal.com", "partner", ["Commercial Litigation", "Employment Law"]),
    ("Michael Torres", "mtorres@hartfordlegal.com", "associate", ["Contract Law", "Intellectual Property"]),
    ("Sarah Mitchell", "smitchell@hartfordlegal.com", "paralegal", ["Legal Research", "Document Review"]),
    ("Robert Nakamura", "rnakamura@hartfordlegal.com", "partner", ["Real Estate", "Corporate Finance"]),
    ("Jennifer Walsh", "jwalsh@hartfordlegal.com", "staff", ["Office Administration", "Client Relations"]),
    ("Amanda Foster", "afoster@hartfordlegal.com", "associate", ["Family Law", "Estate Planning"]),
    ("James Patterson", "jpatterson@hartfordlegal.com", "paralegal", ["Case Management", "Court Filings"]),
]

# (name, company, email, phone, status, total_matters, note, note_author, note_age_days)
CLIENTS = [
    ("Meridian Manufacturing Inc.", "Meridian Manufacturing Inc.", "legal@meridianmfg.com", "(312) 555-0147",
     "active", 3, "Long-standing client since 2019. Primary contact is CFO William Hayes.", "Margaret Chen", 30),
    ("Elizabeth Hartwell", "", "ehartwell@gmail.com", "(312) 555-0198",
     "active", 1, "Seeking estate planning services for family trust.", "Amanda Foster", 14),
    ("Global Tech Solutions LLC", "Global Tech Solutions LLC", "contracts@globaltechsolutions.com", "(415) 555-0234",
     "active", 2, "Fast-growing SaaS company. CEO Sandra Kim is primary decision maker.", "Michael Torres", 21),
    ("Northstar Capital Partners", "Northstar Capital Partners", "legal@northstarcap.com", "(212) 555-0312",
     "prospect", 0, "Interested in M&A advisory services for upcoming acquisition.", "Margaret Chen", 3),
    ("Riverside Healthcare Group", "Riverside Healthcare Group", "compliance@riversidehg.org", "(617) 555-0456",
     "inactive", 5, "May re-engage for upcoming HIPAA audit preparation.", "David Richardson", 90),
    ("Summit Real Estate Development", "Summit Real Estate Development", "jthompson@summitred.com", "(303) 555-0567",
     "active", 4, "Working on three commercial property acquisitions.", "Robert Nakamura", 10),
]

# (title, case_number, client index, team indexes, status, priority, deadline_days, description)
CASES = [
    ("Contract Dispute - Vendor Agreement", "MM-2024-001", 0, [1, 2], "discovery", "high", 30,
     "Breach of contract dispute with primary supplier regarding delivery terms."),
    ("Acquisition Due Diligence - Midwest Metals", "MM-2024-002", 0, [0, 4], "intake", "high", None,
     "Due diligence review for proposed acquisition of Midwest Metals Corp."),
    ("Hartwell Family Trust Establishment", "EH-2024-001", 1, [6, 3], "discovery", "medium", 45,
     "Establishment of irrevocable family trust for estate planning purposes."),
    ("Software Licensing Agreement Review", "GTS-2024-001", 2, [2], "discovery", "medium", 14,
     "Review of enterprise software licensing agreement with a technology vendor."),
    ("Employment Discrimination Defense", "GTS-2024-002", 2, [1, 7], "trial", "high", None,
     "Defense against employment discrimination claim filed by former employee."),
    ("Zoning Variance Application", "SRE-2024-002", 5, [4], "intake", "low", None,
     "Zoning variance application for proposed residential development project."),
    ("HIPAA Compliance Audit", "RHG-2023-001", 4, [1, 3], "closed", "medium", None,
     "HIPAA compliance audit and remediation plan development."),
]

# (title, description, status, due_days, assignee index, case index, priority)
TASKS = [
    ("Draft Response to Discovery Requests", "Prepare responses to interrogatories for MM-2024-001",
     "pending", 3, 2, 0, "high"),
    ("Review Target Company Financials", "Identify potential liabilities for Midwest Metals acquisition",
     "in-progress", 7, 0, 1, "high"),
    ("Draft Trust Agreement", "Prepare initial draft of the Hartwell family trust document",
     "in-progress", 10, 6, 2, "medium"),
    ("Prepare Witness List", "Compile witness list for the discrimination defense trial",
     "pending", 5, 7, 4, "medium"),
    ("File Audit Closing Memo", "Archive the HIPAA audit closing memo",
     "completed", -2, 3, 6, "low"),
]


async def seed_demo_firm(gateway: FirmGateway) -> bool:
    """Load the demo firm when the store has no team members. Returns True if seeded."""
    if await gateway.count(EntityKind.TEAM_MEMBER) > 0:
        return False

    now = datetime.now(timezone.utc)
    members = []
    for name, email, role, specialties in TEAM:
        members.append(
            await gateway.create(
                EntityKind.TEAM_MEMBER,
                {"name": name, "email": email, "role": role, "specialties": specialties},
            )
        )

    clients = []
    for name, company, email, phone, status, matters, note, author, age in CLIENTS:
        clients.append(
            await gateway.create(
                EntityKind.CLIENT,
                {
                    "name": name,
                    "company_name": company,
                    "email": email,
                    "phone": phone,
                    "status": status,
                    "total_matters": matters,
                    "notes": [{"content": note, "author": author, "created_at": now - timedelta(days=age)}],
                },
            )
        )

    cases = []
    for title, number, client_idx, team_idx, status, priority, deadline_days, description in CASES:
        cases.append(
            await gateway.create(
                EntityKind.CASE,
                {
                    "title": title,
                    "case_number": number,
                    "client": clients[client_idx].id,
                    "assigned_team": [members[i].id for i in team_idx],
                    "status": status,
                    "priority": priority,
                    "deadline": now + timedelta(days=deadline_days) if deadline_days else None,
                    "description": description,
                },
            )
        )

    for title, description, status, due_days, member_idx, case_idx, priority in TASKS:
        await gateway.create(
            EntityKind.TASK,
            {
                "title": title,
                "description": description,
                "status": status,
                "due_date": now + timedelta(days=due_days),
                "assigned_to": members[member_idx].id,
                "related_case": cases[case_idx].id,
                "priority": priority,
            },
        )

    logger.info(
        "Seeded demo firm: %d team members, %d clients, %d cases, %d tasks",
        len(members), len(clients), len(cases), len(TASKS),
    )
    return True
