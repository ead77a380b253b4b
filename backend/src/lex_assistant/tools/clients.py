"""Client tools: list, look up, create, update and annotate clients."""

from __future__ import annotations

from typing import Optional

from src.firm_data import EntityKind, Note

from ..config import CLARIFY_MARKER, NOTE_AUTHOR, SUCCESS_MARKER
from ..links import CLIENTS_LINK, client_link
from ..models import ToolResult
from .base import BaseTool, ClientStatusArg, NonEmptyStr, OptionalStr, ToolArgs, to_json


def client_not_found(name: str) -> ToolResult:
    return ToolResult.fail(f'Client "{name}" not found. {CLIENTS_LINK}')


class ListClientsArgs(ToolArgs):
    status: ClientStatusArg = None


class ListClientsTool(BaseTool):
    name = "list_clients"
    args_model = ListClientsArgs

    async def run(self, args: ListClientsArgs) -> ToolResult:
        flt = {"status": args.status} if args.status else {}
        clients = await self._gateway.find(EntityKind.CLIENT, flt)
        if not clients:
            return ToolResult.ok("No clients found matching the criteria.")
        return ToolResult.ok(
            to_json(
                [
                    {
                        "name": c.name,
                        "email": c.email,
                        "status": c.status,
                        "company": c.company_name or "N/A",
                        "phone": c.phone or "N/A",
                    }
                    for c in clients
                ]
            )
        )


class GetClientInfoArgs(ToolArgs):
    client_name: NonEmptyStr


class GetClientInfoTool(BaseTool):
    name = "get_client_info"
    args_model = GetClientInfoArgs

    async def run(self, args: GetClientInfoArgs) -> ToolResult:
        client = await self._gateway.find_one_fuzzy(EntityKind.CLIENT, args.client_name)
        if client is None:
            return client_not_found(args.client_name)
        return ToolResult.ok(
            to_json(
                {
                    "name": client.name,
                    "email": client.email,
                    "phone": client.phone,
                    "company": client.company_name,
                    "status": client.status,
                    "notesCount": len(client.notes),
                    "totalMatters": client.total_matters,
                    "link": f"/clients/{client.id}",
                }
            )
        )


class CreateClientArgs(ToolArgs):
    name: NonEmptyStr
    email: NonEmptyStr
    phone: OptionalStr = None
    company_name: OptionalStr = None
    status: ClientStatusArg = None


class CreateClientTool(BaseTool):
    name = "create_client"
    args_model = CreateClientArgs

    async def run(self, args: CreateClientArgs) -> ToolResult:
        existing = await self._gateway.find(EntityKind.CLIENT, {"email": args.email})
        if existing:
            return ToolResult.fail(
                f"A client with email {args.email} already exists. {client_link(existing[0].id)}"
            )
        client = await self._gateway.create(
            EntityKind.CLIENT,
            {
                "name": args.name,
                "email": args.email,
                "phone": args.phone or "",
                "company_name": args.company_name or "",
                "status": args.status or "prospect",
            },
        )
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Client "{client.name}" created successfully with email {client.email}. '
            f"{client_link(client.id)}"
        )


class UpdateClientArgs(ToolArgs):
    client_name: NonEmptyStr
    new_name: OptionalStr = None
    email: OptionalStr = None
    phone: OptionalStr = None
    status: ClientStatusArg = None


class UpdateClientTool(BaseTool):
    name = "update_client"
    args_model = UpdateClientArgs

    async def run(self, args: UpdateClientArgs) -> ToolResult:
        client = await self._gateway.find_one_fuzzy(EntityKind.CLIENT, args.client_name)
        if client is None:
            return client_not_found(args.client_name)
        patch = {
            key: value
            for key, value in (
                ("name", args.new_name),
                ("email", args.email),
                ("phone", args.phone),
                ("status", args.status),
            )
            if value
        }
        if not patch:
            return ToolResult.fail(
                f'{CLARIFY_MARKER} What would you like to change for client "{client.name}"? '
                "I can update the name, email, phone or status."
            )
        client = await self._gateway.update(EntityKind.CLIENT, client.id, patch)
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Client "{client.name}" updated successfully. {client_link(client.id)}'
        )


class AddClientNoteArgs(ToolArgs):
    # Both optional: a missing value becomes a clarifying question, not an error
    client_name: Optional[str] = None
    note_content: Optional[str] = None


class AddClientNoteTool(BaseTool):
    name = "add_client_note"
    args_model = AddClientNoteArgs

    async def run(self, args: AddClientNoteArgs) -> ToolResult:
        client_name = (args.client_name or "").strip()
        if not client_name:
            return ToolResult.fail(f"{CLARIFY_MARKER} Which client should I add the note to?")
        content = (args.note_content or "").strip()
        if not content:
            return ToolResult.fail(
                f'{CLARIFY_MARKER} What note would you like to add to "{client_name}"?'
            )

        client = await self._gateway.find_one_fuzzy(EntityKind.CLIENT, client_name)
        if client is None:
            return client_not_found(client_name)
        note = Note(content=content, author=NOTE_AUTHOR)
        client = await self._gateway.modify(EntityKind.CLIENT, client.id, lambda c: c.notes.append(note))
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Note added to client "{client.name}": "{content}". '
            f'{client_link(client.id, "View Client Notes")}'
        )
