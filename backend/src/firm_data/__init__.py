"""Firm data gateway: entity models, the gateway contract and its stores."""

from .gateway import DocumentGateway, EntityNotFoundError, FirmGateway
from .memory import InMemoryFirmGateway
from .models import (
    Case,
    Client,
    EntityKind,
    Note,
    Task,
    TeamMember,
)
from .seed import seed_demo_firm
from .sqlite import SQLiteFirmGateway

__all__ = [
    "Case",
    "Client",
    "DocumentGateway",
    "EntityKind",
    "EntityNotFoundError",
    "FirmGateway",
    "InMemoryFirmGateway",
    "Note",
    "SQLiteFirmGateway",
    "Task",
    "TeamMember",
    "seed_demo_firm",
]
