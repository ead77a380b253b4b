"""Assistant configuration: paths, domain defaults and environment settings."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from main_config import (
    DB_DIR as _DB_DIR,
    DEFAULT_SYSTEM_PROMPT_PATH as _DEFAULT_SYSTEM_PROMPT_PATH,
    FIRM_DB_PATH as _FIRM_DB_PATH,
)

load_dotenv()

# Path objects for use in this package (main_config uses os.path strings)
DB_DIR = Path(_DB_DIR)
FIRM_DB_PATH = Path(_FIRM_DB_PATH)
DEFAULT_SYSTEM_PROMPT_PATH = Path(_DEFAULT_SYSTEM_PROMPT_PATH)

CLIENT_STATUSES = ("active", "inactive", "prospect")
CASE_STATUSES = ("intake", "discovery", "trial", "closed")
TASK_STATUSES = ("pending", "in-progress", "completed")
PRIORITIES = ("high", "medium", "low")
ROLES = ("partner", "associate", "paralegal", "staff")

DEFAULT_TASK_DUE_DAYS = 7
DEFAULT_CASE_DEADLINE_DAYS = 30
NOTE_AUTHOR = "AI Assistant"

SUCCESS_MARKER = "✅"
CLARIFY_MARKER = "⚠️"


class AssistantSettings(BaseModel):
    """Runtime settings for the Lex service."""

    firm_store: str = Field(default="sqlite", description="'sqlite' or 'memory'")
    firm_db_path: Path = Field(default=FIRM_DB_PATH)
    seed_demo_data: bool = Field(
        default=True,
        description="Load the demo firm into an empty store at startup.",
    )

    @classmethod
    def from_env(cls) -> AssistantSettings:
        return cls(
            firm_store=os.getenv("FIRM_STORE", "sqlite").strip().lower(),
            firm_db_path=Path(os.getenv("FIRM_DB_PATH", str(FIRM_DB_PATH))),
            seed_demo_data=os.getenv("SEED_DEMO_DATA", "true").strip().lower() not in ("false", "0", "no"),
        )
