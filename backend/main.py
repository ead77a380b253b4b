"""Run the FastAPI app for the Lex assistant."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from src.firm_data import FirmGateway, InMemoryFirmGateway, SQLiteFirmGateway, seed_demo_firm
from src.lex_assistant import AssistantSettings, ChatTurnHandler
from src.llm_core import LLMCoreConfig, build_provider
from src.routers import chat_router


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_gateway(settings: AssistantSettings) -> FirmGateway:
    if settings.firm_store == "memory":
        return InMemoryFirmGateway()
    return SQLiteFirmGateway(settings.firm_db_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = AssistantSettings.from_env()
    llm_config = LLMCoreConfig.from_env()
    gateway = build_gateway(settings)
    logger.info("Firm store: %s", settings.firm_store)
    if settings.seed_demo_data:
        await seed_demo_firm(gateway)
    app.state.chat_handler = ChatTurnHandler(gateway, build_provider(llm_config), llm_config)
    yield


app = FastAPI(title="Lex Assistant", version="0.1.0", lifespan=lifespan)
app.include_router(chat_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Lex assistant API is running"


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
