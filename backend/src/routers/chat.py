"""Chat router: the Lex assistant endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.lex_assistant import ChatRequest, ChatTurnHandler, ErrorResponse
from src.llm_core import Message


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def get_chat_handler(request: Request) -> ChatTurnHandler:
    """The handler built at startup; tests swap it through ``dependency_overrides``."""
    return request.app.state.chat_handler


@router.post(
    "/chat",
    response_model=Message,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, handler: ChatTurnHandler = Depends(get_chat_handler)):
    """Answer one turn of the conversation with a single assistant message."""
    try:
        return await handler.handle(request.messages)
    except Exception as e:
        logger.exception("AI chat error")
        return JSONResponse(status_code=500, content={"message": str(e)})
