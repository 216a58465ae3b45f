"""HTTP routes for the chat relay."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from astra.dependencies import get_chat_service, get_policy
from astra.exceptions import ChatServiceError
from astra.middleware import client_key
from astra.models import ChatRequest, ChatResponse, ErrorResponse
from astra.policy import PolicyDirective, enforce_policy
from astra.services.chat_service import ChatService

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Astra Assistant is temporarily unavailable."

router = APIRouter()


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "Astra Assistant backend running"}


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def chat(
    payload: ChatRequest,
    request: Request,
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
    policy: Annotated[PolicyDirective, Depends(get_policy)],
) -> ChatResponse | JSONResponse:
    """Relay the message upstream and return the policy-compliant reply."""

    try:
        candidate = await chat_service.complete(payload.message)
    except ChatServiceError as exc:
        logger.error(
            "Chat completion unavailable",
            extra={
                "client": client_key(request),
                "error_code": exc.code,
                "detail": exc.message,
                "upstream_status": exc.status_code,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ErrorResponse(error=UNAVAILABLE_MESSAGE).model_dump(),
        )

    reply = enforce_policy(candidate, policy)
    logger.info(
        "Chat reply delivered",
        extra={
            "client": client_key(request),
            "words": len(reply.split()),
            "fallback": reply == policy.fallback_reply,
        },
    )
    return ChatResponse(reply=reply)
