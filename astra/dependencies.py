"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from astra.config import Settings, get_settings
from astra.policy import PolicyDirective
from astra.services.chat_service import ChatService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_policy(connection: HTTPConnection) -> PolicyDirective:
    """Retrieve the process-wide policy built at startup."""

    return connection.app.state.policy  # type: ignore[return-value]


async def get_chat_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    policy: PolicyDirective = Depends(get_policy),
) -> ChatService:
    """Dependency provider for ChatService."""

    return ChatService(client=client, settings=settings, policy=policy)
