import json

import httpx
import pytest

from astra.config import Settings
from astra.exceptions import ChatServiceError
from astra.policy import DEFAULT_POLICY
from astra.services.chat_service import ChatService


@pytest.fixture
def settings() -> Settings:
    return Settings()


def _reply(content) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


@pytest.mark.asyncio
async def test_chat_service_success(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://api.groq.com/openai/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        payload = json.loads(request.content.decode())
        assert payload["model"] == "llama-3.3-70b-versatile"
        assert payload["temperature"] == 0.4
        assert payload["max_tokens"] == 400
        assert payload["messages"][0] == {
            "role": "system",
            "content": DEFAULT_POLICY.system_prompt,
        }
        assert payload["messages"][1] == {"role": "user", "content": "hello"}
        return _reply("Stars are distant suns.")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        result = await service.complete("hello")

    assert result == "Stars are distant suns."


@pytest.mark.asyncio
async def test_chat_service_keeps_empty_content(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return _reply("")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        result = await service.complete("hello")

    assert result == ""


@pytest.mark.asyncio
async def test_chat_service_timeout(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        raise httpx.TimeoutException("timeout")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        with pytest.raises(ChatServiceError) as exc:
            await service.complete("hello")

    assert "timed out" in str(exc.value)


@pytest.mark.asyncio
async def test_chat_service_http_error(settings: Settings) -> None:
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, json={"error": {"message": "fail"}})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        with pytest.raises(ChatServiceError) as exc:
            await service.complete("hello")

    assert exc.value.status_code == 500
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_chat_service_bad_payload(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": "structure"})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        with pytest.raises(ChatServiceError):
            await service.complete("hello")


@pytest.mark.asyncio
async def test_chat_service_null_content(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return _reply(None)

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        with pytest.raises(ChatServiceError):
            await service.complete("hello")


@pytest.mark.asyncio
async def test_chat_service_non_json_body(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ChatService(client, settings)
        with pytest.raises(ChatServiceError):
            await service.complete("hello")
