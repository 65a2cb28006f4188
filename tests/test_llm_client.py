import asyncio
import contextlib
import json

import httpx
import pytest

from section_autogen.llm_client import (
    DEFAULT_MODEL_PROFILE,
    CompletionResponse,
    GenerationClient,
    resolve_model_profile,
    snippet,
)


def chat_response(content: str, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status,
        json={
            "id": "chatcmpl-1",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
            "usage": {"prompt_tokens": 10, "completion_tokens": 5},
        },
    )


def make_client(handler, **kwargs) -> GenerationClient:
    kwargs.setdefault("api_key", "sk-test")
    return GenerationClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.parametrize(
    "model, field, sends_temperature",
    [
        ("gpt-5-mini", "max_completion_tokens", False),
        ("o3-mini", "max_completion_tokens", False),
        ("o1", "max_completion_tokens", False),
        ("gpt-4o-mini", "max_tokens", True),
        ("gpt-4.1", "max_tokens", True),
        ("gpt-3.5-turbo", "max_tokens", True),
        ("mistral-large", "max_tokens", False),
    ],
)
def test_request_body_follows_model_profile(model, field, sends_temperature):
    client = GenerationClient(api_key="sk-test", model=model, temperature=0.4, max_tokens=900)
    body = client.build_body(system="sys", user="usr")

    assert body["model"] == model
    assert body[field] == 900
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "usr"},
    ]
    assert ("temperature" in body) is sends_temperature
    other = "max_tokens" if field == "max_completion_tokens" else "max_completion_tokens"
    assert other not in body


def test_unknown_model_gets_default_profile():
    assert resolve_model_profile("llama-3") is DEFAULT_MODEL_PROFILE


@pytest.mark.asyncio
async def test_complete_posts_to_chat_completions():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return chat_response('{"heading": "Ahoj"}')

    client = make_client(handler, base_url="https://llm.example/v1/")
    result = await client.complete(system="sys", user="usr", section_type="h001")

    assert result.ok
    assert result.text == '{"heading": "Ahoj"}'
    assert result.response_id == "chatcmpl-1"
    assert result.usage == {"prompt_tokens": 10, "completion_tokens": 5}
    request = seen[0]
    assert str(request.url) == "https://llm.example/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"
    assert json.loads(request.content)["model"] == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_error_status_carries_service_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": {"message": "overloaded"}})

    result = await make_client(handler).complete(system="s", user="u", section_type="h001")

    assert result.status == 503
    assert result.text == ""
    assert result.retryable
    assert result.describe_error() == "overloaded"


@pytest.mark.asyncio
async def test_missing_content_yields_empty_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    result = await make_client(handler).complete(system="s", user="u", section_type="h001")

    assert result.ok
    assert result.text == ""


@pytest.mark.asyncio
async def test_transport_error_maps_to_status_zero():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_client(handler).complete(system="s", user="u", section_type="h001")

    assert result.status == 0
    assert result.retryable
    assert "connection refused" in result.describe_error()


@contextlib.asynccontextmanager
async def delayed_server(delay: float):
    """Local HTTP endpoint that answers every request after ``delay`` seconds."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        head = await reader.readuntil(b"\r\n\r\n")
        length = 0
        for line in head.decode("latin-1").split("\r\n"):
            name, _, value = line.partition(":")
            if name.lower() == "content-length":
                length = int(value.strip())
        await reader.readexactly(length)
        await asyncio.sleep(delay)
        payload = json.dumps({"choices": [{"message": {"content": '{"heading": "Ahoj"}'}}]}).encode()
        writer.write(
            b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
            + f"Content-Length: {len(payload)}\r\nConnection: close\r\n\r\n".encode()
            + payload
        )
        try:
            await writer.drain()
        except ConnectionError:
            pass
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}/v1"
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_configured_timeout_outlasts_httpx_default():
    async with delayed_server(5.5) as base_url:
        client = GenerationClient(api_key="sk-test", base_url=base_url, timeout=60.0)
        result = await client.complete(system="s", user="u", section_type="h001")

    assert result.status == 200
    assert result.text == '{"heading": "Ahoj"}'


@pytest.mark.asyncio
async def test_slow_response_hits_timeout():
    async with delayed_server(1.0) as base_url:
        client = GenerationClient(api_key="sk-test", base_url=base_url, timeout=0.2)
        result = await client.complete(system="s", user="u", section_type="h001")

    assert result.status == 0
    assert result.retryable
    assert result.describe_error() == "Timeout after 200ms"



def test_zero_timeout_disables_deadline():
    client = GenerationClient(api_key="sk", timeout=0)

    assert client.timeout is None
    assert client._http_client().timeout == httpx.Timeout(None)


def test_http_client_uses_configured_timeout():
    assert GenerationClient(api_key="sk", timeout=60.0)._http_client().timeout == httpx.Timeout(60.0)


def test_credential_presence():
    assert GenerationClient(api_key="sk").has_credential
    assert not GenerationClient(api_key=None).has_credential
    assert not GenerationClient(api_key="").has_credential


@pytest.mark.parametrize(
    "status, retryable, fatal",
    [(0, True, False), (429, True, False), (500, True, False), (401, False, True), (200, False, False)],
)
def test_status_classification(status, retryable, fatal):
    response = CompletionResponse(status=status)
    assert response.retryable is retryable
    assert response.fatal is fatal


def test_snippet_truncates_long_text():
    assert snippet("abc", 5) == "abc"
    assert snippet("abcdefgh", 3) == "abc…(truncated)"
