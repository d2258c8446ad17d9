import httpx
import pytest

from apiregistry.probe import ApiHealth, calculate_overall_health, check_api_health
from apiregistry.registry import ApiEntry


def _entry(provider: str, credential: str = "sk-test", **kwargs) -> ApiEntry:
    return ApiEntry(
        id=f"{provider}-id",
        name=provider,
        credential=credential,
        provider=provider,
        **kwargs,
    )


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_openai_health_lists_relevant_models():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/models"
        return httpx.Response(
            200,
            json={
                "data": [
                    {"id": "gpt-4o"},
                    {"id": "whisper-1"},
                    {"id": "text-embedding-3-small"},
                ],
            },
        )

    async with _client(handler) as client:
        health = await check_api_health(client, _entry("openai"))

    assert health.status == "success"
    assert health.details["available_models"] == [
        "gpt-4o",
        "text-embedding-3-small",
    ]
    assert health.response_time_ms is not None


@pytest.mark.asyncio
async def test_openai_health_error_status():
    async with _client(lambda r: httpx.Response(401)) as client:
        health = await check_api_health(client, _entry("openai"))
    assert health.status == "error"
    assert health.message == "OpenAI API returned 401"


@pytest.mark.asyncio
async def test_dataforseo_requires_login_password_format():
    async with _client(lambda r: httpx.Response(200)) as client:
        health = await check_api_health(client, _entry("dataforseo", "token"))
    assert health.status == "error"
    assert health.message == "Invalid format. Use: username:password"


@pytest.mark.asyncio
async def test_dataforseo_uses_basic_auth():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"].startswith("Basic ")
        return httpx.Response(200, json={"tasks": []})

    async with _client(handler) as client:
        health = await check_api_health(
            client,
            _entry("dataforseo", "me@example.com:secret"),
        )
    assert health.status == "success"
    assert health.details == {"username": "me@example.com"}


@pytest.mark.asyncio
async def test_network_error_is_reported_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    async with _client(handler) as client:
        health = await check_api_health(client, _entry("openai"))
    assert health.status == "error"
    assert "connection refused" in health.message


@pytest.mark.asyncio
async def test_inactive_and_unknown_apis_are_idle():
    async with _client(lambda r: httpx.Response(500)) as client:
        disabled = await check_api_health(
            client,
            _entry("openai", is_active=False),
        )
        custom = await check_api_health(client, _entry("semrush"))
    assert (disabled.status, disabled.message) == ("idle", "API is disabled")
    assert custom.status == "idle"


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], "critical"),
        (["success", "success"], "healthy"),
        (["success", "loading"], "degraded"),
        (["success", "error"], "critical"),
        (["success", "success", "error"], "degraded"),
        (["error", "error", "success"], "critical"),
        (["success", "idle"], "degraded"),
    ],
)
def test_calculate_overall_health(statuses, expected):
    states = {str(i): ApiHealth(status=s) for i, s in enumerate(statuses)}
    assert calculate_overall_health(states) == expected
