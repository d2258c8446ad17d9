import httpx
import pytest
from fastapi.testclient import TestClient

from apiregistry.app import create_app
from apiregistry.config import Config
from apiregistry.registry import MemoryStore


@pytest.fixture
def app():
    async def call(model_id, prompt):
        if model_id == "broken":
            raise RuntimeError()
        return f"echo: {prompt}"

    return create_app(
        config=Config(),
        store=MemoryStore(),
        call_factory=lambda provider: call,
    )


@pytest.fixture
def client(app):
    return TestClient(app)


def test_api_crud_round(client, app):
    events = []
    app.state.bus.subscribe(events.append)

    resp = client.post(
        "/apis",
        json={"name": "OpenAI Prod", "credential": "sk-abcdefghijk"},
    )
    assert resp.status_code == 201
    created = resp.json()
    assert "credential" not in created
    assert created["masked_credential"] == "sk-*******hijk"
    api_id = created["id"]

    resp = client.put(f"/apis/{api_id}", json={"name": "OpenAI Prod v2"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "OpenAI Prod v2"

    listed = client.get("/apis").json()
    assert [a["name"] for a in listed] == ["OpenAI Prod v2"]
    assert client.get(f"/apis/{api_id}").json()["id"] == api_id

    assert client.delete(f"/apis/{api_id}").status_code == 204
    assert client.get("/apis").json() == []
    assert client.put(f"/apis/{api_id}", json={"name": "x"}).status_code == 404

    assert [e.action for e in events] == ["add", "update", "remove"]


def test_add_validation_error(client):
    resp = client.post("/apis", json={"name": "  ", "credential": "sk"})
    assert resp.status_code == 400
    assert client.get("/apis").json() == []


def test_remove_unknown(client):
    assert client.delete("/apis/ghost").status_code == 404


def test_model_test_success_and_state(client):
    assert client.get("/models/test").json()["status"] == "idle"

    resp = client.post(
        "/models/test",
        json={"provider": "openai", "model_id": "gpt-x", "prompt": "hello"},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    assert resp.json()["response"] == "echo: hello"


def test_model_test_uses_default_prompt(client):
    resp = client.post(
        "/models/test",
        json={"provider": "gemini", "model_id": "gemini-1.5-flash"},
    )
    assert resp.json()["response"] == f"echo: {Config().test_prompt}"


def test_model_test_failure(client):
    resp = client.post(
        "/models/test",
        json={"provider": "openai", "model_id": "broken", "prompt": "hi"},
    )
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Unknown error occurred"

    state = client.get("/models/test").json()
    assert state["status"] == "error"
    assert state["response"] == "Unknown error occurred"


def test_model_test_unknown_provider(client):
    resp = client.post(
        "/models/test",
        json={"provider": "nope", "model_id": "m", "prompt": "hi"},
    )
    assert resp.status_code == 404


def test_list_providers(client):
    ids = [p["id"] for p in client.get("/models").json()]
    assert ids == ["openai", "gemini"]


def test_health_report():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": [{"id": "gpt-4o"}]})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app = create_app(
        config=Config(),
        store=MemoryStore(),
        http_client=http_client,
    )
    registry = app.state.registry
    registry.add("OpenAI", "sk-1", provider="openai")
    registry.add("Off", "sk-2", provider="openai", is_active=False)

    report = TestClient(app).get("/apis/health").json()

    assert report["overall"] == "healthy"
    assert len(report["apis"]) == 1
    (health,) = report["apis"].values()
    assert health["details"]["available_models"] == ["gpt-4o"]
