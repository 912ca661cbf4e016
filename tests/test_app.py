"""
Tests for the FastAPI application.

The lifespan is not run; a MemoryService over an in-memory store is
installed directly.
"""

import base64
import json

import pytest
from fastapi.testclient import TestClient

import app as app_module
from lifelog.services.memory_service import MemoryService
from lifelog.utils.exceptions import TransportError


@pytest.fixture
def client(monkeypatch, store, registry, config):
    monkeypatch.setattr(
        app_module, "service", MemoryService(store=store, registry=registry, config=config)
    )
    return TestClient(app_module.app)


def _add(client, **body):
    response = client.post("/memories", json=body)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.unit
class TestBasics:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["service_initialized"] is True
        assert response.json()["record_store"] == "InMemoryRecordStore"

    def test_not_initialized(self, monkeypatch):
        monkeypatch.setattr(app_module, "service", None)

        response = TestClient(app_module.app).get("/memories")

        assert response.status_code == 503

    def test_models(self, client):
        models = client.get("/models").json()

        by_id = {m["id"]: m for m in models}
        assert by_id["gemini-2.5-flash"]["provider_class"] == "native"
        assert by_id["deepseek-chat"]["provider_class"] == "generic"


@pytest.mark.unit
class TestMemoryEndpoints:
    def test_add_and_list(self, client):
        created = _add(client, content="First note")

        listed = client.get("/memories").json()

        assert [m["id"] for m in listed] == [created["id"]]
        assert listed[0]["has_media"] is False

    def test_add_media_and_fetch_blob(self, client):
        payload = base64.b64encode(b"png-bytes").decode()
        created = _add(
            client, media_type="IMAGE", media_base64=payload, media_mime_type="image/png"
        )

        response = client.get(f"/memories/{created['id']}/media")

        assert response.status_code == 200
        assert response.content == b"png-bytes"
        assert response.headers["content-type"] == "image/png"

    def test_empty_memory_rejected(self, client):
        response = client.post("/memories", json={"content": ""})
        assert response.status_code == 400

    def test_invalid_base64_rejected(self, client):
        response = client.post(
            "/memories", json={"media_type": "IMAGE", "media_base64": "not base64!"}
        )
        assert response.status_code == 400

    def test_missing_memory(self, client):
        assert client.get("/memories/mem_missing").status_code == 404
        assert client.delete("/memories/mem_missing").status_code == 404

    def test_text_memory_has_no_media(self, client):
        created = _add(client, content="only text")
        assert client.get(f"/memories/{created['id']}/media").status_code == 404

    def test_delete(self, client):
        created = _add(client, content="bye")

        response = client.delete(f"/memories/{created['id']}")

        assert response.json() == {"id": created["id"], "deleted": True}
        assert client.get("/memories").json() == []


@pytest.mark.unit
class TestModelEndpoints:
    def test_analyze_generic(self, client):
        created = _add(client, content="Dinner")

        response = client.post(
            f"/memories/{created['id']}/analysis",
            json={
                "model_id": "deepseek-chat",
                "model_configs": [{"model_id": "deepseek-chat", "api_key": "sk-1"}],
                "locale": "en",
            },
        )

        assert response.status_code == 200
        analysis = response.json()["ai_analysis"]
        assert analysis["analyzed_by_model"] == "deepseek-chat"
        assert analysis["summary"].endswith("Language: en")

    def test_analyze_without_key(self, client):
        created = _add(client, content="Dinner")

        response = client.post(
            f"/memories/{created['id']}/analysis", json={"model_id": "deepseek-chat"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Please configure API Key for deepseek-chat"

    def test_transport_failure_is_502(self, client, patch_transport):
        patch_transport(error=TransportError("quota exceeded"))
        created = _add(client, content="Dinner")

        response = client.post(
            f"/memories/{created['id']}/analysis", json={"model_id": "gemini-2.5-flash"}
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "Could not complete the request"

    def test_edit_summary(self, client):
        created = _add(client, content="Dinner")
        client.post(
            f"/memories/{created['id']}/analysis",
            json={
                "model_id": "qwen-max",
                "model_configs": [{"model_id": "qwen-max", "api_key": "k"}],
            },
        )

        response = client.put(
            f"/memories/{created['id']}/analysis/summary", json={"summary": "Mine"}
        )

        assert response.json()["ai_analysis"]["summary"] == "Mine"
        assert response.json()["ai_analysis"]["analyzed_by_model"] == "qwen-max"

    def test_chat(self, client, patch_transport):
        created = _add(client, content="Met Lin")
        patch_transport([f"You met Lin [[ID:{created['id']}]]"])

        response = client.post(
            "/chat", json={"model_id": "gemini-2.5-flash", "query": "Who did I meet?"}
        )

        body = response.json()
        assert body["cited_ids"] == [created["id"]]
        assert body["segments"][1] == {
            "memory_id": created["id"],
            "raw": f"[[ID:{created['id']}]]",
            "resolved": True,
        }

    def test_graph(self, client, patch_transport):
        first = _add(client, content="Beach")
        second = _add(client, content="Seafood")
        patch_transport(
            [
                json.dumps(
                    {
                        "nodes": [{"id": first["id"]}, {"id": second["id"]}],
                        "links": [{"source": first["id"], "target": second["id"]}],
                    }
                )
            ]
        )

        response = client.post("/graph", json={"model_id": "gemini-2.5-flash"})

        body = response.json()
        assert body["insufficient_data"] is False
        assert len(body["positions"]) == 2
        assert body["graph"]["links"][0]["reason"] == ""

    def test_graph_generic_is_insufficient(self, client):
        _add(client, content="Beach")

        response = client.post(
            "/graph",
            json={
                "model_id": "glm-4",
                "model_configs": [{"model_id": "glm-4", "api_key": "k"}],
            },
        )

        assert response.json()["insufficient_data"] is True
