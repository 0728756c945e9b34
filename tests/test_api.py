import pytest
from fastapi.testclient import TestClient

from hmm_tagger.api import index


@pytest.fixture
def client(monkeypatch, toy_model):
    monkeypatch.setattr(index, "model", toy_model)
    return TestClient(index.app)


@pytest.fixture
def empty_client(monkeypatch):
    monkeypatch.setattr(index, "model", None)
    return TestClient(index.app)


def test_home(client):
    assert client.get("/").json() == {"status": "OK"}


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["details"]["tags_available"] == 2


def test_health_without_model(empty_client):
    assert empty_client.get("/health").json()["status"] == "degraded"


def test_tag(client):
    response = client.post("/tag", json={"words": ["dog", "meows"]})
    assert response.status_code == 200
    assert response.json() == {"words": ["dog", "meows"], "tags": ["N", "V"]}


def test_tag_without_model(empty_client):
    assert empty_client.post("/tag", json={"words": ["dog"]}).status_code == 503


def test_accuracy(client):
    response = client.post("/accuracy", json={"sentences": ["dog/N barks/V", "cat/V meows/V"]})
    assert response.status_code == 200
    assert response.json() == {"accuracy": 0.75, "technique": "laplace"}


def test_accuracy_rejects_malformed_tokens(client):
    assert client.post("/accuracy", json={"sentences": ["dog barks/V"]}).status_code == 422


def test_model_info(client):
    assert client.get("/model").json() == {
        "best_technique": "laplace",
        "vocabulary_size": 4,
        "tags": ["N", "V"],
    }
