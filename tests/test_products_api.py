# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: test_products_api.py
# -----------------------------------------------------------------------------
import importlib
import uuid

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from api.AppContainer import AppContainer
from api.main import SECURITY_HEADERS, create_app
from fakes import FakeEmbedder, InMemoryProductStore
from product.errors import ProductConflictError


VECTORS = {
    "Illuminate your home with smart bulbs": [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
    "smart lighting": [0.8, 0.6, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
    "Ergonomic office chair": [0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0],
}


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder(VECTORS)


@pytest.fixture
def client(cfg, store, embedder):
    container = AppContainer(cfg, store=store, embedder=embedder)
    with TestClient(create_app(container)) as c:
        yield c


def _create(client, payload) -> dict:
    resp = client.post("/api/products", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_startup_initialises_store(client, store):
    assert store.initialized


def test_create_product_returns_201_envelope(client, product_payload):
    resp = client.post("/api/products", json=product_payload)

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["status"] == "success"
    assert uuid.UUID(body["data"]["id"])
    assert body["data"]["name"] == product_payload["name"]
    assert "descriptionVector" in body["data"]


def test_create_missing_field_returns_400_with_paths(client, store, product_payload):
    del product_payload["imageUrl"]
    product_payload["price"] = "cheap"

    resp = client.post("/api/products", json=product_payload)

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "error"
    assert {e["path"] for e in body["errors"]} == {"imageUrl", "price"}
    assert store.items == {}


def test_create_non_object_body_returns_400(client):
    resp = client.post("/api/products", json=["not", "an", "object"])
    assert resp.status_code == 400
    assert resp.json()["status"] == "error"


def test_create_embedding_failure_returns_generic_500(cfg, store, product_payload):
    embedder = FakeEmbedder(fail_on=[product_payload["features"]])
    container = AppContainer(cfg, store=store, embedder=embedder)

    with TestClient(create_app(container)) as c:
        resp = c.post("/api/products", json=product_payload)

    assert resp.status_code == 500
    assert resp.json() == {"status": "error", "message": "Internal Server Error"}
    assert store.items == {}


def test_create_conflict_returns_500(client, product_payload):
    product_payload["id"] = str(uuid.uuid4())
    _create(client, product_payload)

    resp = client.post("/api/products", json=product_payload)

    assert resp.status_code == 500
    assert resp.json()["message"] == "Internal Server Error"


def test_list_products(client, product_payload):
    _create(client, product_payload)

    resp = client.get("/api/products")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert not any(k.endswith("Vector") for k in data[0])


def test_get_product_round_trip(client, product_payload):
    created = _create(client, product_payload)

    resp = client.get(f"/api/products/{created['id']}")

    assert resp.status_code == 200
    data = resp.json()["data"]
    for key, value in product_payload.items():
        assert data[key] == value


def test_get_unknown_product_returns_404(client):
    resp = client.get(f"/api/products/{uuid.uuid4()}")

    assert resp.status_code == 404
    assert resp.json() == {"status": "error", "message": "Product not found"}


def test_get_malformed_id_returns_400_without_store_call(client, store):
    resp = client.get("/api/products/not-a-uuid")

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid product ID, should be a valid UUID"
    assert "get_by_id" not in store.calls


def test_search_description_scenario(client, product_payload):
    bulb = _create(client, product_payload)
    _create(client, {**product_payload, "description": "Ergonomic office chair", "tags": ["office"]})

    resp = client.post(
        "/api/products/search/description",
        json={"queryDescription": "smart lighting", "top": 1},
    )

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["id"] == bulb["id"]
    assert 0.0 < data[0]["similarityScore"] < 1.0


def test_search_tags_orders_by_score(client, product_payload):
    for tags in (["smart", "home"], ["garden"], ["smart", "lighting", "led"]):
        _create(client, {**product_payload, "tags": tags})

    resp = client.post("/api/products/search/tags", json={"queryTags": ["smart", "led"]})

    assert resp.status_code == 200
    scores = [r["similarityScore"] for r in resp.json()["data"]]
    assert len(scores) == 3
    assert scores == sorted(scores)


def test_search_features_top_is_respected(client, product_payload):
    for i in range(4):
        _create(client, {**product_payload, "features": f"feature {i}"})

    resp = client.post("/api/products/search/features", json={"queryFeatures": ["feature"], "top": 2})

    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 2


@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/products/search/tags", {"queryTags": "smart"}),
        ("/api/products/search/features", {"queryFeatures": [1, 2]}),
        ("/api/products/search/description", {"queryDescription": ["smart"]}),
    ],
)
def test_search_bad_input_returns_400(client, embedder, path, body):
    resp = client.post(path, json=body)

    assert resp.status_code == 400
    assert resp.json()["status"] == "error"
    assert resp.json()["errors"]
    assert embedder.calls == []


def test_health_endpoints(client):
    assert client.get("/health").json()["status"] == "ok"

    deep = client.get("/health/deep").json()
    assert deep["status"] == "ok"
    assert deep["results"] == {"cosmos_health": True, "embedding_health": True}


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["status"] == "error"


def test_store_failure_is_not_leaked(cfg, product_payload):
    class BrokenStore(InMemoryProductStore):
        async def list_all(self):
            raise ProductConflictError("secret-detail")

    container = AppContainer(cfg, store=BrokenStore(), embedder=FakeEmbedder())
    with TestClient(create_app(container)) as c:
        resp = c.get("/api/products")

    assert resp.status_code == 500
    assert "secret-detail" not in resp.text


def test_security_headers_on_success_and_error_responses(client):
    for resp in (client.get("/health"), client.get("/api/products/not-a-uuid")):
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value


def test_python_field_names_return_400(client, store, product_payload):
    product_payload["image_url"] = product_payload.pop("imageUrl")
    product_payload["reviews_count"] = product_payload.pop("reviewsCount")

    resp = client.post("/api/products", json=product_payload)

    assert resp.status_code == 400
    assert {e["path"] for e in resp.json()["errors"]} == {"imageUrl", "reviewsCount"}
    assert store.items == {}


def test_supplied_vector_of_wrong_dimension_returns_400(client, store, product_payload):
    product_payload["tags"] = []
    product_payload["tagsVector"] = [1.0]

    resp = client.post("/api/products", json=product_payload)

    assert resp.status_code == 400
    assert [e["path"] for e in resp.json()["errors"]] == ["tagsVector"]
    assert store.items == {}


def test_module_app_is_built_on_first_access(monkeypatch, cfg):
    main = importlib.import_module("api.main")
    built = []

    def container_factory():
        built.append(AppContainer(cfg, store=InMemoryProductStore(), embedder=FakeEmbedder()))
        return built[-1]

    monkeypatch.setattr(main, "AppContainer", container_factory)
    monkeypatch.delitem(vars(main), "app", raising=False)
    try:
        app = main.app
        assert isinstance(app, FastAPI)
        assert main.app is app
        assert len(built) == 1

        with TestClient(app) as c:
            assert c.get("/health").status_code == 200
    finally:
        vars(main).pop("app", None)
