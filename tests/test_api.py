import json

from fastapi.testclient import TestClient

from recipe_api.framework.app import create_microservice
from recipe_api.recipes.db import make_engine, make_session_factory
from recipe_api.recipes.repository import RecipeRepository
from recipe_api.recipes.service import RecipeService


def create_recipe(client, payload):
    response = client.post("/recipes", json=payload)
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Recipe API is running!"
    assert body["timestamp"]


def test_create_recipe(client, nasi_goreng):
    response = client.post("/recipes", json=nasi_goreng)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Recipe created successfully"
    assert isinstance(body["data"]["id"], int)
    assert body["data"]["title"] == "Nasi Goreng"
    assert body["data"]["description"] is None
    assert body["data"]["created_at"] is not None
    assert body["timestamp"]


def test_create_accepts_json_encoded_arrays(client):
    response = client.post(
        "/recipes",
        json={
            "title": "Gado Gado",
            "ingredients": json.dumps(["tahu", "tempe"]),
            "instructions": '["rebus sayur", "siram bumbu"]',
        },
    )

    assert response.status_code == 201
    assert response.json()["data"]["ingredients"] == ["tahu", "tempe"]
    assert response.json()["data"]["instructions"] == ["rebus sayur", "siram bumbu"]


def test_create_rejects_plain_string_array(client):
    response = client.post(
        "/recipes",
        json={"title": "Gado Gado", "ingredients": "tahu", "instructions": ["rebus"]},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == ["ingredients must be an array"]


def test_create_lists_every_violation(client):
    response = client.post("/recipes", json={"title": "Hi", "ingredients": []})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_FAILED"
    assert body["errors"] == [
        "ingredients is required",
        "instructions is required",
        "Title must be at least 3 characters",
    ]
    assert body["path"] == "/recipes"
    assert body["timestamp"]


def test_create_ignores_client_id(client, nasi_goreng):
    data = create_recipe(client, {**nasi_goreng, "id": 500})

    assert data["id"] == 1


def test_invalid_json_body(client):
    response = client.post(
        "/recipes",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid JSON format"


def test_body_must_be_an_object(client):
    response = client.post("/recipes", json=["rice"])

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_INPUT"
    assert body["message"] == "Invalid request body"


def test_list_recipes(client, nasi_goreng):
    first = create_recipe(client, nasi_goreng)
    second = create_recipe(client, {**nasi_goreng, "title": "Mie Goreng"})

    response = client.get("/recipes")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Recipes retrieved successfully"
    assert [r["id"] for r in body["data"]] == [second["id"], first["id"]]


def test_get_recipe(client, nasi_goreng):
    created = create_recipe(client, nasi_goreng)

    response = client.get(f"/recipes/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"] == created


def test_get_missing_recipe(client):
    response = client.get("/recipes/999999")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Recipe not found"


def test_get_invalid_id(client):
    response = client.get("/recipes/abc")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid recipe ID"


def test_update_recipe(client, nasi_goreng):
    created = create_recipe(client, {**nasi_goreng, "description": "pedas"})

    response = client.put(
        f"/recipes/{created['id']}",
        json={"title": "Nasi Goreng Kampung", "ingredients": ["rice"], "instructions": ["fry"]},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["title"] == "Nasi Goreng Kampung"
    assert data["description"] is None
    assert data["ingredients"] == ["rice"]


def test_update_with_short_title(client, nasi_goreng):
    created = create_recipe(client, nasi_goreng)

    response = client.put(
        f"/recipes/{created['id']}",
        json={"title": "ab", "ingredients": ["x"], "instructions": ["y"]},
    )

    assert response.status_code == 400
    assert "Title must be at least 3 characters" in response.json()["errors"]


def test_update_missing_recipe(client, nasi_goreng):
    response = client.put("/recipes/42", json=nasi_goreng)

    assert response.status_code == 404


def test_update_invalid_id(client, nasi_goreng):
    response = client.put("/recipes/0", json=nasi_goreng)

    assert response.status_code == 400


def test_delete_recipe(client, nasi_goreng):
    created = create_recipe(client, nasi_goreng)

    response = client.delete(f"/recipes/{created['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Recipe deleted successfully"
    assert response.json()["data"] == created
    assert client.get(f"/recipes/{created['id']}").status_code == 404
    assert client.delete(f"/recipes/{created['id']}").status_code == 404


def test_unknown_route(client):
    response = client.get("/unknown-route")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Route not found"
    assert body["path"] == "/unknown-route"


def test_cors_preflight(client):
    response = client.options(
        "/recipes",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in response.headers["access-control-allow-methods"]


def test_trace_id_is_echoed(client):
    response = client.get("/recipes", headers={"X-Trace-ID": "trace-123"})

    assert response.headers["X-Trace-ID"] == "trace-123"


def test_trace_id_is_generated(client):
    response = client.get("/recipes")

    assert response.headers["X-Trace-ID"].startswith("LOCAL-")


def test_store_error_is_a_generic_failure():
    # no schema created, so every query fails
    engine = make_engine("sqlite://")
    service = RecipeService(RecipeRepository(make_session_factory(engine)))
    client = TestClient(create_microservice("recipes", service))

    response = client.get("/recipes")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "STORE_ERROR"
    assert body["message"] == "Failed to access recipe store"


def test_oversized_id_is_a_bad_request(client, nasi_goreng):
    path = "/recipes/99999999999999999999999"

    responses = [
        client.get(path),
        client.put(path, json=nasi_goreng),
        client.delete(path),
    ]

    for response in responses:
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid recipe ID"


def test_title_too_long(client, nasi_goreng):
    response = client.post("/recipes", json={**nasi_goreng, "title": "x" * 256})

    assert response.status_code == 400
    assert response.json()["errors"] == ["Title must be at most 255 characters"]
