"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from poultry_ration.api.app import create_app
from tests.conftest import InMemoryIngredientRepository, make_ingredient

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/health").status_code == 401
    assert (
        client.get("/admin/health", headers={"X-Admin-Token": "wrong"}).status_code
        == 401
    )
    assert client.get("/admin/health", headers=ADMIN_HEADERS).status_code == 200


def test_admin_catalog_endpoint(container) -> None:
    client = TestClient(create_app(container))
    repository = container.catalog_service.repository
    assert isinstance(repository, InMemoryIngredientRepository)
    repository.ingredients = [make_ingredient("Farine de poisson", 55)]

    response = client.get("/admin/catalog", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "augmented"
    roles = {item["name"]: item["role"] for item in data["ingredients"]}
    assert roles["Farine de poisson"] == "protein_source"
    assert roles["Maïs jaune"] == "energy_source"


def test_admin_requirements_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/admin/requirements",
        params={"breed": "Pondeuse", "stage": "ponte"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {
        "breed": "layer",
        "stage": "layer",
        "source": "default",
        "requirement": {
            "protein_percent": 16,
            "energy_kcal_per_kg": 2750,
            "daily_consumption_grams_per_bird": 110,
        },
    }


def test_admin_vocabulary_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/vocabulary", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == container.vocabulary.version
    assert "shell" in data["mineral_categories"]


def test_admin_vocabulary_lists_breed_and_stage_keywords(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/admin/vocabulary", headers=ADMIN_HEADERS).json()

    assert "pondeuse" in data["layer_breed_keywords"]
    assert "chair" in data["broiler_breed_keywords"]
    assert {"stage": "starter", "keywords": ["demarrage", "starter"]} in data[
        "stage_keywords"
    ]
    assert [group["stage"] for group in data["stage_keywords"]] == [
        stage.value for stage, _keywords in container.vocabulary.stage_keywords
    ]
