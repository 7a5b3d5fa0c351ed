"""Tests for the HTTP API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from caltrack.api.app import create_app
from caltrack.containers import AppContainer
from caltrack.domain.recognition import DetectedFood
from caltrack.errors import RecognitionFailed

ONBOARDING = {
    "name": "Alex",
    "email": "alex@example.com",
    "age": 30,
    "sex": "male",
    "height_cm": 175,
    "weight_kg": 70,
    "activity_level": "sedentary",
    "goal": "maintain_weight",
}

OATMEAL = {
    "name": "Oatmeal",
    "calories": 150,
    "protein_g": 5,
    "carbs_g": 27,
    "fat_g": 3,
    "serving_size": 40,
    "servings": 2,
    "meal_type": "breakfast",
    "timestamp": "2024-03-15T08:00:00Z",
}


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_session_starts_in_onboarding_with_default_targets(client: TestClient) -> None:
    session = client.get("/session").json()
    targets = client.get("/profile/targets").json()

    assert session["is_onboarding"] is True
    assert session["timezone"] == "UTC"
    assert targets["is_default"] is True
    assert targets["targets"]["calories"] == 2000
    assert client.get("/profile").status_code == 404


def test_onboarding_computes_targets(client: TestClient) -> None:
    response = client.post("/profile/onboarding", json=ONBOARDING)

    assert response.status_code == 201
    targets = response.json()["targets"]
    assert targets["calories"] == pytest.approx(2034.8004)
    assert targets["protein_g"] == pytest.approx(112)
    assert client.get("/session").json()["is_onboarding"] is False
    assert client.get("/profile/targets").json()["is_default"] is False


def test_onboarding_validation(client: TestClient) -> None:
    response = client.post("/profile/onboarding", json={**ONBOARDING, "age": -1})

    assert response.status_code == 422


def test_update_profile_requires_onboarding(client: TestClient) -> None:
    response = client.put("/profile", json=ONBOARDING)

    assert response.status_code == 404


def test_entry_lifecycle(client: TestClient) -> None:
    created = client.post("/entries", json=OATMEAL)
    assert created.status_code == 201
    entry = created.json()
    assert entry["quantity"] == pytest.approx(80)
    assert entry["totals"]["calories"] == pytest.approx(300)

    copy = client.post(f"/entries/{entry['id']}/duplicate").json()
    assert copy["id"] != entry["id"]
    assert copy["timestamp"] == entry["timestamp"]

    edited = client.put(
        f"/entries/{entry['id']}", json={**OATMEAL, "servings": 1}
    ).json()
    assert edited["totals"]["calories"] == pytest.approx(150)

    assert client.delete(f"/entries/{entry['id']}").status_code == 204
    assert client.get(f"/entries/{entry['id']}").status_code == 404


def test_missing_entry_is_404(client: TestClient) -> None:
    response = client.post(f"/entries/{uuid4()}/duplicate")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_diary_groups_and_clears(client: TestClient) -> None:
    client.post("/entries", json=OATMEAL)
    client.post(
        "/entries",
        json={**OATMEAL, "name": "Steak", "meal_type": "dinner",
              "timestamp": "2024-03-15T19:00:00Z"},
    )

    diary = client.get("/diary/2024-03-15").json()

    assert [meal["meal_type"] for meal in diary["meals"]] == ["breakfast", "dinner"]
    assert diary["totals"]["calories"] == pytest.approx(600)
    assert diary["progress"]["calories"] == pytest.approx(0.3)

    assert client.delete("/diary/2024-03-15").json() == {"removed": 2}
    assert client.get("/diary/2024-03-15").json()["meals"] == []


def test_log_detected_candidate(client: TestClient) -> None:
    candidate = client.get("/foods/barcode/4006381333931").json()

    response = client.post(
        "/entries/detected",
        json={"candidate": candidate, "servings": 2, "meal_type": "snack"},
    )

    assert response.status_code == 201
    assert response.json()["barcode"] == "4006381333931"
    assert response.json()["totals"]["calories"] == pytest.approx(300)


def test_food_search_and_log_by_weight(client: TestClient) -> None:
    result = client.get("/foods/search", params={"q": "apple"}).json()
    food = result["parsed"][0]
    assert food["foodId"] == "food_apple"
    assert food["nutrients"]["ENERC_KCAL"] == 52

    response = client.post(
        "/entries/food-item",
        json={"food": food, "grams": 200, "meal_type": "snack"},
    )

    assert response.json()["totals"]["calories"] == pytest.approx(104)


def test_blank_search_is_400(client: TestClient) -> None:
    response = client.get("/foods/search", params={"q": "  "})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid search query"}


def test_recognize_food(client: TestClient) -> None:
    response = client.post("/foods/recognize", content=b"\xff\xd8\xff")

    assert response.status_code == 200
    assert response.json()["name"] == "Grilled Chicken Salad"
    assert len(response.json()["alternatives"]) == 2


def test_recognize_requires_image(client: TestClient) -> None:
    assert client.post("/foods/recognize", content=b"").status_code == 422


class _BrokenRecognizer:
    async def recognize(self, image: bytes) -> DetectedFood:
        raise RecognitionFailed("Recognition returned a bad candidate")


def test_failed_recognition_is_502(container: AppContainer) -> None:
    container.recognition_provider = _BrokenRecognizer()
    client = TestClient(create_app(container))

    response = client.post("/foods/recognize", content=b"\xff\xd8\xff")

    assert response.status_code == 502
    assert response.json() == {"detail": "Recognition returned a bad candidate"}


def test_today_and_insights(client: TestClient) -> None:
    client.post("/entries", json={**OATMEAL, "timestamp": None})

    today = client.get("/insights/today").json()
    report = client.get("/insights", params={"range": "week"}).json()
    lifetime = client.get("/insights/lifetime").json()

    assert today["totals"]["calories"] == pytest.approx(300)
    assert today["remaining"]["calories"] == pytest.approx(1700)
    assert report["current_streak"] == 1
    assert report["series"][0]["value"] == pytest.approx(300)
    assert report["highlights"]["favorite_food"] == {"name": "Oatmeal", "count": 1}
    assert lifetime["total_entries"] == 1


def test_recipes(client: TestClient) -> None:
    created = client.post(
        "/recipes",
        json={
            "name": "Chili",
            "servings": 4,
            "ingredients": [
                {"name": "Beef", "amount": 500, "calories": 1250,
                 "protein_g": 130, "carbs_g": 0, "fat_g": 80},
                {"name": "Beans", "amount": 400, "calories": 350,
                 "protein_g": 22, "carbs_g": 60, "fat_g": 2},
            ],
        },
    )
    assert created.status_code == 201
    recipe = created.json()
    assert recipe["per_serving"]["calories"] == pytest.approx(400)

    favorite = client.put(
        f"/recipes/{recipe['id']}/favorite", json={"is_favorite": True}
    )
    assert favorite.status_code == 204
    assert client.get("/recipes").json()["recipes"][0]["is_favorite"] is True

    logged = client.post(
        f"/recipes/{recipe['id']}/log", json={"servings": 2, "meal_type": "dinner"}
    )
    assert logged.json()["totals"]["calories"] == pytest.approx(800)

    assert client.delete(f"/recipes/{recipe['id']}").status_code == 204
    assert client.get("/recipes").json() == {"recipes": []}


def test_settings(client: TestClient) -> None:
    assert client.put(
        "/settings/timezone", json={"timezone": "Europe/Berlin"}
    ).status_code == 200
    assert client.get("/session").json()["timezone"] == "Europe/Berlin"

    assert client.put(
        "/settings/timezone", json={"timezone": "Nowhere/Special"}
    ).status_code == 422
    assert client.put("/settings/units", json={"units": "furlongs"}).status_code == 422

    assert client.get("/session").json()["units"] == "metric"
    assert client.put("/settings/units", json={"units": "imperial"}).json() == {
        "units": "imperial"
    }
    assert client.get("/session").json()["units"] == "imperial"
