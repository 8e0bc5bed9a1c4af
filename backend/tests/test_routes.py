"""Route tests with the database and current user replaced by fakes."""
import uuid

import pytest
from fastapi.testclient import TestClient

from fittrack.main import app
from fittrack.models.base import get_db, get_session_factory
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import get_now

from conftest import CREATED, at, make_meal, make_sleep, make_user, make_workout

NOW = at(2024, 3, 13, 20)


class FakeResult:
    def __init__(self, rows):
        self._rows = list(rows)

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None


class FakeSession:
    """Session stand-in that returns canned rows and assigns ids on flush."""

    def __init__(self, rows=()):
        self.rows = rows
        self.added = []

    async def execute(self, query):
        return FakeResult(self.rows)

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        for obj in self.added:
            for item in [obj, *getattr(obj, "foods", [])]:
                if item.id is None:
                    item.id = uuid.uuid4()
                if item.created_at is None:
                    item.created_at = CREATED

    async def refresh(self, obj):
        return None

    async def delete(self, obj):
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: (lambda: session)
    app.dependency_overrides[get_current_user] = lambda: make_user()
    app.dependency_overrides[get_now] = lambda: NOW
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestPublicEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_exercise_types(self, client):
        data = client.get("/api/workouts/exercise-types").json()

        assert len(data) == 11
        assert "6 mph" in data["running"]

    def test_common_foods(self, client):
        data = client.get("/api/meals/foods/common").json()
        assert len(data) == 15


class TestAuthRequired:
    def test_missing_token(self, session):
        async def override_get_db():
            yield session

        app.dependency_overrides[get_db] = override_get_db
        try:
            response = TestClient(app).get("/api/workouts")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 401


class TestWorkoutRoutes:
    """Tests for workout logging."""

    def test_create_computes_calories(self, client, session):
        response = client.post(
            "/api/workouts",
            json={"exercise_type": "running", "intensity": "6 mph", "duration_min": 30},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["calories_burned"] == 392
        assert body["exercise_type"] == "running"
        assert len(session.added) == 1

    def test_invalid_intensity_lists_available(self, client):
        response = client.post(
            "/api/workouts",
            json={"exercise_type": "yoga", "intensity": "extreme", "duration_min": 30},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["available_intensities"] == ["hatha", "power", "vinyasa"]

    def test_duration_out_of_range(self, client):
        response = client.post(
            "/api/workouts",
            json={"exercise_type": "running", "intensity": "6 mph", "duration_min": 0},
        )
        assert response.status_code == 422

    def test_missing_workout(self, client):
        assert client.get(f"/api/workouts/{uuid.uuid4()}").status_code == 404

    def test_stats_empty_period(self, client):
        body = client.get("/api/workouts/stats/summary?period=month").json()

        assert body["period"] == "month"
        assert body["summary"]["total_workouts"] == 0
        assert body["exercise_breakdown"] == []

    def test_stats_huge_day_count_rejected(self, client):
        assert client.get("/api/workouts/stats/summary?period=1000000").status_code == 400


class TestMealRoutes:
    def test_create_computes_totals(self, client):
        response = client.post(
            "/api/meals",
            json={
                "name": "Lunch",
                "meal_type": "lunch",
                "foods": [
                    {"name": "Rice", "quantity": 2, "unit": "serving", "calories": 130, "protein": 2.5},
                    {"name": "Chicken", "quantity": 1, "unit": "serving", "calories": 165, "protein": 31},
                ],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["total_calories"] == 425
        assert body["total_protein"] == 36
        assert [f["name"] for f in body["foods"]] == ["Rice", "Chicken"]

    def test_meal_needs_foods(self, client):
        response = client.post("/api/meals", json={"name": "Air", "meal_type": "snack", "foods": []})
        assert response.status_code == 422

    def test_daily_nutrition_empty(self, client):
        body = client.get("/api/meals/nutrition/daily?date=2024-03-13").json()

        assert body["date"] == "2024-03-13"
        assert body["meal_count"] == 0


class TestSleepRoutes:
    def test_end_before_start_rejected(self, client):
        response = client.post(
            "/api/sleep",
            json={"sleep_start": "2024-03-13T07:00:00Z", "sleep_end": "2024-03-12T23:00:00Z"},
        )
        assert response.status_code == 400

    def test_create_computes_duration(self, client):
        response = client.post(
            "/api/sleep",
            json={"sleep_start": "2024-03-12T23:00:00Z", "sleep_end": "2024-03-13T07:30:00Z"},
        )

        assert response.status_code == 201
        assert response.json()["duration_min"] == 510
        assert response.json()["is_healthy_duration"] is True


class TestUserAndProgressRoutes:
    def test_metrics(self, client):
        body = client.get("/api/user/metrics").json()

        assert body["bmi"] == 24.7
        assert body["bmi_category"] == "Normal weight"
        assert body["bmr"] == 1854
        assert body["daily_calories"] == 2874

    def test_calculate_bmi(self, client):
        body = client.post("/api/progress/calculate-bmi", json={"weight_kg": 70, "height_cm": 175}).json()

        assert body["bmi"] == 22.9
        assert body["category"] == "Normal weight"

    def test_measurements_default_to_thirty_days(self, client):
        body = client.get("/api/progress/measurements").json()

        assert body["days"] == 30
        assert body["chest"]["change"] == 0

    def test_create_progress_includes_bmi(self, client):
        response = client.post("/api/progress", json={"weight_kg": 78})

        assert response.status_code == 201
        assert response.json()["bmi"] == 24.1


class TestDashboardRoutes:
    """Tests for the dashboard and period stats."""

    def test_empty_dashboard(self, client):
        response = client.get("/api/dashboard?date=2024-03-13")

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == "2024-03-13"
        assert body["progress"]["current_weight"] == 80.0
        assert len(body["charts"]["weekly_calories"]) == 7
        assert body["charts"]["weekly_calories"][0]["date"] == "2024-03-10"

    def test_unknown_timezone(self, client):
        assert client.get("/api/dashboard?tz=Mars/Olympus").status_code == 400

    def test_stats_default_period(self, client):
        body = client.get("/api/dashboard/stats?period=fortnight").json()
        assert body["period"] == "month"

    def test_stats_zero_days_rejected(self, client):
        assert client.get("/api/dashboard/stats?period=0d").status_code == 400


class TestUpdateClearsNotes:
    """Sending null for notes clears them; null required fields are ignored."""

    def test_workout(self, client, session):
        workout = make_workout(at(2024, 3, 12))
        workout.notes = "felt slow"
        session.rows = [workout]

        response = client.put(f"/api/workouts/{workout.id}", json={"notes": None, "duration_min": None})

        assert response.status_code == 200
        assert response.json()["notes"] is None
        assert workout.duration_min == 30

    def test_meal(self, client, session):
        meal = make_meal(at(2024, 3, 12))
        meal.notes = "too salty"
        session.rows = [meal]

        response = client.put(f"/api/meals/{meal.id}", json={"notes": None, "name": None})

        assert response.status_code == 200
        assert meal.notes is None
        assert meal.name == response.json()["name"]

    def test_sleep(self, client, session):
        record = make_sleep(at(2024, 3, 12, 23), at(2024, 3, 13, 7))
        record.notes = "noisy street"
        session.rows = [record]

        response = client.put(f"/api/sleep/{record.id}", json={"notes": None})

        assert response.status_code == 200
        assert record.notes is None
        assert response.json()["duration_min"] == 480
