import pytest
from sqlalchemy.exc import OperationalError

from portfolio_rescue.db import get_session


class UnavailableSession:
    """Session whose every query fails as if the database went away."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    async def rollback(self):
        pass


@pytest.fixture()
def unavailable_db(app):
    async def override_get_session():
        yield UnavailableSession()

    app.dependency_overrides[get_session] = override_get_session


async def _create_user(client, username):
    response = await client.post("/api/users", json={"username": username})
    assert response.status_code == 200
    return response.json()


async def _save_result(client, user_id, final_value, is_winner, rounds_played=10):
    response = await client.post(
        "/api/game-results",
        json={
            "userId": user_id,
            "initialValue": 100_000_000,
            "finalValue": final_value,
            "roundsPlayed": rounds_played,
            "isWinner": is_winner,
        },
    )
    assert response.status_code == 200
    return response.json()


async def test_create_and_read_user(client):
    user = await _create_user(client, "alex")
    assert user["username"] == "alex"
    assert "createdAt" in user

    response = await client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["username"] == "alex"


async def test_duplicate_username(client):
    await _create_user(client, "alex")
    response = await client.post("/api/users", json={"username": "alex"})
    assert response.status_code == 409


async def test_missing_user(client):
    response = await client.get("/api/users/999")
    assert response.status_code == 404


async def test_save_game_result(client):
    user = await _create_user(client, "sam")
    stored = await _save_result(client, user["id"], 205_000_000.456, True, rounds_played=4)
    assert stored["userId"] == user["id"]
    assert stored["finalValue"] == 205_000_000.46
    assert stored["roundsPlayed"] == 4
    assert stored["isWinner"] is True
    assert "completedAt" in stored


async def test_malformed_game_result(client):
    user = await _create_user(client, "sam")
    response = await client.post(
        "/api/game-results",
        json={"userId": user["id"], "finalValue": "lots", "roundsPlayed": 10},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid game result data"}


async def test_game_result_without_body(client):
    response = await client.post("/api/game-results")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid game result data"}


async def test_game_result_with_invalid_json(client):
    response = await client.post(
        "/api/game-results",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid game result data"}


async def test_game_result_for_unknown_user(client):
    response = await client.post(
        "/api/game-results",
        json={
            "userId": 42,
            "initialValue": 100_000_000,
            "finalValue": 120_000_000,
            "roundsPlayed": 10,
            "isWinner": False,
        },
    )
    assert response.status_code == 400


async def test_leaderboard_lists_top_ten_winners(client):
    winner = await _create_user(client, "winner")
    loser = await _create_user(client, "loser")
    for i in range(12):
        await _save_result(client, winner["id"], 200_000_000 + i * 1_000_000, True)
    await _save_result(client, loser["id"], 500_000_000, False)

    response = await client.get("/api/leaderboard")
    assert response.status_code == 200
    entries = response.json()
    assert len(entries) == 10
    assert all(entry["result"]["isWinner"] for entry in entries)
    assert all(entry["user"]["username"] == "winner" for entry in entries)
    final_values = [entry["result"]["finalValue"] for entry in entries]
    assert final_values == sorted(final_values, reverse=True)
    assert final_values[0] == 211_000_000


async def test_empty_leaderboard(client):
    response = await client.get("/api/leaderboard")
    assert response.status_code == 200
    assert response.json() == []


async def test_user_history_most_recent_first(client):
    user = await _create_user(client, "kim")
    first = await _save_result(client, user["id"], 90_000_000, False)
    second = await _save_result(client, user["id"], 150_000_000, False)
    third = await _save_result(client, user["id"], 210_000_000, True, rounds_played=7)

    response = await client.get(f"/api/game-results/{user['id']}")
    assert response.status_code == 200
    assert [result["id"] for result in response.json()] == [third["id"], second["id"], first["id"]]


async def test_user_history_invalid_user_id(client):
    response = await client.get("/api/game-results/not-a-number")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID"}


async def test_leaderboard_storage_failure(client, unavailable_db):
    response = await client.get("/api/leaderboard")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch leaderboard"}


async def test_user_history_storage_failure(client, unavailable_db):
    response = await client.get("/api/game-results/1")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch game results"}


async def test_save_game_result_storage_failure(client, unavailable_db):
    response = await client.post(
        "/api/game-results",
        json={
            "userId": 1,
            "initialValue": 100_000_000,
            "finalValue": 120_000_000,
            "roundsPlayed": 10,
            "isWinner": False,
        },
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save game result"}
