from codel.services import game_service as game_service_module
from codel.services.catalog import PuzzleCatalog
from codel.services.game_service import GameService


def new_game(client, **payload):
    response = client.post("/api/new_game", json=payload)
    assert response.status_code == 200
    return response.get_json()["game_id"]


def test_new_game_defaults_to_bug_mode(client):
    response = client.post("/api/new_game", json={})
    data = response.get_json()
    assert response.status_code == 200
    assert data["success"]
    assert data["state"]["game_mode"] == "bug"
    assert data["state"]["level"] == 1
    assert data["state"]["answer"] is None


def test_new_game_rejects_unknown_mode(client):
    response = client.post("/api/new_game", json={"game_mode": "wordle"})
    assert response.status_code == 400
    assert not response.get_json()["success"]


def test_new_game_rejects_non_integer_level(client):
    response = client.post("/api/new_game", json={"game_mode": "bug", "level": "two"})
    assert response.status_code == 400


def test_new_game_at_level(client):
    game_id = new_game(client, game_mode="bug", level=3)
    state = client.get(f"/api/game/{game_id}/state").get_json()["state"]
    assert state["level"] == 3
    assert state["puzzle"]["title"] == "Third"


def test_state_of_unknown_game(client):
    response = client.get("/api/game/nope/state")
    assert response.status_code == 404


def test_bug_guess_round_trip(client):
    game_id = new_game(client, game_mode="bug")

    response = client.post(f"/api/game/{game_id}/guess", json={"line": "1", "fix": "wrong"})
    state = response.get_json()["state"]
    assert response.status_code == 200
    assert state["tries_left"] == 5
    assert state["guesses"][0]["line_correct"] is False

    response = client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "if(i==1)"})
    state = response.get_json()["state"]
    assert state["won"]
    assert state["status"] == "won"
    assert state["can_advance"]
    assert state["answer"]["key_fixes"] == ["if(i==1)"]


def test_blocked_guess_returns_400(client):
    game_id = new_game(client, game_mode="bug")
    response = client.post(f"/api/game/{game_id}/guess", json={"line": 0, "fix": "x"})
    assert response.status_code == 400
    assert "Line number" in response.get_json()["error"]

    response = client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "   "})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Fix is required"

    state = client.get(f"/api/game/{game_id}/state").get_json()["state"]
    assert state["tries_left"] == 6


def test_guess_after_game_over_returns_400(client):
    game_id = new_game(client, game_mode="bug")
    client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "if(i==1)"})
    response = client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "if(i==1)"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Game is already over"


def test_guess_on_unknown_game(client):
    response = client.post("/api/game/nope/guess", json={"code": "x"})
    assert response.status_code == 404


def test_completion_guess(client):
    game_id = new_game(client, game_mode="complete")
    response = client.post(f"/api/game/{game_id}/guess", json={"code": "function f(x){\nreturn x*2\n}"})
    feedback = response.get_json()["state"]["feedback"]
    assert [item["status"] for item in feedback[-1]] == ["correct", "absent", "correct"]


def test_completion_exhaustion(client):
    game_id = new_game(client, game_mode="complete")
    for attempt in range(6):
        response = client.post(f"/api/game/{game_id}/guess", json={"code": f"line {attempt}"})
    state = response.get_json()["state"]
    assert state["game_over"]
    assert not state["won"]
    assert state["answer"]["lines"] == ["function f(x){", "return x*2;", "}"]


def test_hint_routes(client):
    game_id = new_game(client, game_mode="bug")
    state = client.post(f"/api/game/{game_id}/hint").get_json()["state"]
    assert state["hints"] == ["Assignment or comparison?"]
    state = client.post(f"/api/game/{game_id}/hint/reset").get_json()["state"]
    assert state["hints"] == []


def test_advance_and_retry_routes(client):
    game_id = new_game(client, game_mode="bug")

    state = client.post(f"/api/game/{game_id}/advance").get_json()["state"]
    assert state["level"] == 1

    client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "if(i==1)"})
    state = client.post(f"/api/game/{game_id}/advance").get_json()["state"]
    assert state["level"] == 2
    assert state["status"] == "in_progress"

    client.post(f"/api/game/{game_id}/guess", json={"line": 1, "fix": "wrong"})
    state = client.post(f"/api/game/{game_id}/retry").get_json()["state"]
    assert state["level"] == 2
    assert state["guesses"] == []


def test_last_level_cannot_advance(client):
    game_id = new_game(client, game_mode="bug", level=3)
    state = client.post(f"/api/game/{game_id}/guess", json={"line": 2, "fix": "if(i==1)"}).get_json()["state"]
    assert state["all_levels_complete"]
    assert not state["can_advance"]
    state = client.post(f"/api/game/{game_id}/advance").get_json()["state"]
    assert state["level"] == 3


def test_transition_on_unknown_game(client):
    assert client.post("/api/game/nope/hint").status_code == 404
    assert client.post("/api/game/nope/retry").status_code == 404


def test_delete_game(client):
    game_id = new_game(client, game_mode="complete")
    assert client.delete(f"/api/game/{game_id}").get_json() == {"success": True}
    assert client.get(f"/api/game/{game_id}/state").status_code == 404
    assert client.delete(f"/api/game/{game_id}").status_code == 404


def test_levels(client):
    data = client.get("/api/levels").get_json()
    assert [level["title"] for level in data["levels"]] == ["First", "Second", "Third"]
    data = client.get("/api/levels?game_mode=complete").get_json()
    assert [level["title"] for level in data["levels"]] == ["Double"]
    assert client.get("/api/levels?game_mode=nope").status_code == 400


def test_health(client):
    data = client.get("/api/health").get_json()
    assert data["status"] == "healthy"
    assert data["bug_levels"] == 3
    assert data["completion_levels"] == 1


def test_service_unavailable(client, monkeypatch):
    monkeypatch.setattr(game_service_module, "_game_service", None)
    response = client.post("/api/new_game", json={"game_mode": "bug"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "Game service unavailable"


def test_new_game_for_mode_without_levels(client, make_bug_puzzle, monkeypatch):
    service = GameService(PuzzleCatalog([make_bug_puzzle()], []))
    monkeypatch.setattr(game_service_module, "_game_service", service)
    response = client.post("/api/new_game", json={"game_mode": "complete"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "No levels available for mode complete"
    assert service.games == {}
