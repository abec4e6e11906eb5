"""Tests for the HTTP and WebSocket adapters."""

import pytest

from fairmines import main


def safe_tiles(rnd):
    return [i for i in range(25) if i not in rnd.mine_positions]


class TestHealthAndBalance:
    """Test simple read endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_balance(self, client):
        response = client.get("/balance")
        assert response.status_code == 200
        assert response.json() == {"balance": 1000.0}

    def test_run_serves_app_with_uvicorn(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        main.run()
        assert calls == [("fairmines.main:app", {
            "host": main.settings.host,
            "port": main.settings.port,
            "log_level": main.settings.log_level.lower(),
        })]


class TestRoundEndpoints:
    """Test the round state machine over HTTP."""

    def test_start_round(self, client):
        response = client.post("/round/start", json={"bet": 10, "mines": 3, "house_edge": 3, "client_seed": "abc"})
        assert response.status_code == 200
        body = response.json()
        assert body["client_seed"] == "abc"
        assert body["nonce"] == 1
        assert body["balance"] == pytest.approx(990.0)
        assert "server_seed" not in body

    def test_start_round_without_body_uses_defaults(self, client):
        response = client.post("/round/start")
        assert response.status_code == 200
        assert response.json()["mines"] == 3

    def test_insufficient_balance(self, client):
        response = client.post("/round/start", json={"bet": 1_000_000})
        assert response.status_code == 402
        assert response.json()["error"] == "insufficient_balance"

    def test_double_start_conflict(self, client):
        client.post("/round/start", json={"bet": 1})
        response = client.post("/round/start", json={"bet": 1})
        assert response.status_code == 409
        assert response.json()["error"] == "illegal_state_transition"

    def test_reveal_and_cash_out(self, client, controller):
        client.post("/round/start", json={"bet": 10, "mines": 5, "house_edge": 0})
        tile = safe_tiles(controller.round)[0]

        reveal = client.post("/round/reveal", json={"index": tile})
        assert reveal.status_code == 200
        assert reveal.json()["outcome"] == "safe"
        assert reveal.json()["multiplier"] == pytest.approx(25 / 20)

        settle = client.post("/round/cashout")
        assert settle.status_code == 200
        body = settle.json()
        assert body["payout"] == pytest.approx(12.5)
        assert body["reveal"]["server_seed"] == controller.round.server_seed

    def test_cash_out_without_reveals(self, client):
        client.post("/round/start", json={"bet": 1})
        response = client.post("/round/cashout")
        assert response.status_code == 409

    def test_reveal_mine_then_reveal_again(self, client, controller):
        client.post("/round/start", json={"bet": 1, "mines": 3})
        mine = min(controller.round.mine_positions)
        response = client.post("/round/reveal", json={"index": mine})
        assert response.json()["outcome"] == "mine"
        assert response.json()["status"] == "busted"

        again = client.post("/round/reveal", json={"index": safe_tiles(controller.round)[0]})
        assert again.status_code == 409

    def test_reveal_off_board_is_validation_error(self, client):
        client.post("/round/start", json={"bet": 1})
        response = client.post("/round/reveal", json={"index": 25})
        assert response.status_code == 422

    def test_verify_before_settlement(self, client):
        client.post("/round/start", json={"bet": 1})
        response = client.get("/round/verify")
        assert response.status_code == 409

    def test_verify_after_settlement(self, client, controller):
        client.post("/round/start", json={"bet": 1, "mines": 3})
        client.post("/round/reveal", json={"index": min(controller.round.mine_positions)})
        response = client.get("/round/verify")
        assert response.status_code == 200
        assert response.json()["verified"] is True

    def test_state_and_next(self, client, controller):
        assert client.get("/round/state").json()["status"] == "idle"
        client.post("/round/start", json={"bet": 1, "mines": 3})
        assert client.get("/round/state").json()["status"] == "active"
        assert client.post("/round/next").status_code == 409
        client.post("/round/reveal", json={"index": min(controller.round.mine_positions)})
        assert client.post("/round/next").json()["status"] == "idle"


class TestFairnessEndpoints:
    """Test stateless verification and odds."""

    def test_independent_verification(self, client, controller):
        client.post("/round/start", json={"bet": 1, "mines": 6, "client_seed": "me"})
        rnd = controller.round
        client.post("/round/reveal", json={"index": min(rnd.mine_positions)})

        response = client.post("/fairness/verify", json={
            "server_seed": rnd.server_seed,
            "server_seed_hash": rnd.server_seed_hash,
            "client_seed": "me",
            "nonce": rnd.nonce,
            "mines": 6,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["commitment_valid"] is True
        assert body["mine_positions"] == sorted(rnd.mine_positions)
        assert sorted(body["tile_order"]) == list(range(25))

    def test_verification_detects_wrong_seed(self, client):
        response = client.post("/fairness/verify", json={
            "server_seed": "aa" * 32,
            "server_seed_hash": "bb" * 32,
            "client_seed": "x",
            "nonce": 1,
            "mines": 3,
        })
        assert response.json()["commitment_valid"] is False

    def test_odds(self, client):
        response = client.get("/fairness/odds", params={"mines": 24, "house_edge": 0})
        assert response.status_code == 200
        multipliers = response.json()["multipliers"]
        assert [m["safe_picks"] for m in multipliers] == [0, 1]
        assert multipliers[1]["multiplier"] == pytest.approx(25.0)


class TestWebSocket:
    """Test the event-driven round session."""

    def test_full_session(self, client, controller):
        with client.websocket_connect("/ws/round") as ws:
            assert ws.receive_json()["type"] == "state"

            ws.send_json({"type": "start", "bet": 5, "mines": 3, "house_edge": 3})
            start = ws.receive_json()
            assert start["type"] == "round_start"
            assert start["nonce"] == 1

            tile = safe_tiles(controller.round)[0]
            ws.send_json({"type": "reveal", "index": tile})
            event = ws.receive_json()
            assert event["type"] == "tile"
            assert event["outcome"] == "safe"

            ws.send_json({"type": "cashout"})
            end = ws.receive_json()
            assert end["type"] == "end"
            assert end["status"] == "cashed_out"
            assert end["reveal"]["server_seed"] == controller.round.server_seed

            ws.send_json({"type": "verify"})
            verify = ws.receive_json()
            assert verify["type"] == "verify"
            assert verify["verified"] is True

    def test_bust_emits_end(self, client, controller):
        with client.websocket_connect("/ws/round") as ws:
            ws.receive_json()
            ws.send_json({"type": "start", "bet": 1, "mines": 3})
            ws.receive_json()
            ws.send_json({"type": "reveal", "index": min(controller.round.mine_positions)})
            assert ws.receive_json()["outcome"] == "mine"
            end = ws.receive_json()
            assert end["type"] == "end"
            assert end["status"] == "busted"

    def test_errors_are_events(self, client):
        with client.websocket_connect("/ws/round") as ws:
            ws.receive_json()
            ws.send_json({"type": "cashout"})
            assert ws.receive_json()["error"] == "illegal_state_transition"

            ws.send_text("not json")
            assert ws.receive_json()["error"] == "bad_message"

            ws.send_json({"type": "dance"})
            assert ws.receive_json()["error"] == "unknown_command"

    def test_non_string_client_seed_starts_round(self, client, controller):
        with client.websocket_connect("/ws/round") as ws:
            ws.receive_json()
            ws.send_json({"type": "start", "bet": 1, "mines": 3, "client_seed": 12345})
            start = ws.receive_json()
            assert start["type"] == "round_start"
            assert len(start["client_seed"]) == 32
            assert controller.round.is_active

            ws.send_json({"type": "state"})
            assert ws.receive_json()["status"] == "active"
