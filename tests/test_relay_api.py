from __future__ import annotations

import pytest
from conftest import no_sleep
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from subscriber_notebook.server.app import create_app


@pytest.fixture
def client(quiet_settings):
    with TestClient(create_app(quiet_settings)) as c:
        yield c


def _hello(ws) -> None:
    assert ws.receive_json() == {"t": "hello"}


def test_health_is_static_ok(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.parametrize("path", ["/api/webhook", "/api/test-subscriber"])
def test_valid_username_is_broadcast_to_every_viewer(client, path) -> None:
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
        _hello(a)
        _hello(b)

        r = client.post(path, json={"username": "X"})

        assert r.status_code == 200
        assert r.json() == {"success": True}
        assert a.receive_json() == {"t": "new_subscriber", "username": "X"}
        assert b.receive_json() == {"t": "new_subscriber", "username": "X"}


@pytest.mark.parametrize("body", [{}, {"username": ""}, {"username": None}])
def test_missing_username_is_rejected_without_broadcast(client, body) -> None:
    with client.websocket_connect("/ws") as ws:
        _hello(ws)

        r = client.post("/api/webhook", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Username is required"}

        # the next event a viewer sees is the next valid one
        client.post("/api/webhook", json={"username": "Y"})
        assert ws.receive_json() == {"t": "new_subscriber", "username": "Y"}


def test_blank_username_is_relayed_as_is(client) -> None:
    with client.websocket_connect("/ws") as ws:
        _hello(ws)

        r = client.post("/api/webhook", json={"username": "   "})

        assert r.status_code == 200
        assert r.json() == {"success": True}
        assert ws.receive_json() == {"t": "new_subscriber", "username": "   "}


def test_blank_username_adds_no_line(overlay_settings) -> None:
    with TestClient(create_app(overlay_settings, sleep=no_sleep)) as client:
        r = client.post("/api/webhook", json={"username": " \n  "})

        assert r.status_code == 200
        overlay = client.app.state.overlay
        assert overlay.state.board.texts() == [""] * 14
        assert not overlay.state.busy
        assert len(overlay.state.queue) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"content": b"not json", "headers": {"Content-Type": "application/json"}},
        {"json": {"username": 42}},
        {"json": ["Ryuk"]},
    ],
)
def test_malformed_body_gets_stable_client_error(client, kwargs) -> None:
    r = client.post("/api/webhook", **kwargs)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}


def test_unexpected_failure_is_reported_as_internal_error(client) -> None:
    async def boom(msg, exclude=None):
        raise RuntimeError("socket layer exploded")

    client.app.state.relay.broadcast = boom

    r = client.post("/api/webhook", json={"username": "X"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_late_viewer_gets_no_history(client) -> None:
    client.post("/api/webhook", json={"username": "early"})

    with client.websocket_connect("/ws") as ws:
        _hello(ws)
        client.post("/api/webhook", json={"username": "late"})
        assert ws.receive_json() == {"t": "new_subscriber", "username": "late"}


def test_viewer_disconnect_removes_client(client) -> None:
    relay = client.app.state.relay
    with client.websocket_connect("/ws") as ws:
        _hello(ws)
        assert len(relay.clients) == 1
    client.post("/api/webhook", json={"username": "after"})
    assert len(relay.clients) == 0


class UnsendableHello:
    def model_dump(self):
        raise RuntimeError("viewer went away before the greeting")


def test_viewer_lost_during_greeting_is_not_kept(client, monkeypatch) -> None:
    monkeypatch.setattr("subscriber_notebook.server.app.Hello", UnsendableHello)
    relay = client.app.state.relay

    with client.websocket_connect("/ws"):
        pass

    assert len(relay.clients) == 0
    # later broadcasts do not trip over the dropped viewer
    r = client.post("/api/webhook", json={"username": "after"})
    assert r.status_code == 200


def test_foreign_origin_is_refused(client) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws", headers={"origin": "http://evil.example"}) as ws:
            ws.receive_json()


def test_configured_origin_is_accepted(client) -> None:
    with client.websocket_connect("/ws", headers={"origin": "http://localhost:3000"}) as ws:
        _hello(ws)


def test_snapshot_requires_overlay(client) -> None:
    assert client.get("/snapshot.png").status_code == 404


def test_viewer_page_points_at_relay(client) -> None:
    r = client.get("/viewer")
    assert r.status_code == 200
    assert '"http://localhost:5000"' in r.text
    assert "new WebSocket" in r.text


def test_overlay_writes_relayed_name(overlay_settings) -> None:
    with TestClient(create_app(overlay_settings, sleep=no_sleep)) as client:
        with client.websocket_connect("/ws") as ws:
            _hello(ws)
            client.post("/api/test-subscriber", json={"username": "Ryuk"})

            assert ws.receive_json() == {"t": "new_subscriber", "username": "Ryuk"}
            seen = []
            while True:
                msg = ws.receive_json()
                seen.append(msg)
                if msg["t"] == "strike":
                    break

        texts = [m["text"] for m in seen if m["t"] == "line_text"]
        assert texts == ["R", "Ry", "Ryu", "Ryuk"]
        assert seen[-1] == {"t": "strike", "line": 0, "duration": 1.5}

        overlay = client.app.state.overlay
        r = client.get("/snapshot.png")
        assert r.status_code == 200
        assert r.headers["content-type"] == "image/png"
        assert r.content.startswith(b"\x89PNG\r\n\x1a\n")
        assert overlay.state.board.slot(0).text == "Ryuk"
