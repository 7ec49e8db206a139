from __future__ import annotations

from subscriber_notebook.server.config import Settings


def test_defaults_match_original_deployment() -> None:
    s = Settings(_env_file=None)
    assert s.port == 5000
    assert s.client_url == "http://localhost:3000"
    assert s.char_duration_s == 0.2
    assert s.overlay_enabled is True


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("NOTEBOOK_PORT", "6100")
    monkeypatch.setenv("NOTEBOOK_CLIENT_URL", "https://overlay.example")
    monkeypatch.setenv("NOTEBOOK_OVERLAY_ENABLED", "false")

    s = Settings(_env_file=None)

    assert s.port == 6100
    assert s.client_url == "https://overlay.example"
    assert s.overlay_enabled is False


def test_env_file_is_read(tmp_path) -> None:
    env = tmp_path / ".env"
    env.write_text("NOTEBOOK_SESSION_TIMEOUT_S=0\nUNRELATED=1\n", encoding="utf-8")

    s = Settings(_env_file=env)

    assert s.session_timeout_s == 0.0
