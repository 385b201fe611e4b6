import json
from datetime import datetime, timedelta, timezone

from authservice.auth.jwt import TokenService
from authservice.auth.models import Role
from authservice.base_service import BaseService, base_service


def test_mcp_response_envelope():
    response = base_service.mcp_response(data={"a": 1}, message="done")
    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "ok", "message": "done", "data": {"a": 1}}


def test_envelope_dict():
    assert BaseService().envelope(message="hi") == {"status": "ok", "message": "hi", "data": None}


def test_log_event_and_error(caplog):
    with caplog.at_level("INFO", logger="authservice"):
        record = base_service.log_event("pytest_log_event", {"foo": "bar"})
        assert record["event"] == "pytest_log_event"
        assert any("pytest_log_event" in m for m in caplog.text.splitlines())
    with caplog.at_level("ERROR", logger="authservice"):
        try:
            raise ValueError("test error")
        except Exception as e:
            record = base_service.log_error(e, context="pytest")
        assert record["error_type"] == "ValueError"
        assert any("test error" in m for m in caplog.text.splitlines())


def test_rejections_are_logged_with_reason(client, caplog):
    with caplog.at_level("INFO", logger="authservice"):
        client.get("/admin")
        client.get("/admin", headers={"Authorization": "Basic abc"})
        client.get("/admin", headers={"Authorization": "Bearer not.a.token"})
    assert '"reason": "missing"' in caplog.text
    assert '"reason": "malformed"' in caplog.text
    assert '"reason": "invalid"' in caplog.text


def test_passwords_never_logged(client, caplog):
    with caplog.at_level("DEBUG", logger="authservice"):
        client.post("/register", json={"identifier": "alice", "password": "hunter2-unique"})
        client.post("/login", json={"identifier": "alice", "password": "hunter2-unique"})
        client.post("/login", json={"identifier": "alice", "password": "wrong-unique"})
    assert "hunter2-unique" not in caplog.text
    assert "wrong-unique" not in caplog.text


def test_expired_token_rejection_is_logged(client, settings, caplog):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    expired = TokenService(settings, clock=lambda: past).issue("root", Role.ADMIN)
    with caplog.at_level("INFO", logger="authservice"):
        response = client.get("/admin", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert '"reason": "expired"' in caplog.text
