"""
Tests for application wiring: error shapes, request logging, static
serving and settings.
"""
from __future__ import annotations

import importlib
import logging
import re

import pytest
from fastapi.testclient import TestClient

from date_planner_api.app.core import config
from date_planner_api.app.core.config import Settings
from date_planner_api.app.core.logging_config import ACCESS_LOGGER, AccessFormatter, ConsoleFormatter
from date_planner_api.app.main import create_app, format_log_line


def test_unknown_api_route_uses_message_shape(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_method_not_allowed_keeps_status(client):
    response = client.put("/api/date-options/1", json={})

    assert response.status_code == 405
    assert "message" in response.json()


def test_unhandled_error_is_generic_500():
    app = create_app()

    @app.get("/api/boom")
    async def boom():
        raise ValueError("secret detail")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/api/boom")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


def test_format_log_line_appends_payload():
    assert format_log_line("GET", "/api/x", 200, 3) == "GET /api/x 200 in 3ms"
    assert format_log_line("GET", "/api/x", 200, 3, "[]") == "GET /api/x 200 in 3ms :: []"


def test_format_log_line_truncates_long_lines():
    line = format_log_line("GET", "/api/date-options", 200, 1, "x" * 200)

    assert len(line) == 80
    assert line.endswith("…")


def test_api_requests_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="date_planner_api.http")

    client.post("/api/subscriptions", json={"name": "Sam", "email": "sam@example.com"})

    lines = [r.getMessage() for r in caplog.records if r.name == "date_planner_api.http"]
    assert len(lines) == 1
    assert lines[0].startswith("POST /api/subscriptions 201 in ")
    assert ' :: {"' in lines[0]


def test_non_api_requests_are_not_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="date_planner_api.http")

    client.get("/docs")

    assert not [r for r in caplog.records if r.name == "date_planner_api.http"]


def test_logging_middleware_preserves_response(client):
    response = client.get("/api/date-options")

    assert response.headers["content-type"].startswith("application/json")
    assert len(response.json()) == 5


def _record(name, message, **extra):
    record = logging.LogRecord(name, logging.INFO, __file__, 1, message, None, None)
    record.__dict__.update(extra)
    return record


def test_access_lines_use_short_time_and_source_tag():
    line = AccessFormatter().format(_record(ACCESS_LOGGER, "GET /api/x 200 in 1ms"))

    assert re.fullmatch(r"[1-9]\d?:\d\d:\d\d (AM|PM) \[http\] GET /api/x 200 in 1ms", line)


def test_access_source_can_be_overridden():
    line = AccessFormatter().format(_record(ACCESS_LOGGER, "ready", source="vite"))

    assert line.endswith("[vite] ready")


def test_console_formatter_picks_layout_by_logger():
    formatter = ConsoleFormatter()

    assert "[http] GET" in formatter.format(_record(ACCESS_LOGGER, "GET /api/x 200 in 1ms"))
    assert "[INFO] date_planner_api.app.main: started" in formatter.format(
        _record("date_planner_api.app.main", "started")
    )


@pytest.fixture()
def dist(tmp_path):
    (tmp_path / "index.html").write_text("<html>app</html>", encoding="utf-8")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "app.js").write_text("console.log(1)", encoding="utf-8")
    return tmp_path


def test_production_serves_static_files_and_spa_fallback(dist):
    app = create_app(app_settings=Settings(app_env="production", static_dir=str(dist)))

    with TestClient(app) as test_client:
        assert test_client.get("/assets/app.js").text == "console.log(1)"
        assert test_client.get("/").text == "<html>app</html>"
        assert test_client.get("/planner/42").text == "<html>app</html>"
        assert test_client.get("/../etc/passwd").text == "<html>app</html>"
        assert test_client.get("/api/date-options").status_code == 200
        missing = test_client.get("/api/missing")
        assert missing.status_code == 404
        assert missing.json() == {"message": "Not Found"}


def test_production_static_files_get_content_type_and_head(dist):
    app = create_app(app_settings=Settings(app_env="production", static_dir=str(dist)))

    with TestClient(app) as test_client:
        asset = test_client.get("/assets/app.js")
        head = test_client.head("/assets/app.js")

    assert "javascript" in asset.headers["content-type"]
    assert head.status_code == 200
    assert head.content == b""


@pytest.mark.parametrize("method", ["post", "put", "patch", "delete", "get"])
def test_production_unknown_api_path_is_json_404_for_any_method(dist, method):
    app = create_app(app_settings=Settings(app_env="production", static_dir=str(dist)))

    with TestClient(app) as test_client:
        response = getattr(test_client, method)("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_production_without_build_directory_fails(tmp_path):
    with pytest.raises(RuntimeError, match="Could not find the build directory"):
        create_app(app_settings=Settings(app_env="production", static_dir=str(tmp_path / "missing")))


def test_development_does_not_serve_front_end(client):
    assert client.get("/").status_code == 404


@pytest.fixture()
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_settings_read_environment(monkeypatch, reload_config):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "Production")

    module = reload_config()

    assert module.settings.port == 8080
    assert module.settings.is_production is True


def test_settings_defaults(monkeypatch, reload_config):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setenv("PORT", "not-a-number")

    module = reload_config()

    assert module.settings.port == 5000
    assert module.settings.host == "0.0.0.0"
    assert module.settings.is_production is False
