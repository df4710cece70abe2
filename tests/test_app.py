import logging
from datetime import datetime, time

import pytest
from werkzeug.middleware.proxy_fix import ProxyFix

from lightfoot_api.app import create_app
from lightfoot_shared.config import load_config, read_bool
from lightfoot_shared.datetime_utils import hour_label, parse_date_range, parse_iso_datetime
from lightfoot_shared.db import dispose_engine, get_session
from lightfoot_shared.logging_config import configure_logging
from lightfoot_shared.services.seed import MENU, load_seed_data
from lightfoot_shared.validation import ValidationError


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "service": "lightfoot-api"}


def test_unknown_route_returns_json_error(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.get_json() == {"status": "error", "data": None, "error": "Resource not found"}


def test_wrong_method_returns_json_error(client):
    response = client.put("/inventory")

    assert response.status_code == 405
    assert response.get_json()["error"] == "Method not allowed"


def test_non_json_body_is_a_validation_error(client):
    response = client.post("/items", data="total=5", content_type="text/plain")

    assert response.status_code == 400


def test_cors_allows_local_front_end(client):
    response = client.get("/items", headers={"Origin": "http://localhost:3000"})

    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"


def test_seed_data_loads_once(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOAD_SEED_DATA", "true")
    dispose_engine()
    try:
        app = create_app()
        items = app.test_client().get("/items").get_json()
        assert len(items) == len(MENU)

        with get_session() as session:
            assert load_seed_data(session) is False
    finally:
        dispose_engine()


def test_proxy_and_cors_settings_come_from_config(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("NUM_PROXIES", "1")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://pos.example.com, https://kiosk.example.com")
    monkeypatch.delenv("LOAD_SEED_DATA", raising=False)
    dispose_engine()
    try:
        app = create_app()
        client = app.test_client()

        assert isinstance(app.wsgi_app, ProxyFix)
        allowed = client.get("/health", headers={"Origin": "https://kiosk.example.com"})
        assert allowed.headers["Access-Control-Allow-Origin"] == "https://kiosk.example.com"
        other = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert "Access-Control-Allow-Origin" not in other.headers
    finally:
        dispose_engine()


def test_load_config_defaults(monkeypatch):
    for name in (
        "POSTGRES_HOST",
        "POSTGRES_PORT",
        "FAVORITES_LIMIT",
        "BUSINESS_TIMEZONE",
        "NUM_PROXIES",
        "LOAD_SEED_DATA",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEBUG_MODE", "yes")

    config = load_config("lightfoot-test")

    assert config.app_name == "lightfoot-test"
    assert config.db_host == "localhost"
    assert config.db_port == 5432
    assert config.favorites_limit == 5
    assert config.business_timezone == "America/Chicago"
    assert config.debug_mode is True
    assert config.sqlalchemy_uri.startswith("postgresql+psycopg2://")
    assert config.get_bool("debug_mode") is True
    assert config.get_int("favorites_window") == 100
    assert config.get_int("missing", 7) == 7
    assert config.get_string("log_level") == config.log_level
    assert config.get_int("num_proxies") == 0
    assert config.get_bool("load_seed_data") is False


def test_read_bool(monkeypatch):
    monkeypatch.setenv("LIGHTFOOT_FLAG", "On")
    assert read_bool("LIGHTFOOT_FLAG") is True
    monkeypatch.setenv("LIGHTFOOT_FLAG", "0")
    assert read_bool("LIGHTFOOT_FLAG") is False
    monkeypatch.delenv("LIGHTFOOT_FLAG")
    assert read_bool("LIGHTFOOT_FLAG") is False


def test_configure_logging_adds_one_handler():
    configure_logging("lightfoot-test", "INFO")
    configure_logging("lightfoot-test", "DEBUG")

    handlers = [h for h in logging.getLogger().handlers if getattr(h, "_lightfoot", False)]
    assert len(handlers) == 1


@pytest.mark.parametrize(("hour", "label"), [(0, "12am"), (9, "9am"), (12, "12pm"), (23, "11pm")])
def test_hour_label(hour, label):
    assert hour_label(hour) == label


def test_bare_end_date_covers_the_whole_day(app):
    start, end = parse_date_range("2024-05-01", "2024-05-02")

    assert start == datetime(2024, 5, 1)
    assert end == datetime.combine(datetime(2024, 5, 2).date(), time.max)


def test_aware_timestamps_convert_to_business_time(app):
    # 17:00 UTC is noon in Chicago during daylight saving time
    assert parse_iso_datetime("2024-05-01T17:00:00Z", "startDate") == datetime(2024, 5, 1, 12, 0)


def test_reversed_range_is_rejected(app):
    with pytest.raises(ValidationError):
        parse_date_range("2024-05-02", "2024-05-01")
