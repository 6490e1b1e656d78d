import logging

from fastapi.testclient import TestClient

from conftest import make_settings, no_sleep
from items_api.core.config import Settings
from items_api.core.logging_config import RequestIdFilter, SimpleConsoleFormatter, configure_logging
from items_api.main import create_app


def _record(**extra):
    record = logging.LogRecord("items_api.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_request_id_filter_sets_default():
    record = _record()
    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "-"


def test_request_id_filter_keeps_existing():
    record = _record(request_id="abc")
    RequestIdFilter().filter(record)
    assert record.request_id == "abc"


def test_console_formatter_layout():
    line = SimpleConsoleFormatter().format(_record(request_id="r1"))
    parts = line.split(" | ")
    assert parts[1:] == ["INFO", "items_api.test", "hello world", "rid=r1"]


def test_configure_logging_applies_levels():
    configure_logging(Settings(_env_file=None, LOG_LEVEL="debug", SQLALCHEMY_LOG_LEVEL="error"))
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_request_logging_flag_is_per_app(db_url):
    quiet = create_app(make_settings(db_url, REQUEST_LOGS_ENABLED=False), sleep=no_sleep)
    loud = create_app(make_settings(db_url, REQUEST_LOGS_ENABLED=True), sleep=no_sleep)

    # building the second app must not change how the first one behaves
    with TestClient(quiet) as quiet_client, TestClient(loud) as loud_client:
        quiet_resp = quiet_client.get("/items", headers={"x-request-id": "q1"})
        loud_resp = loud_client.get("/items", headers={"x-request-id": "l1"})

    assert quiet_resp.status_code == 200
    assert "x-request-id" not in quiet_resp.headers
    assert loud_resp.headers["x-request-id"] == "l1"
