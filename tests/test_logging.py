"""Tests for structured logging."""

import json
import logging

from fastapi.testclient import TestClient

from preptive.main import app
from preptive.utils.logging import JSONFormatter, get_logger


def test_json_formatter_copies_context_fields():
    record = logging.LogRecord("preptive.test", logging.INFO, __file__, 10, "GET /search 200", None, None)
    record.request_id = "req-1"
    record.status_code = 200
    record.query = "UPSC"

    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "GET /search 200"
    assert data["level"] == "INFO"
    assert (data["request_id"], data["status_code"], data["query"]) == ("req-1", 200, "UPSC")
    assert "duration_ms" not in data


def test_structured_logger_passes_extra(caplog):
    logger = get_logger("preptive.test")
    with caplog.at_level(logging.INFO, logger="preptive.test"):
        logger.info("Search successful", extra={"query": "ssc", "total": 5})
    record = caplog.records[-1]
    assert (record.query, record.total) == ("ssc", 5)


def test_request_id_header_is_echoed():
    client = TestClient(app)
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
