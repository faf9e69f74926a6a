import structlog

from qaboard.logging_config import configure_logging, request_context


def test_request_context_keeps_service_binding():
    configure_logging(level="INFO", json_format=False, service_name="qaboard")
    with request_context("req-1", path="/health"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["request_id"] == "req-1"
        assert bound["path"] == "/health"
        assert bound["service"] == "qaboard"
    bound = structlog.contextvars.get_contextvars()
    assert "request_id" not in bound
    assert "path" not in bound
    assert bound["service"] == "qaboard"
