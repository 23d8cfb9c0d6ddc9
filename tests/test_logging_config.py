import io
import json
import logging
import pytest
from crewledger.core.exceptions import BookingNotFoundError
from crewledger.core.logging_config import configure_logging, get_logger, reset_logging


@pytest.fixture
def log_stream():
    reset_logging()
    stream = io.StringIO()
    configure_logging(level="DEBUG", handler=logging.StreamHandler(stream))
    yield stream
    reset_logging()


def test_records_are_json_lines_with_extras(log_stream):
    get_logger("services.booking").info("Booking created", extra={"booking_id": "b1"})

    record = json.loads(log_stream.getvalue().strip())
    assert record["message"] == "Booking created"
    assert record["logger"] == "crewledger.services.booking"
    assert record["level"] == "INFO"
    assert record["booking_id"] == "b1"


def test_exception_code_is_logged(log_stream):
    try:
        raise BookingNotFoundError("b1")
    except BookingNotFoundError:
        get_logger("test").exception("Lookup failed")

    record = json.loads(log_stream.getvalue().strip())
    assert record["exc_type"] == "BookingNotFoundError"
    assert record["exc_code"] == "BOOKING_NOT_FOUND"


def test_configure_logging_is_idempotent(log_stream):
    configure_logging(handler=logging.StreamHandler(io.StringIO()))

    get_logger("test").info("once")

    assert len(log_stream.getvalue().strip().splitlines()) == 1
