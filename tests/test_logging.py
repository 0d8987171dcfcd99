import logging

from booking_api.core.logger import logger, setup_logging


def test_stdlib_records_reach_loguru_with_origin(settings):
    setup_logging(settings)
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        logging.getLogger("uvicorn.error").warning("port %s already in use", 5001)
    finally:
        logger.remove(sink_id)

    assert len(records) == 1
    record = records[0]
    assert record["message"] == "port 5001 already in use"
    assert record["level"].name == "WARNING"
    assert record["name"] == "uvicorn.error"
    assert record["function"] == "test_stdlib_records_reach_loguru_with_origin"
