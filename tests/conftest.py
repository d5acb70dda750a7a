import logging

import pytest

from timetracker import logging_helper


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.messages = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(f"[{record.levelname}] {record.getMessage()}")


@pytest.fixture
def log_messages():
    """Messages emitted by the tracker's logger during the test."""
    logger = logging.getLogger(logging_helper.LOGGER_NAME)
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield handler.messages
    finally:
        logger.removeHandler(handler)
        logging_helper.set_log_level("error")
