import logging
import sys

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

LOGGER_NAME = "journal_timetracker"
DEFAULT_LEVEL = logging.ERROR


def _build_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(DEFAULT_LEVEL)
    fmt = logging.Formatter("[%(levelname)s] %(message)s")

    # stdout carries the CSV report; every log level goes to stderr
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(fmt)

    logger.addHandler(stderr_handler)
    logger.propagate = False
    return logger


_LOGGER = _build_logger()


def set_log_level(level: str) -> None:
    """Set logger level from a config/CLI string; unknown values mean 'error'."""
    lvl = str(level or "").strip().lower()
    mapping = {
        "trace": TRACE_LEVEL,
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    resolved = mapping.get(lvl, DEFAULT_LEVEL)
    _LOGGER.setLevel(resolved)


def log_trace(message: str) -> None:
    _LOGGER.log(TRACE_LEVEL, message)


def log_debug(message: str) -> None:
    _LOGGER.debug(message)


def log_info(message: str) -> None:
    _LOGGER.info(message)


def log_warn(message: str) -> None:
    _LOGGER.warning(message)


def log_error(message: str) -> None:
    _LOGGER.error(message)


def log_trace_block(title: str, body: str) -> None:
    """Log a multi-line block at TRACE level with consistent framing."""
    log_trace(f"{title} BEGIN")
    for line in (body or "").splitlines() or [""]:
        log_trace(line)
    log_trace(f"{title} END")
