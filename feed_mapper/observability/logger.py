"""
Logging for feed-mapper.

Every module gets its logger through get_logger(__name__). Output goes to
stdout, one JSON object per line by default (LOG_FORMAT=text for a readable
console format). LOG_LEVEL sets the threshold.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "feed-mapper"
PACKAGE_NAME = "feed_mapper"

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(component)s %(function)s %(message)s"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s"


def component_of(logger_name: str) -> str:
    """
    Map a logger name to the package area it belongs to.

    "feed_mapper.codec.xml_reader" -> "codec", "feed_mapper.feed_manager" ->
    "feed_manager"; loggers outside the package report their own name.
    """
    parts = logger_name.split(".")
    if parts[0] != PACKAGE_NAME or len(parts) == 1:
        return logger_name
    if parts[1] == "core" and len(parts) > 2:
        return parts[2]
    return parts[1]


def parse_level(value: str | None) -> int:
    """Resolve a level name such as "debug" or "WARNING"; unknown names give INFO."""
    level = logging.getLevelName((value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level, logger, component and call site."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["component"] = component_of(record.name)
        log_record["function"] = record.funcName


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Configure a logger with a single stdout handler.

    Calling it again for the same name replaces the handler, so tests and
    embedding applications can reconfigure freely.

    Args:
        name: Logger name
        level: Level name; falls back to LOG_LEVEL, then INFO
        format_type: "json" or "text"; falls back to LOG_FORMAT, then json

    Returns:
        The configured logger
    """
    log_level = parse_level(level or os.getenv("LOG_LEVEL"))
    format_type = (format_type or os.getenv("LOG_FORMAT", "json")).lower()

    if format_type == "json":
        formatter = CustomJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    else:
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return the named logger, configuring it from the environment on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


class log_operation:
    """
    Times a feed operation and logs how it ended.

    Fields passed at construction go on every line; fields known only once
    the work is done can be attached with add():

        with log_operation("Exporting feed", logger=logger, sink="file") as op:
            path = sink.deliver(artifact)
            op.add(size_bytes=artifact.size)

    Exceptions are logged at WARNING and always propagate.
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: float | None = None

    def add(self, **fields) -> None:
        """Attach result fields to the completion line."""
        self.extra_fields.update(fields)

    def _fields(self, **fields) -> dict:
        duration = time.perf_counter() - self.start_time
        return {
            "operation": self.operation_name,
            "duration_seconds": round(duration, 3),
            **fields,
            **self.extra_fields,
        }

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra=self._fields(status="success"),
            )
        else:
            self.logger.warning(
                f"Failed: {self.operation_name}",
                extra=self._fields(
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
            )
        return False
