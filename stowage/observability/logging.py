"""Logging configuration for the server and the CLI."""

from __future__ import annotations

import logging
from logging.handlers import SysLogHandler

from opentelemetry import trace
from rich.console import Console
from rich.logging import RichHandler

from stowage.config import Settings
from stowage.observability.request_context import current_request_id

SERVER_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s request_id=%(request_id)s "
    "trace_id=%(trace_id)s span_id=%(span_id)s %(message)s"
)


class RequestIdFilter(logging.Filter):
    """Attach request_id and trace ids to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        span = trace.get_current_span()
        span_context = span.get_span_context()
        if span_context and span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = "-"
            record.span_id = "-"
        record.request_id = current_request_id() or "-"
        return True


def configure_logging(settings: Settings) -> None:
    """Configure server logging with request context and optional syslog."""
    logging.basicConfig(level=settings.log_level.upper(), format=SERVER_FORMAT)
    root_logger = logging.getLogger()
    request_filter = RequestIdFilter()
    for handler in root_logger.handlers:
        handler.addFilter(request_filter)

    if settings.syslog_host:
        syslog_handler = SysLogHandler(address=(settings.syslog_host, settings.syslog_port))
        syslog_handler.setLevel(logging.INFO)
        syslog_handler.setFormatter(logging.Formatter("%(name)s %(levelname)s %(message)s"))
        root_logger.addHandler(syslog_handler)


def configure_cli_logging(level: str) -> None:
    """Send CLI diagnostics to stderr, leaving stdout for command output."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
