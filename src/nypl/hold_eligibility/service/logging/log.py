from __future__ import annotations

import logging
import socket
import sys
from typing import Any

from flask import has_request_context, request
from pydantic_core import to_json

from nypl.hold_eligibility.service.logging.configuration import LogLevel
from nypl.hold_eligibility.util.datetime_helpers import from_timestamp
from nypl.hold_eligibility.util.log import EXTRA_ATTRIBUTE_PREFIX

# Libraries that log every request they make
VERBOSE_LOGGERS = ("botocore", "httpcore", "httpx", "urllib3")


class JSONFormatter(logging.Formatter):
    """Formats each record as a single line of JSON.

    Records logged while handling a request include the request's method and
    path. Record attributes named `eligibility_<key>`, such as the patron id
    PatronLoggerAdapter sets, are reported as `<key>`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "host": self.hostname,
            "name": record.name,
            "level": record.levelname,
            "filename": record.filename,
            "message": record.getMessage(),
            "timestamp": from_timestamp(record.created).isoformat(),
        }
        if record.exc_info:
            data["traceback"] = self.formatException(record.exc_info)

        if has_request_context():
            data["request"] = {"method": request.method, "path": request.path}
            if request.remote_addr:
                data["request"]["remote_addr"] = request.remote_addr

        for key, value in vars(record).items():
            if key.startswith(EXTRA_ATTRIBUTE_PREFIX) and value is not None:
                data.setdefault(key.removeprefix(EXTRA_ATTRIBUTE_PREFIX), value)

        # Anything JSON can't represent is logged as its str()
        return to_json(data, fallback=str).decode()


def json_stream_handler() -> logging.Handler:
    """A handler writing JSON records to stdout."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    level: LogLevel, verbose_level: LogLevel, handler: logging.Handler
) -> None:
    logging.basicConfig(force=True, level=level.levelno, handlers=[handler])
    for name in VERBOSE_LOGGERS:
        logging.getLogger(name).setLevel(verbose_level.levelno)
