import functools
import logging
import time
from collections.abc import Callable, Generator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    LoggerAdapterType = logging.LoggerAdapter[logging.Logger]
else:
    LoggerAdapterType = logging.LoggerAdapter

LoggerType = logging.Logger | LoggerAdapterType

# LogRecord attributes with this prefix are reported by the JSON log
# formatter, without the prefix.
EXTRA_ATTRIBUTE_PREFIX = "eligibility_"


class LoggerMixin:
    """Gives a class a logger named after its module and class."""

    @classmethod
    @functools.cache
    def logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @property
    def log(self) -> LoggerType:
        return self.logger()


class PatronLoggerAdapter(LoggerAdapterType):
    """Logs on behalf of one patron's eligibility check.

    Messages get a "(patron: <id>)" suffix, and records carry the patron id
    in the `eligibility_patron_id` attribute.
    """

    PATRON_ID = f"{EXTRA_ATTRIBUTE_PREFIX}patron_id"

    def __init__(self, logger: logging.Logger, patron_id: str) -> None:
        super().__init__(logger, {self.PATRON_ID: patron_id})
        self.patron_id = patron_id

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), self.PATRON_ID: self.patron_id}
        return f"{msg} (patron: {self.patron_id})", kwargs


@contextmanager
def elapsed_time_logging(
    log_method: Callable[[str], None], description: str
) -> Generator[None, None, None]:
    """Log the start of `description`, then how long it took to complete or fail."""
    log_method(f"{description}: started")
    start = time.perf_counter()
    outcome = "completed"
    try:
        yield
    except Exception as e:
        outcome = f"failed ({e.__class__.__name__})"
        raise
    finally:
        log_method(f"{description}: {outcome} in {time.perf_counter() - start:.4f}s")
