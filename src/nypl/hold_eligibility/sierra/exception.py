from json import JSONDecodeError
from typing import Self

from flask_babel import lazy_gettext as _

from nypl.hold_eligibility.sierra.models import SierraErrorPayload
from nypl.hold_eligibility.util.http.exception import (
    BadResponseException,
    RemoteIntegrationException,
)


class SierraApiError(RemoteIntegrationException):
    """A request to the Sierra API failed.

    `error` holds the structured error document Sierra sent back, if there
    was one. It is None when the request failed at the transport level or
    Sierra answered with something we couldn't parse.
    """

    title = _("Sierra error")
    detail = _("The server made a request to %(service)s, and the request failed.")
    internal_message = "Sierra request to %s failed: %s"

    def __init__(
        self,
        url: str,
        message: str,
        error: SierraErrorPayload | None = None,
        status_code: int | None = None,
        debug_message: str | None = None,
    ) -> None:
        super().__init__(url, message, debug_message)
        self.error = error
        self.status_code = status_code

    @property
    def has_structured_error(self) -> bool:
        return self.error is not None

    @property
    def request_accepted(self) -> bool:
        """Sierra answered with a 2xx, but the body was unusable."""
        return self.status_code is not None and 200 <= self.status_code < 300

    @classmethod
    def from_bad_response(cls, bad_response: BadResponseException) -> Self:
        """Extract Sierra's error document from a non-2xx response, when
        it sent one."""
        response = bad_response.response
        try:
            body = response.json()
        except (JSONDecodeError, UnicodeDecodeError):
            body = None

        error = SierraErrorPayload.from_body(body)
        message = error.description if error else bad_response.message
        return cls(
            bad_response.url,
            message or "Unknown error",
            error=error,
            status_code=bad_response.status_code,
            debug_message=bad_response.debug_message,
        )

    @classmethod
    def from_network_error(cls, network_error: RemoteIntegrationException) -> Self:
        return cls(
            network_error.url,
            network_error.message or "Network error",
            debug_message=network_error.debug_message,
        )
