from __future__ import annotations

from urllib.parse import urlparse

import httpx
from flask_babel import lazy_gettext as _

from nypl.hold_eligibility.core.exceptions import IntegrationException
from nypl.hold_eligibility.core.problem_details import INTEGRATION_ERROR
from nypl.hold_eligibility.util.problem_detail import (
    BaseProblemDetailException,
    ProblemDetail,
)


class RemoteIntegrationException(IntegrationException, BaseProblemDetailException):
    """A request to a remote service failed.

    `url` is the URL that was requested and `service` its host, which is all
    an API client is told about the failure.
    """

    title = _("Remote service unavailable")
    detail = _("The server could not get an answer from %(service)s.")
    internal_message = "%s: %s"

    def __init__(
        self, url: str | httpx.URL, message: str, debug_message: str | None = None
    ) -> None:
        self.url = str(url)
        self.service = urlparse(self.url).netloc or self.url
        super().__init__(message, debug_message)

    def __str__(self) -> str:
        return self.internal_message % (self.url, self.message)

    @property
    def problem_detail(self) -> ProblemDetail:
        return INTEGRATION_ERROR.detailed(
            _(str(self.detail), service=self.service),
            title=self.title,
            debug_message=self.debug_message,
        )


class BadResponseException(RemoteIntegrationException):
    """The remote service answered with a status code we can't continue on."""

    title = _("Unexpected response from remote service")
    detail = _("%(service)s sent an unexpected response.")
    internal_message = "%s answered: %s"

    def __init__(self, url: str | httpx.URL, response: httpx.Response) -> None:
        super().__init__(
            url,
            f"HTTP status {response.status_code}",
            debug_message=f"Response content: {response.text}",
        )
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


class RequestNetworkException(RemoteIntegrationException):
    """The request never got an HTTP response."""

    title = _("Remote service unreachable")
    detail = _("%(service)s could not be reached.")
    internal_message = "No response from %s: %s"


class RequestTimedOut(RequestNetworkException):
    title = _("Remote service timed out")
    detail = _("The request to %(service)s timed out.")
    internal_message = "Timed out waiting for %s: %s"
