"""Error handling for the web application."""

from __future__ import annotations

import logging
from dataclasses import replace

from flask import Response, make_response
from werkzeug.exceptions import HTTPException

from nypl.hold_eligibility.api.util.flask import EligibilityFlask
from nypl.hold_eligibility.core.problem_details import INTERNAL_SERVER_ERROR
from nypl.hold_eligibility.util.log import LoggerMixin
from nypl.hold_eligibility.util.problem_detail import BaseProblemDetailException


class ErrorHandler(LoggerMixin):
    """Turns an exception raised by a view into a problem detail response."""

    def __init__(self, app: EligibilityFlask) -> None:
        self.app = app

    @staticmethod
    def log_level(status_code: int | None) -> int:
        """Bad requests are logged at INFO and failures of an upstream
        service (502) at WARNING. Anything else is a bug, logged at ERROR."""
        if status_code is not None and status_code < 500:
            return logging.INFO
        if status_code == 502:
            return logging.WARNING
        return logging.ERROR

    def handle(self, exception: Exception) -> Response | HTTPException:
        # werkzeug raises these to send a specific response, such as a 404
        if isinstance(exception, HTTPException):
            return exception

        if isinstance(exception, BaseProblemDetailException):
            document = replace(exception.problem_detail, debug_message=None)
        else:
            document = INTERNAL_SERVER_ERROR

        self.log.log(
            self.log_level(document.status_code),
            "Exception in web app: %s",
            exception,
            exc_info=exception,
        )
        return make_response(document.response)
