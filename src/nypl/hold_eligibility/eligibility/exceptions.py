from __future__ import annotations

from nypl.hold_eligibility.core.problem_details import INVALID_PATRON, SIERRA_ERROR
from nypl.hold_eligibility.util.problem_detail import (
    BaseProblemDetailException,
    ProblemDetail,
)


class EligibilityException(BaseProblemDetailException):
    """An eligibility check could not reach a determination."""


class ParameterError(EligibilityException):
    """The patron identifier is invalid, or no patron record could be
    retrieved for it. Reported to the caller as a client error."""

    @property
    def problem_detail(self) -> ProblemDetail:
        return INVALID_PATRON.with_debug(str(self))


class UpstreamServiceError(EligibilityException):
    """The ILS failed in a way that prevents any determination, for
    example because we could not log in."""

    @property
    def problem_detail(self) -> ProblemDetail:
        return SIERRA_ERROR.with_debug(str(self))
