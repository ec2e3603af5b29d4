from flask_babel import lazy_gettext as _

from nypl.hold_eligibility.util.problem_detail import ProblemDetail

PROBLEM_URI = "http://nypl.org/terms/problem/"

# Errors that aren't specific to eligibility checks.

INTERNAL_SERVER_ERROR = ProblemDetail(
    f"{PROBLEM_URI}internal-server-error",
    500,
    _("Internal server error."),
    _("The hold request eligibility service ran into an unexpected error."),
)

INTEGRATION_ERROR = ProblemDetail(
    f"{PROBLEM_URI}remote-integration-failed",
    502,
    _("Remote service failed."),
    _("A service the eligibility check depends on has failed."),
)

# Errors from an eligibility check.

INVALID_PATRON = ProblemDetail(
    f"{PROBLEM_URI}invalid-patron",
    400,
    _("Invalid patron."),
    _("The patron could not be found or the patron identifier is invalid."),
)

SIERRA_ERROR = ProblemDetail(
    f"{PROBLEM_URI}sierra-error",
    500,
    _("Sierra error."),
    _("The ILS could not be reached to determine hold request eligibility."),
)
