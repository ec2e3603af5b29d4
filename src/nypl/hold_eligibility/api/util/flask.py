from __future__ import annotations

from typing import TYPE_CHECKING, Any

import flask

if TYPE_CHECKING:
    from nypl.hold_eligibility.eligibility.checker import EligibilityChecker
    from nypl.hold_eligibility.service.container import Services


class EligibilityFlask(flask.Flask):
    """A Flask application that holds the services eligibility checks run with."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.container: Services
        self.checker: EligibilityChecker
