"""Problem detail documents for API errors (RFC 7807)."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any

from nypl.hold_eligibility.core.exceptions import BaseEligibilityException

JSON_MEDIA_TYPE = "application/api-problem+json"


@dataclass
class ProblemDetail:
    """A kind of problem, and the error response that reports it.

    `title` and `detail` are lazy strings, translated when the response
    is rendered. `debug_message` is for operators and is removed before a
    response is sent to a client.
    """

    uri: str
    status_code: int | None = None
    title: str | None = None
    detail: str | None = None
    debug_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "type": self.uri,
            "title": str(self.title),
            "status": self.status_code,
        }
        if self.detail:
            document["detail"] = str(self.detail)
        if self.debug_message:
            document["debug_message"] = self.debug_message
        return document

    @property
    def response(self) -> tuple[str, int, dict[str, str]]:
        """A Flask (body, status, headers) response."""
        return (
            json.dumps(self.to_dict()),
            self.status_code or 400,
            {"Content-Type": JSON_MEDIA_TYPE},
        )

    def detailed(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        title: str | None = None,
        debug_message: str | None = None,
    ) -> ProblemDetail:
        """This problem, with a detail message specific to one occurrence."""
        return replace(
            self,
            detail=detail,
            status_code=status_code or self.status_code,
            title=title or self.title,
            debug_message=debug_message,
        )

    def with_debug(self, debug_message: str) -> ProblemDetail:
        return replace(self, debug_message=debug_message)


class BaseProblemDetailException(BaseEligibilityException, ABC):
    """An exception that is reported to API clients as a problem detail."""

    @property
    @abstractmethod
    def problem_detail(self) -> ProblemDetail: ...
