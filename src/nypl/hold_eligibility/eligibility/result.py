from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator

from nypl.hold_eligibility.eligibility.issues import PatronIssues


class EligibilityResult(BaseModel):
    """The outcome of an eligibility check.

    Serializes to `{"eligibility": true}` for an eligible patron and to
    `{"eligibility": false, <issues>}` otherwise. An ineligible patron with
    no identifiable issues serializes to `{"eligibility": false}`.
    """

    model_config = ConfigDict(frozen=True)

    eligibility: bool
    issues: PatronIssues | None = None

    @model_validator(mode="after")
    def _eligible_without_issues(self) -> Self:
        if self.eligibility and self.issues is not None:
            raise ValueError("An eligible result can't carry issues")
        return self

    @classmethod
    def eligible(cls) -> Self:
        return cls(eligibility=True)

    @classmethod
    def ineligible(cls, issues: PatronIssues | None = None) -> Self:
        if issues is not None and not issues.has_issues:
            issues = None
        return cls(eligibility=False, issues=issues)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"eligibility": self.eligibility}
        if self.issues is not None:
            result.update(self.issues.to_dict())
        return result
