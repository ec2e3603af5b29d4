"""Rules that explain why a patron can't place holds."""

from __future__ import annotations

import datetime
import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from nypl.hold_eligibility.policy.patron_type import PolicyLookup
from nypl.hold_eligibility.sierra.models import BlockInfo, PatronRecord
from nypl.hold_eligibility.util.datetime_helpers import utc_today
from nypl.hold_eligibility.util.log import LoggerType

# Patrons who owe more than this in fines and fees can't place holds.
MONEY_OWED_THRESHOLD = Decimal("15.00")

_log = logging.getLogger(__name__)


class PatronIssues(BaseModel):
    """The reasons a patron can't place holds.

    A flag that is None was not evaluated and is left out of the serialized
    issues. `hasIssues` is derived from the flags.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    expired: bool | None = None
    blocked: bool | None = None
    money_owed: bool | None = Field(None, alias="moneyOwed")
    ptype_disallows_holds: bool | None = Field(None, alias="ptypeDisallowsHolds")
    reached_hold_limit: bool | None = Field(None, alias="reachedHoldLimit")
    patron_record_incomplete: bool | None = Field(
        None, alias="patronRecordIncomplete"
    )

    @computed_field(alias="hasIssues")  # type: ignore[prop-decorator]
    @property
    def has_issues(self) -> bool:
        return any(getattr(self, name) for name in type(self).model_fields)

    def to_dict(self) -> dict[str, bool]:
        return self.model_dump(by_alias=True, exclude_none=True)


def ptype_disallows_holds(
    patron_type: int | None, lookup: PolicyLookup, log: LoggerType = _log
) -> bool:
    """Whether the patron's type keeps them from placing holds.

    A patron type we have no policy for is allowed to place holds.
    """
    if patron_type is None:
        log.warning("Patron record has no patron type")
        return False
    policy = lookup.lookup(patron_type)
    if policy is None:
        log.warning(f"No policy found for patron type {patron_type}")
        return False
    return not policy.allows_holds


def _complete_fields(record: PatronRecord) -> tuple[datetime.date, BlockInfo, Decimal]:
    """The fields the rules need, from a record known to have all of them."""
    if (
        record.expiration_date is None
        or record.block_info is None
        or record.money_owed is None
    ):
        raise ValueError(f"Patron record is missing {record.missing_fields}")
    return record.expiration_date, record.block_info, record.money_owed


def evaluate_patron_issues(
    record: PatronRecord,
    holds_count: int | None,
    holds_limit: int,
    policy_lookup: PolicyLookup,
    *,
    today: datetime.date | None = None,
    log: LoggerType = _log,
) -> PatronIssues:
    """Evaluate every eligibility rule against a patron record.

    If the record is missing any of the fields the rules need, the only issue
    reported is that the record is incomplete.

    :param holds_count: The number of open holds, or None if unknown. The
        hold limit is only checked when the count is known.
    :param today: The date expiration is checked against. Defaults to the
        current UTC date.
    """
    if not record.is_complete:
        log.info(f"Patron record is missing {', '.join(record.missing_fields)}")
        return PatronIssues(patron_record_incomplete=True)

    expiration_date, block_info, money_owed = _complete_fields(record)

    today = today or utc_today()
    return PatronIssues(
        expired=expiration_date < today,
        blocked=block_info.is_blocked,
        money_owed=money_owed > MONEY_OWED_THRESHOLD,
        ptype_disallows_holds=ptype_disallows_holds(
            record.patron_type, policy_lookup, log
        ),
        reached_hold_limit=(
            holds_count >= holds_limit if holds_count is not None else None
        ),
    )
