from __future__ import annotations

import asyncio
import re
from collections.abc import Callable
from typing import TypeAlias

from nypl.hold_eligibility.eligibility.exceptions import (
    ParameterError,
    UpstreamServiceError,
)
from nypl.hold_eligibility.eligibility.issues import (
    evaluate_patron_issues,
    ptype_disallows_holds,
)
from nypl.hold_eligibility.eligibility.patron import PatronInfoFetcher
from nypl.hold_eligibility.eligibility.probe import EligibilityProbe
from nypl.hold_eligibility.eligibility.result import EligibilityResult
from nypl.hold_eligibility.policy.patron_type import PolicyLookup
from nypl.hold_eligibility.sierra.client import SierraClient
from nypl.hold_eligibility.sierra.exception import SierraApiError
from nypl.hold_eligibility.sierra.models import PatronRecord
from nypl.hold_eligibility.util.log import (
    LoggerMixin,
    LoggerType,
    PatronLoggerAdapter,
    elapsed_time_logging,
)

SierraClientFactory: TypeAlias = Callable[[], SierraClient]

PATRON_ID_PATTERN = re.compile(r"[0-9]+")


def validate_patron_id(patron_id: str) -> str:
    """
    :raise ParameterError: If the patron ID is not a Sierra patron record number.
    """
    if not PATRON_ID_PATTERN.fullmatch(patron_id):
        raise ParameterError(f"Invalid patron id: '{patron_id}'")
    return patron_id


class EligibilityChecker(LoggerMixin):
    """Works out whether a patron can place holds.

    Each check logs in to Sierra with its own client, then concurrently:
      - places a test hold to see if Sierra lets the patron place holds
      - fetches the patron record and checks the patron's type
      - counts the patron's open holds
    If the patron can't place holds, the patron record is evaluated to explain
    why.
    """

    def __init__(
        self,
        client_factory: SierraClientFactory,
        policy_lookup: PolicyLookup,
        *,
        holds_limit: int = 15,
        probe_backoff_factor: float = 0.0,
    ) -> None:
        self._client_factory = client_factory
        self._policy_lookup = policy_lookup
        self._holds_limit = holds_limit
        self._probe_backoff_factor = probe_backoff_factor

    async def _authenticate(self, sierra: SierraClient, log: LoggerType) -> None:
        try:
            await sierra.authenticate()
        except SierraApiError as e:
            log.error(f"Sierra authentication failed: {e}")
            raise UpstreamServiceError(
                f"Could not authenticate with Sierra: {e.message}"
            ) from e

    async def _patron_type_check(
        self, fetcher: PatronInfoFetcher, patron_id: str, log: LoggerType
    ) -> tuple[PatronRecord, bool]:
        record = await fetcher.fetch_patron_info(patron_id)
        disallowed = ptype_disallows_holds(record.patron_type, self._policy_lookup, log)
        log.info(f"Patron type {record.patron_type} disallows holds: {disallowed}")
        return record, disallowed

    async def check_eligibility(self, patron_id: str) -> EligibilityResult:
        """Check whether a patron is eligible to place holds.

        :raise ParameterError: If the patron ID is invalid, or the patron
            record can't be retrieved.
        :raise UpstreamServiceError: If we can't log in to Sierra.
        """
        validate_patron_id(patron_id)
        log = PatronLoggerAdapter(self.logger(), patron_id)

        with elapsed_time_logging(log.info, "Hold request eligibility check"):
            async with self._client_factory() as sierra:
                await self._authenticate(sierra, log)

                probe = EligibilityProbe(
                    sierra, backoff_factor=self._probe_backoff_factor, log=log
                )
                fetcher = PatronInfoFetcher(sierra, log=log)
                try:
                    async with asyncio.TaskGroup() as tg:
                        probe_task = tg.create_task(probe.run(patron_id))
                        patron_task = tg.create_task(
                            self._patron_type_check(fetcher, patron_id, log)
                        )
                        holds_task = tg.create_task(
                            fetcher.fetch_holds_count(patron_id)
                        )
                except BaseExceptionGroup as group:
                    # The first failure ends the check, and the other tasks
                    # are cancelled.
                    raise group.exceptions[0] from None

            probe_result = probe_task.result()
            record, ptype_disallowed = patron_task.result()
            holds_count = holds_task.result()

            eligible = (
                probe_result.holds_possible
                and not ptype_disallowed
                and record.is_complete
            )
            if eligible:
                log.info("Patron is eligible to place holds")
                return EligibilityResult.eligible()

            issues = evaluate_patron_issues(
                record, holds_count, self._holds_limit, self._policy_lookup, log=log
            )
            result = EligibilityResult.ineligible(issues)
            if result.issues is None:
                log.warning(
                    "Patron is not eligible to place holds, but no issues were "
                    f"found (test hold: {probe_result.resolution.name})"
                )
            else:
                log.info(f"Patron is not eligible to place holds: {result.to_dict()}")
            return result
