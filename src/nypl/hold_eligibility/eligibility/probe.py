"""Infer whether a patron can place holds by placing one that must fail.

Sierra has no endpoint that answers "can this patron place holds". Instead we
request a hold on an item record that doesn't exist. Sierra checks the
patron's permissions before it looks up the record, so if the request fails
because the record can't be loaded, the patron passed the permission checks.
Any other failure means they did not.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto

from nypl.hold_eligibility.sierra.client import SierraClient
from nypl.hold_eligibility.sierra.exception import SierraApiError
from nypl.hold_eligibility.sierra.models import SierraErrorPayload
from nypl.hold_eligibility.util.backoff import exponential_backoff
from nypl.hold_eligibility.util.log import LoggerMixin, LoggerType

# An item record number that doesn't exist in Sierra.
TEST_HOLD_RECORD_NUMBER = 10000000
TEST_HOLD_PICKUP_LOCATION = "maii2"
TEST_HOLD_REQUEST = {
    "recordType": "i",
    "recordNumber": TEST_HOLD_RECORD_NUMBER,
    "pickupLocation": TEST_HOLD_PICKUP_LOCATION,
}

XCIRC_ERROR = "XCirc error"
RECORD_NOT_LOADED = "Bib record cannot be loaded"


class ProbeOutcome(Enum):
    FAVORABLE = auto()
    UNFAVORABLE = auto()
    AMBIGUOUS = auto()


def classify_test_hold_error(error: SierraErrorPayload | None) -> ProbeOutcome:
    """Classify the error Sierra returned for a test hold.

    :param error: The structured error from the failed request, or None if the
        response carried no structured error.
    """
    if error is None:
        return ProbeOutcome.AMBIGUOUS

    description = error.description.strip()
    if RECORD_NOT_LOADED not in description:
        return ProbeOutcome.UNFAVORABLE

    # Sierra reports the error class in the name, and repeats it as the
    # prefix of the description: "XCirc error : Bib record cannot be loaded"
    classification = error.name or description.split(":", 1)[0]
    if classification.strip().startswith(XCIRC_ERROR):
        return ProbeOutcome.FAVORABLE
    return ProbeOutcome.UNFAVORABLE


class ProbeResolution(Enum):
    FAVORABLE = auto()
    UNFAVORABLE = auto()
    UNEXPECTED_SUCCESS = auto()
    OPTIMISTIC = auto()

    @property
    def holds_possible(self) -> bool:
        return self in (ProbeResolution.FAVORABLE, ProbeResolution.OPTIMISTIC)


@dataclass(frozen=True)
class ProbeResult:
    resolution: ProbeResolution
    attempts: int

    @property
    def holds_possible(self) -> bool:
        return self.resolution.holds_possible


class EligibilityProbe(LoggerMixin):
    """Places the test hold, retrying once if Sierra's answer can't be classified.

    If neither attempt gets a classifiable answer we assume the patron can
    place holds rather than block them because of a transient upstream problem.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        client: SierraClient,
        *,
        backoff_factor: float = 0.0,
        log: LoggerType | None = None,
    ) -> None:
        self._client = client
        self._backoff_factor = backoff_factor
        self._log = log or self.logger()

    async def _send(self, patron_id: str) -> SierraApiError | None:
        """Place the test hold. Returns the error Sierra answered with, or
        None if the hold was placed."""
        try:
            await self._client.post(
                f"patrons/{patron_id}/holds/requests", TEST_HOLD_REQUEST
            )
        except SierraApiError as e:
            if e.request_accepted:
                # The hold went through even though the body didn't decode
                return None
            return e
        return None

    async def run(self, patron_id: str) -> ProbeResult:
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            failure = await self._send(patron_id)
            if failure is None:
                self._log.error(
                    f"Test hold on nonexistent record {TEST_HOLD_RECORD_NUMBER} succeeded. "
                    "A hold may have been placed in error."
                )
                return ProbeResult(ProbeResolution.UNEXPECTED_SUCCESS, attempt)

            outcome = classify_test_hold_error(failure.error)
            if outcome is ProbeOutcome.FAVORABLE:
                self._log.info("Test hold probe: holds possible")
                return ProbeResult(ProbeResolution.FAVORABLE, attempt)
            if outcome is ProbeOutcome.UNFAVORABLE:
                self._log.info(f"Test hold probe: holds not possible ({failure})")
                return ProbeResult(ProbeResolution.UNFAVORABLE, attempt)

            self._log.warning(
                f"Test hold probe attempt {attempt} of {self.MAX_ATTEMPTS} "
                f"got no Sierra error: {failure}"
            )
            if attempt < self.MAX_ATTEMPTS and self._backoff_factor > 0:
                await asyncio.sleep(
                    exponential_backoff(attempt - 1, factor=self._backoff_factor)
                )

        self._log.warning(
            f"Test hold probe was inconclusive after {self.MAX_ATTEMPTS} attempts. "
            "Assuming holds are possible."
        )
        return ProbeResult(ProbeResolution.OPTIMISTIC, self.MAX_ATTEMPTS)

    async def can_place_holds(self, patron_id: str) -> bool:
        return (await self.run(patron_id)).holds_possible
