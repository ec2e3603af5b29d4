from __future__ import annotations

from pydantic import ValidationError

from nypl.hold_eligibility.eligibility.exceptions import ParameterError
from nypl.hold_eligibility.sierra.client import SierraClient
from nypl.hold_eligibility.sierra.exception import SierraApiError
from nypl.hold_eligibility.sierra.models import HoldsPage, PatronRecord
from nypl.hold_eligibility.util.log import LoggerMixin, LoggerType


class PatronInfoFetcher(LoggerMixin):
    """Reads the patron data an eligibility check needs from Sierra."""

    def __init__(self, client: SierraClient, *, log: LoggerType | None = None) -> None:
        self._client = client
        self._log = log or self.logger()

    async def fetch_patron_info(self, patron_id: str) -> PatronRecord:
        """Fetch the patron record.

        :raise ParameterError: If the record can't be retrieved. A check can't
            go on without it.
        """
        try:
            body = await self._client.get(
                f"patrons/{patron_id}",
                params={"fields": ",".join(PatronRecord.FIELDS)},
            )
            record = PatronRecord.model_validate(body)
        except (SierraApiError, ValidationError) as e:
            self._log.warning(f"Could not get patron info: {e}")
            raise ParameterError(
                f"Could not get patron info for patron {patron_id}"
            ) from e

        self._log.info(
            f"Patron info: type {record.patron_type}, "
            f"missing fields {record.missing_fields or 'none'}"
        )
        return record

    async def fetch_holds_count(self, patron_id: str) -> int | None:
        """Fetch the number of holds the patron currently has open.

        Returns None if the count can't be retrieved, in which case the hold
        limit is not checked.
        """
        try:
            body = await self._client.get(f"patrons/{patron_id}/holds")
            page = HoldsPage.model_validate(body)
        except (SierraApiError, ValidationError) as e:
            self._log.warning(f"Could not get holds count: {e}")
            return None

        self._log.info(f"Holds count: {page.total}")
        return page.total
