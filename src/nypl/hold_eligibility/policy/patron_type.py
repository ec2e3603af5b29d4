"""Patron type (ptype) policy reference data.

The policies come from the `by-patron-type` document published by NYPL Core,
which maps every ptype code to, among other things, the delivery location
types patrons of that type may use:

    {
      "10": {"label": "Adult 18-64 Metro (3 Year)",
             "accessibleDeliveryLocationTypes": ["Branch", "Research"]},
      "120": {"label": "Easy Borrowing AdultPilot",
              "accessibleDeliveryLocationTypes": []}
    }

A ptype with no accessible delivery location types cannot place holds.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, Self

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nypl.hold_eligibility.core.exceptions import CannotLoadConfiguration
from nypl.hold_eligibility.util.http.base import check_response, user_agent
from nypl.hold_eligibility.util.http.exception import BadResponseException
from nypl.hold_eligibility.util.log import LoggerMixin


class PatronTypePolicy(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    label: str | None = None
    accessible_delivery_location_types: list[str] | None = Field(
        None, alias="accessibleDeliveryLocationTypes"
    )

    @property
    def allows_holds(self) -> bool:
        return bool(self.accessible_delivery_location_types)


class PolicyLookup(Protocol):
    def lookup(self, patron_type: int) -> PatronTypePolicy | None:
        """Return the policy for a ptype, or None if the ptype is not mapped."""
        ...


class PatronTypeMapping(LoggerMixin):
    """An in-memory PolicyLookup, loaded once at startup."""

    def __init__(self, policies: Mapping[int, PatronTypePolicy]) -> None:
        self._policies = dict(policies)

    def lookup(self, patron_type: int) -> PatronTypePolicy | None:
        return self._policies.get(patron_type)

    def __len__(self) -> int:
        return len(self._policies)

    @classmethod
    def from_document(cls, document: Any) -> Self:
        """Build the mapping from a parsed by-patron-type document."""
        if not isinstance(document, dict) or not document:
            raise CannotLoadConfiguration("Could not load patron types")

        policies = {}
        for code, entry in document.items():
            try:
                patron_type = int(code)
            except ValueError:
                cls.logger().warning(
                    f"Skipping patron type mapping entry with non-numeric code '{code}'"
                )
                continue
            try:
                policies[patron_type] = PatronTypePolicy.model_validate(entry)
            except ValidationError as e:
                raise CannotLoadConfiguration(
                    f"Invalid policy for patron type {code}", debug_message=str(e)
                ) from e

        cls.logger().info(f"Loaded policies for {len(policies)} patron types")
        return cls(policies)

    @classmethod
    def from_file(cls, path: Path) -> Self:
        try:
            document = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise CannotLoadConfiguration(
                f"Could not load patron types from {path}", debug_message=str(e)
            ) from e
        return cls.from_document(document)

    @classmethod
    def from_url(cls, url: str, timeout: float = 20.0) -> Self:
        try:
            response = httpx.get(
                url,
                headers={"User-Agent": user_agent()},
                timeout=timeout,
                follow_redirects=True,
            )
            document = check_response(url, response).json()
        except (httpx.HTTPError, BadResponseException, json.JSONDecodeError) as e:
            raise CannotLoadConfiguration(
                f"Could not load patron types from {url}", debug_message=str(e)
            ) from e
        return cls.from_document(document)

    @classmethod
    def load(cls, source: str) -> Self:
        """Load the mapping from a URL or a local file path."""
        if source.startswith(("http://", "https://")):
            return cls.from_url(source)
        return cls.from_file(Path(source))
