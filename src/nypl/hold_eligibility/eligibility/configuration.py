from __future__ import annotations

from pydantic import NonNegativeFloat, PositiveInt

from nypl.hold_eligibility.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class EligibilityConfiguration(ServiceConfiguration):
    # Patrons with this many open holds can't place more.
    holds_limit: PositiveInt = 15

    # Path or http(s) URL of the NYPL Core by-patron-type document.
    ptype_mapping: str

    # Backoff factor between test hold attempts. 0 retries immediately.
    probe_backoff_factor: NonNegativeFloat = 0.0
