from __future__ import annotations

import random

from nypl.hold_eligibility.core.exceptions import EligibilityValueError


def exponential_backoff(
    retries: int,
    *,
    factor: float = 1.0,
    base: float = 2.0,
    jitter: float = 0.25,
    max_time: float | None = None,
) -> float:
    """Seconds to wait after `retries` failed attempts.

    The delay is `factor * base ** retries`, scaled by a random amount of up
    to +/- `jitter`, and capped at `max_time` when one is given. A factor of
    0 means no delay at all.
    """
    if retries < 0:
        raise EligibilityValueError(f"retries can't be negative: {retries}")
    if factor < 0:
        raise EligibilityValueError(f"factor can't be negative: {factor}")
    if base <= 1:
        raise EligibilityValueError(f"base must be more than 1: {base}")
    if not 0 <= jitter <= 1:
        raise EligibilityValueError(f"jitter must be from 0 to 1: {jitter}")
    if max_time is not None and max_time <= 0:
        raise EligibilityValueError(f"max_time must be positive: {max_time}")

    delay = factor * base**retries * random.uniform(1 - jitter, 1 + jitter)
    return delay if max_time is None else min(delay, max_time)
