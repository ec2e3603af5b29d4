import pytest

from nypl.hold_eligibility.core.exceptions import EligibilityValueError
from nypl.hold_eligibility.util.backoff import exponential_backoff


@pytest.mark.parametrize("retries, expected", [(0, 1), (1, 2), (2, 4), (3, 8)])
def test_exponential_backoff(retries: int, expected: int) -> None:
    assert exponential_backoff(retries, jitter=0) == expected
    assert exponential_backoff(retries, factor=0.5, jitter=0) == expected / 2


def test_max_time() -> None:
    assert exponential_backoff(1, max_time=5, jitter=0) == 2
    assert exponential_backoff(10, max_time=5, jitter=0) == 5


@pytest.mark.parametrize("jitter", [0.0, 0.25, 1.0])
def test_jitter(jitter: float) -> None:
    for retries in range(4):
        delay = exponential_backoff(retries, base=3, jitter=jitter)
        assert 3**retries * (1 - jitter) <= delay <= 3**retries * (1 + jitter)


def test_zero_factor() -> None:
    # Test holds are retried right away unless a factor is configured
    assert exponential_backoff(0, factor=0) == 0.0
    assert exponential_backoff(50, factor=0) == 0.0


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"retries": -1}, "retries can't be negative: -1"),
        ({"retries": 0, "factor": -1.0}, "factor can't be negative"),
        ({"retries": 0, "base": 1.0}, "base must be more than 1"),
        ({"retries": 0, "jitter": 1.5}, "jitter must be from 0 to 1"),
        ({"retries": 0, "max_time": 0}, "max_time must be positive"),
    ],
)
def test_invalid(kwargs: dict[str, float], message: str) -> None:
    with pytest.raises(EligibilityValueError, match=message):
        exponential_backoff(**kwargs)  # type: ignore[arg-type]
