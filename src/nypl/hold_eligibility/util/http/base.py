from __future__ import annotations

import httpx

from nypl import hold_eligibility
from nypl.hold_eligibility.util.http.exception import BadResponseException

# Reported when the build did not record a version
UNKNOWN_VERSION = "x.x.x"


def user_agent() -> str:
    return f"Hold Request Eligibility/{hold_eligibility.__version__ or UNKNOWN_VERSION}"


def check_response(url: str | httpx.URL, response: httpx.Response) -> httpx.Response:
    """Return the response if it is a 2xx.

    :raise BadResponseException: For any other status code.
    """
    if not response.is_success:
        raise BadResponseException(url, response)
    return response
