from __future__ import annotations

from types import TracebackType
from typing import Any, Self

import httpx

from nypl.hold_eligibility.util.http.base import check_response, user_agent
from nypl.hold_eligibility.util.http.exception import (
    RequestNetworkException,
    RequestTimedOut,
)
from nypl.hold_eligibility.util.log import LoggerMixin

DEFAULT_TIMEOUT = 20.0
MAX_REDIRECTS = 2


class AsyncClient(LoggerMixin):
    """A pooled httpx.AsyncClient that only lets 2xx responses through.

    Every failure is raised as a RemoteIntegrationException subclass. Nothing
    is retried.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._httpx_client = httpx.AsyncClient(
            headers={"User-Agent": user_agent()},
            timeout=httpx.Timeout(timeout or DEFAULT_TIMEOUT, pool=None),
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            transport=transport,
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        :param kwargs: Passed on to httpx.AsyncClient.request.
        :raise BadResponseException: If the response is not a 2xx.
        :raise RequestNetworkException: If there was no response.
        """
        try:
            response = await self._httpx_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimedOut(url, str(e)) from e
        except httpx.RequestError as e:
            raise RequestNetworkException(url, str(e)) from e

        self.log.info(f"{method} {url}: {response.status_code}")
        return check_response(url, response)

    async def __aenter__(self) -> Self:
        await self._httpx_client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self._httpx_client.__aexit__(exc_type, exc_value, traceback)
