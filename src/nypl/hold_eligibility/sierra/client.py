from __future__ import annotations

from json import JSONDecodeError
from types import TracebackType
from typing import Any, Self

import httpx

from nypl.hold_eligibility.core.exceptions import EligibilityValueError
from nypl.hold_eligibility.sierra.credentials import SierraCredentials
from nypl.hold_eligibility.sierra.exception import SierraApiError
from nypl.hold_eligibility.util.http.async_http import AsyncClient
from nypl.hold_eligibility.util.http.exception import (
    BadResponseException,
    RemoteIntegrationException,
)
from nypl.hold_eligibility.util.log import LoggerMixin


class SierraClient(LoggerMixin):
    """A minimal client for the Sierra REST API.

    Each instance holds its own HTTP connection pool and access token, so an
    instance should be used for a single eligibility check and then closed:

        async with SierraClient(credentials) as sierra:
            await sierra.authenticate()
            patron = await sierra.get(f"patrons/{patron_id}")

    Every failure is raised as a SierraApiError.
    """

    TOKEN_PATH = "token"

    def __init__(
        self,
        credentials: SierraCredentials,
        *,
        timeout: float | None = None,
        client: AsyncClient | None = None,
    ) -> None:
        self._credentials = credentials
        self._client = client or AsyncClient(timeout=timeout)
        self._access_token: str | None = None

    @property
    def base_url(self) -> str:
        return self._credentials.base_url

    @property
    def authenticated(self) -> bool:
        return self._access_token is not None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        :param path: Joined to the base url, so it must not start with '/'.
        """
        if path.startswith("/"):
            raise EligibilityValueError(
                f"Sierra URL path {path} should not have a leading '/'"
            )
        try:
            return await self._client.request(method, self.base_url + path, **kwargs)
        except BadResponseException as e:
            raise SierraApiError.from_bad_response(e) from e
        except RemoteIntegrationException as e:
            raise SierraApiError.from_network_error(e) from e

    def _auth_header(self) -> dict[str, str]:
        if self._access_token is None:
            raise EligibilityValueError(
                "The Sierra client must authenticate before making API requests."
            )
        return {"Authorization": f"Bearer {self._access_token}"}

    def _json(self, path: str, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (JSONDecodeError, UnicodeDecodeError) as e:
            raise SierraApiError(
                self.base_url + path,
                "Sierra returned a response that is not valid JSON.",
                status_code=response.status_code,
                debug_message=f"Response content: {response.text}",
            ) from e

    async def authenticate(self) -> None:
        """Exchange the API key and secret for an access token."""
        response = await self._request(
            "POST",
            self.TOKEN_PATH,
            auth=(self._credentials.key, self._credentials.secret),
            data={"grant_type": "client_credentials"},
        )
        body = self._json(self.TOKEN_PATH, response)
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise SierraApiError(
                self.base_url + self.TOKEN_PATH,
                "Sierra did not return an access token.",
                status_code=response.status_code,
            )
        self._access_token = token

    async def get(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a Sierra API path and return the decoded JSON body."""
        response = await self._request(
            "GET", path, headers=self._auth_header(), params=params
        )
        return self._json(path, response)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        """POST a JSON body to a Sierra API path and return the decoded JSON
        body, or None if Sierra sent back no content."""
        response = await self._request(
            "POST", path, headers=self._auth_header(), json=body
        )
        return self._json(path, response)

    async def __aenter__(self) -> Self:
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_value, traceback)
