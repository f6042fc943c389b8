"""Synchronous HTTP client for the Cloud Servers API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from cloudservers.api.exceptions import (
    CloudServersAPIError,
    CloudServersAuthenticationError,
    CloudServersBadRequestError,
    CloudServersError,
    CloudServersForbiddenError,
    CloudServersNotFoundError,
    CloudServersRequestTooLargeError,
    CloudServersServerError,
    CloudServersTransportError,
)
from cloudservers.api.session import Session

if TYPE_CHECKING:
    from cloudservers.config import CloudServersConfig

logger = logging.getLogger(__name__)

AUTH_URL = "https://auth.api.rackspacecloud.com/v1.0"
USER_AGENT = "python-cloudservers"

_STATUS_ERRORS: dict[int, tuple[type[CloudServersError], str]] = {
    400: (
        CloudServersBadRequestError,
        "Access is denied for the given request. Check your X-Auth-Token "
        "header. The token may have expired.",
    ),
    403: (CloudServersForbiddenError, "Access is denied for the given request."),
    404: (
        CloudServersNotFoundError,
        "The server has not found anything matching the Request URI.",
    ),
    413: (
        CloudServersRequestTooLargeError,
        "The server is refusing to process a request because the request "
        "entity is larger than the server is willing or able to process.",
    ),
    500: (
        CloudServersServerError,
        "The server encountered an unexpected condition which prevented it "
        "from fulfilling the request.",
    ),
}


@dataclass
class APIResponse:
    """Status code plus decoded body of a management request."""

    status_code: int
    data: dict[str, Any] = field(default_factory=dict)
    text: str = ""
    content: bytes = b""

    def expect(self, *codes: int) -> bool:
        """True when the status is one the caller treats as success."""
        if self.status_code in codes:
            return True
        logger.warning(
            "Unexpected status %s, expected one of %s", self.status_code, codes
        )
        return False


class CloudServersClient:
    """API client bound to a caller-owned :class:`Session`.

    Uses a single long-lived httpx.Client to reuse TCP/TLS connections.
    The client is lazily initialized on first request. Authentication happens
    on the first request that needs a token; a 401 causes exactly one
    re-authentication and one retry.
    """

    def __init__(
        self,
        session: Session,
        *,
        auth_url: str = AUTH_URL,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._session = session
        self._auth_url = auth_url
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_config(
        cls,
        config: CloudServersConfig,
        session: Session | None = None,
        **kwargs: Any,
    ) -> CloudServersClient:
        return cls(
            session or Session.from_config(config),
            auth_url=config.auth.auth_url,
            timeout=config.http.timeout,
            user_agent=config.http.user_agent,
            **kwargs,
        )

    @property
    def session(self) -> Session:
        return self._session

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                headers={"User-Agent": self._user_agent},
                timeout=httpx.Timeout(self._timeout, connect=10.0),
                transport=self._transport,
            )
        return self._client

    def authenticate(self) -> str:
        """Exchange the session credentials for a token and management URL."""
        client = self._get_client()
        headers = {
            "X-Auth-User": self._session.api_user,
            "X-Auth-Key": self._session.api_key,
        }
        logger.info(
            "Authenticating %s against %s", self._session.api_user, self._auth_url
        )
        try:
            response = client.request("GET", self._auth_url, headers=headers)
        except httpx.TransportError as exc:
            raise CloudServersTransportError("Unable to process this request") from exc

        if response.status_code in (401, 403):
            raise CloudServersAuthenticationError(
                "Invalid API credentials", response.status_code
            )
        self._handle_errors(response)

        token = response.headers.get("X-Auth-Token")
        management_url = response.headers.get("X-Server-Management-Url")
        if not token or not management_url:
            raise CloudServersAuthenticationError(
                "Authentication response did not include a token and management URL",
                response.status_code,
            )
        self._session.set_token(token.strip(), management_url.strip())
        return self._session.auth_token

    def _send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None,
        accept: str,
    ) -> httpx.Response:
        client = self._get_client()
        headers = {"X-Auth-Token": self._session.auth_token, "Accept": accept}
        url = f"{self._session.management_url}{path}"
        try:
            response = client.request(method, url, json=json, headers=headers)
        except httpx.TransportError as exc:
            raise CloudServersTransportError("Unable to process this request") from exc
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        accept: str = "application/json",
    ) -> APIResponse:
        if not self._session.is_authenticated:
            self.authenticate()
        response = self._send(method, path, json, accept)
        if response.status_code == 401:
            logger.info("Token rejected, re-authenticating")
            self._session.invalidate()
            self.authenticate()
            response = self._send(method, path, json, accept)
            if response.status_code == 401:
                raise CloudServersAuthenticationError(
                    "Access is denied after re-authentication", 401
                )
        self._handle_errors(response)
        return APIResponse(
            status_code=response.status_code,
            data=self._decode(response, accept),
            text=response.text,
            content=response.content,
        )

    @staticmethod
    def _decode(response: httpx.Response, accept: str) -> dict[str, Any]:
        if response.status_code == 204 or not response.content:
            return {}
        if accept != "application/json":
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def _handle_errors(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        if response.status_code in _STATUS_ERRORS:
            error_class, message = _STATUS_ERRORS[response.status_code]
            raise error_class(message, response.status_code)
        raise CloudServersAPIError(
            f"API error {response.status_code}: {response.text}",
            response.status_code,
        )

    def get(self, path: str, **kwargs: Any) -> APIResponse:
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> APIResponse:
        return self._request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> APIResponse:
        return self._request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> APIResponse:
        return self._request("DELETE", path, **kwargs)

    def close(self) -> None:
        if self._client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> CloudServersClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
