"""Lightweight client for the Azure AD graph API.

Only the handful of calls needed to create and delete an application are
supported; this is not a general graph SDK.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import ClassVar, NoReturn, Self

import httpx

from ....application.exceptions import ProtocolError, SerializationError, TransportError
from ....domain.entities import is_absolute_uri
from ....domain.exceptions import InvalidArgumentError
from .codec import DirectoryProtocolCodec
from .models import ErrorPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectoryClientConfig:
    """Configuration for the directory client."""

    tenant_url: str
    access_token: str
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate the tenant URL and token."""
        if not is_absolute_uri(self.tenant_url):
            msg = f"Tenant URL must be an absolute http(s) URI: {self.tenant_url!r}"
            raise InvalidArgumentError(msg, argument="tenant_url")
        if not self.access_token:
            msg = "An access token is required to call the directory service."
            raise InvalidArgumentError(msg, argument="access-token")


class DirectoryClient:
    """
    Sends authenticated requests to a tenant's directory graph endpoint.

    Successful responses are returned open and streaming; callers release them
    with ``contextlib.closing`` (or ``response.close()``). Failed responses are
    closed before the error is raised.
    """

    API_VERSION: ClassVar[str] = "1.6"

    def __init__(
        self,
        config: DirectoryClientConfig,
        *,
        codec: DirectoryProtocolCodec | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Tenant URL, token and timeout.
            codec: Codec for request and error bodies.
            transport: HTTP transport override, used by tests.
        """
        self._config = config
        self._codec = codec or DirectoryProtocolCodec()
        self._http = httpx.Client(timeout=config.timeout, transport=transport)

    @property
    def codec(self) -> DirectoryProtocolCodec:
        """Codec used for request and response bodies."""
        return self._codec

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def build_uri(self, path: str) -> httpx.URL:
        """Build the request URI for ``path`` relative to the tenant root."""
        root = self._config.tenant_url.rstrip("/")
        return httpx.URL(f"{root}{path}", params={"api-version": self.API_VERSION})

    def send(self, method: str, path: str, json_body: str | None = None) -> httpx.Response:
        """
        Send a request and return the open response.

        Args:
            method: HTTP method.
            path: Path relative to the tenant root, starting with ``/``.
            json_body: Encoded JSON request body.

        Raises:
            ProtocolError: If the service answers with a structured error.
            TransportError: On connection failures or unstructured error responses.
        """
        uri = self.build_uri(path)
        headers = {"Authorization": f"Bearer {self._config.access_token}"}
        content: bytes | None = None
        if json_body:
            headers["Content-Type"] = "application/json"
            content = json_body.encode("utf-8")

        request = self._http.build_request(method, uri, headers=headers, content=content)
        logger.info("Sending request: %s %s", method, uri)

        try:
            response = self._http.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error("Request failed: %s %s: %s", method, uri, e)
            msg = f"{method} {uri} failed: {e}"
            raise TransportError(msg) from e

        if response.is_success:
            logger.info("Request succeeded: %d", response.status_code)
            return response

        try:
            self._raise_for_error(response)
        finally:
            response.close()

    def read(self, response: httpx.Response) -> bytes:
        """Read a streamed response body to the end."""
        try:
            return response.read()
        except httpx.HTTPError as e:
            msg = f"Failed to read response from {response.request.url}: {e}"
            raise TransportError(msg) from e

    def _raise_for_error(self, response: httpx.Response) -> NoReturn:
        """Raise the error matching a non-success response."""
        body = self.read(response)
        content_type = response.headers.get("Content-Type", "").lower()

        if "application/json" in content_type:
            try:
                payload = self._codec.decode(ErrorPayload, body)
            except SerializationError:
                logger.debug("Error response from %s is not a directory error payload", response.request.url)
            else:
                if payload.message is not None:
                    logger.error("Request failed: %s", payload.message)
                    raise ProtocolError(
                        payload.message,
                        code=payload.code,
                        status_code=response.status_code,
                    )

        logger.error("Request failed: %d", response.status_code)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"{response.request.method} {response.request.url} failed with status {response.status_code}"
            raise TransportError(msg) from e
        msg = f"Unexpected response status {response.status_code}"
        raise TransportError(msg)
