#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..http import HTTPRequest


class HTTPResponse(Protocol):
    @property
    def status(self) -> int:
        """The 3 digit response status code (1xx, 2xx, 3xx, 4xx, 5xx)."""
        ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def reason(self) -> str | None:
        """Optional string provided by the server explaining the status."""
        ...

    async def consume_body_async(self) -> bytes:
        """Read the response body into memory and return it."""
        ...


class HTTPClient(Protocol):
    """An asynchronous HTTP client."""

    async def send(
        self, *, request: "HTTPRequest", timeout: float | None = None
    ) -> HTTPResponse:
        """Send an HTTP request and return the response.

        :param request: The request including destination URL and headers.
        :param timeout: Total number of seconds allowed for the exchange.
        """
        ...
