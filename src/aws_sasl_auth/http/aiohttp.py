#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import aiohttp

from . import HTTPRequest, HTTPResponse


class AIOHTTPClient:
    """Implementation of :py:class:`..interfaces.HTTPClient` using aiohttp."""

    def __init__(self, *, _session: aiohttp.ClientSession | None = None) -> None:
        """
        :param _session: A session to send requests with. If not set, each request
            is sent with a session of its own which is closed afterwards.
        """
        self._session = _session

    async def send(
        self, *, request: HTTPRequest, timeout: float | None = None
    ) -> HTTPResponse:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination URL and headers.
        :param timeout: Total number of seconds allowed for the exchange.
        """
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        if self._session is not None:
            return await self._send(self._session, request, client_timeout)

        async with aiohttp.ClientSession() as session:
            return await self._send(session, request, client_timeout)

    async def _send(
        self,
        session: aiohttp.ClientSession,
        request: HTTPRequest,
        timeout: aiohttp.ClientTimeout,
    ) -> HTTPResponse:
        async with session.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            timeout=timeout,
        ) as resp:
            return await self._marshal_response(resp)

    async def _marshal_response(
        self, aiohttp_resp: aiohttp.ClientResponse
    ) -> HTTPResponse:
        """Convert a ``aiohttp.ClientResponse`` to a :py:class:`HTTPResponse`."""
        return HTTPResponse(
            status=aiohttp_resp.status,
            headers=dict(aiohttp_resp.headers.items()),
            body=await aiohttp_resp.read(),
            reason=aiohttp_resp.reason,
        )
