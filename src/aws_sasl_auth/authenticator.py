#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Mapping
from typing import Any, Final

from .config import AuthConfig, AuthCredential
from .exceptions import AuthenticationError, ProtocolError, ServerError
from .http.aiohttp import AIOHTTPClient
from .interfaces.connection import AuthConnection
from .interfaces.http import HTTPClient
from .interfaces.sasl import SaslConversation
from .mechanisms import create_conversation

logger: Final = logging.getLogger(__name__)


class SaslAuthenticator:
    """Authenticates driver connections with a SASL mechanism.

    Every call to :py:meth:`authenticate` starts a new conversation. A failed
    attempt is never resumed; callers that want to retry call
    :py:meth:`authenticate` again on a new connection.
    """

    def __init__(
        self,
        credential: AuthCredential,
        *,
        config: AuthConfig | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        """
        :param credential: The authentication settings supplied to the driver.
        :param config: Timeouts and endpoints used while authenticating.
        :param http_client: Client used to reach the metadata service. Defaults to
            an :py:class:`AIOHTTPClient`.
        """
        self._credential = credential
        self._config = config or AuthConfig()
        self._http_client = http_client or AIOHTTPClient()

    @property
    def credential(self) -> AuthCredential:
        return self._credential

    async def authenticate(self, connection: AuthConnection) -> None:
        """Run one authentication attempt on ``connection``.

        :raises AuthenticationError: If the attempt fails for any reason. The
            connection has been closed by the time this is raised.
        """
        mechanism = self._credential.mechanism or "SASL"
        try:
            conversation = create_conversation(
                self._credential, config=self._config, http_client=self._http_client
            )
            mechanism = conversation.mechanism_name
            await self._converse(connection, conversation)
        except Exception as e:
            logger.debug("%s authentication failed: %r", mechanism, e)
            await self._close(connection)
            raise AuthenticationError(
                f"{mechanism} authentication failed: {e}", mechanism=mechanism
            ) from e
        logger.debug("%s authentication succeeded.", mechanism)

    async def _close(self, connection: AuthConnection) -> None:
        try:
            await connection.close()
        except Exception as e:
            logger.debug(
                "Failed to close connection after authentication error: %r", e
            )

    async def _converse(
        self, connection: AuthConnection, conversation: SaslConversation
    ) -> None:
        payload = b""
        if conversation.has_initial_response:
            payload = await conversation.evaluate_challenge(b"")

        reply = await self._send(
            connection,
            {
                "saslStart": 1,
                "mechanism": conversation.mechanism_name,
                "payload": payload,
                "autoAuthorize": 1,
            },
        )
        while not reply.get("done"):
            payload = await conversation.evaluate_challenge(bytes(reply["payload"]))
            reply = await self._send(
                connection,
                {
                    "saslContinue": 1,
                    "conversationId": reply["conversationId"],
                    "payload": payload,
                },
            )

        if not conversation.is_complete:
            raise ProtocolError(
                f"Server completed the {conversation.mechanism_name} conversation "
                "before the client did"
            )

    async def _send(
        self, connection: AuthConnection, command: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        reply = await connection.command(self._credential.source, command)
        if reply.get("ok") != 1:
            raise ServerError(
                reply.get("errmsg", "Authentication command failed"),
                code=reply.get("code"),
            )
        return reply
