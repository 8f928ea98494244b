#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from datetime import UTC, datetime
from secrets import token_bytes
from typing import Any, Final

from ..codec import decode_document, encode_document
from ..config import AuthCredential
from ..conversation import ConversationState, ConversationStatus
from ..exceptions import InvalidServerNonceError, ProtocolError, TooManyStepsError
from ..metadata import MetadataEndpointClient
from ..resolver import ConversationCredentialsResolver
from ..signers import GS2_CB_FLAG, SIGV4_TIMESTAMP_FORMAT, StsRequestSigner

logger: Final = logging.getLogger(__name__)

NONCE_LENGTH = 32


class AwsSaslConversation:
    """Client side of the ``MONGODB-AWS`` exchange.

    Step 0 sends a fresh client nonce. Step 1 checks the server nonce, resolves
    credentials and sends a SigV4 signature of an STS GetCallerIdentity request.
    """

    def __init__(
        self,
        credential: AuthCredential,
        *,
        metadata_client: MetadataEndpointClient,
        signer: StsRequestSigner | None = None,
    ) -> None:
        self._credential = credential
        self._metadata_client = metadata_client
        self._signer = signer or StsRequestSigner()
        self._state = ConversationState()

    @property
    def mechanism_name(self) -> str:
        return self._credential.mechanism_name

    @property
    def has_initial_response(self) -> bool:
        return True

    @property
    def status(self) -> ConversationStatus:
        return self._state.status

    @property
    def is_complete(self) -> bool:
        return self._state.status is ConversationStatus.COMPLETE

    async def evaluate_challenge(self, challenge: bytes) -> bytes:
        if self._state.failed:
            raise ProtocolError(
                f"The {self.mechanism_name} conversation has failed and can't be "
                "resumed; start a new one."
            )
        self._state.step += 1
        logger.debug("Evaluating %s step %d.", self.mechanism_name, self._state.step)
        try:
            if self._state.step == 0:
                return self._client_first_message()
            if self._state.step == 1:
                return await self._client_final_message(challenge)
            raise TooManyStepsError(self.mechanism_name)
        except Exception:
            self._state.failed = True
            raise

    def _client_first_message(self) -> bytes:
        self._state.client_nonce = token_bytes(NONCE_LENGTH)
        return encode_document({"r": self._state.client_nonce, "p": ord(GS2_CB_FLAG)})

    async def _client_final_message(self, server_first: bytes) -> bytes:
        host, server_nonce = self._parse_server_first(server_first)
        resolver = ConversationCredentialsResolver(
            self._credential, self._metadata_client, self._state
        )
        try:
            identity = await resolver.resolve()
            try:
                timestamp = datetime.now(UTC).strftime(SIGV4_TIMESTAMP_FORMAT)
                header = self._signer.sign(
                    identity=identity,
                    host=host,
                    server_nonce=server_nonce,
                    timestamp=timestamp,
                )
                message: dict[str, Any] = {"a": str(header), "d": header.timestamp}
                if identity.session_token:
                    message["t"] = identity.session_token.reveal()
                return encode_document(message)
            finally:
                identity.clear()
        finally:
            self._state.metadata_response = None

    def _parse_server_first(self, server_first: bytes) -> tuple[str, bytes]:
        document = decode_document(server_first)
        host = document.get("h")
        server_nonce = document.get("s")
        if not isinstance(host, str) or not isinstance(server_nonce, bytes):
            raise ProtocolError(
                "Server first message must contain a string 'h' and a binary 's'"
            )
        if len(server_nonce) != 2 * NONCE_LENGTH or (
            server_nonce[:NONCE_LENGTH] != self._state.client_nonce
        ):
            raise InvalidServerNonceError("Invalid server nonce")
        return host, bytes(server_nonce)
