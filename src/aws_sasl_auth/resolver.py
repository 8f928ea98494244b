#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import json
import logging
from datetime import UTC, datetime
from typing import Any, Final

from .config import AWS_SESSION_TOKEN, AuthCredential
from .conversation import ConversationState
from .exceptions import ConfigurationError, CredentialSourceError
from .identity import AWSCredentialsIdentity, CredentialOrigin, Secret
from .metadata import MetadataEndpointClient

logger: Final = logging.getLogger(__name__)


class ConversationCredentialsResolver:
    """Resolves AWS credentials for a single conversation attempt.

    Explicitly configured values are used as-is. Anything missing is read from the
    metadata credentials document, which is fetched at most once and kept in the
    conversation's state.
    """

    def __init__(
        self,
        credential: AuthCredential,
        metadata_client: MetadataEndpointClient,
        state: ConversationState,
    ) -> None:
        self._credential = credential
        self._metadata_client = metadata_client
        self._state = state

    async def resolve(self) -> AWSCredentialsIdentity:
        """Resolve the access key ID, secret key and session token.

        :raises ConfigurationError: If a session token property was set without both
            a username and password.
        :raises CredentialSourceError: If the metadata document can't be fetched or
            lacks a required field.
        """
        # The session token is checked first so a bad configuration fails before
        # any request is made.
        session_token = await self.session_token()
        access_key_id = await self.access_key_id()
        secret_access_key = await self.secret_access_key()

        if self._credential.has_explicit_credentials:
            origin = CredentialOrigin.EXPLICIT
        else:
            origin = CredentialOrigin.DERIVED
        logger.debug("Resolved %s AWS credentials.", origin.value)

        return AWSCredentialsIdentity(
            access_key_id=access_key_id,
            secret_access_key=Secret(secret_access_key),
            session_token=Secret(session_token) if session_token else None,
            origin=origin,
            expiration=await self._expiration(origin),
        )

    async def access_key_id(self) -> str:
        if self._credential.username is not None:
            return self._credential.username
        return self._required_field(await self._document(), "AccessKeyId")

    async def secret_access_key(self) -> str:
        if self._credential.password is not None:
            return self._credential.password
        return self._required_field(await self._document(), "SecretAccessKey")

    async def session_token(self) -> str | None:
        token = self._credential.get_mechanism_property(AWS_SESSION_TOKEN)
        if self._credential.has_explicit_credentials:
            return token
        if token is not None:
            raise ConfigurationError(
                "The connection string contains auth properties and no username "
                "and password"
            )
        return self._required_field(await self._document(), "Token")

    async def _expiration(self, origin: CredentialOrigin) -> datetime | None:
        if origin is CredentialOrigin.EXPLICIT:
            return None
        expiration = (await self._document()).get("Expiration")
        if not isinstance(expiration, str):
            return None
        try:
            parsed = datetime.fromisoformat(expiration)
        except ValueError:
            logger.debug("Ignoring unparseable credential expiration.")
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)

    async def _document(self) -> dict[str, Any]:
        if self._state.metadata_response is None:
            self._state.metadata_response = (
                await self._metadata_client.fetch_credentials_document()
            )
        try:
            document = json.loads(self._state.metadata_response)
        except ValueError as e:
            raise CredentialSourceError(
                "Unable to parse JSON from the metadata credentials response"
            ) from e
        if not isinstance(document, dict):
            raise CredentialSourceError(
                "Metadata credentials response is not a JSON object"
            )
        return document

    def _required_field(self, document: dict[str, Any], name: str) -> str:
        value = document.get(name)
        if not isinstance(value, str):
            raise CredentialSourceError(
                f"Metadata credentials response is missing the {name} field"
            )
        return value
