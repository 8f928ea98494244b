#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable
from typing import TypeAlias

from ..config import MONGODB_AWS, PLAIN, AuthConfig, AuthCredential
from ..exceptions import ConfigurationError
from ..interfaces.http import HTTPClient
from ..interfaces.sasl import SaslConversation
from ..metadata import MetadataEndpointClient
from .aws import AwsSaslConversation
from .plain import PlainSaslConversation

ConversationFactory: TypeAlias = Callable[
    [AuthCredential, AuthConfig, HTTPClient], SaslConversation
]


def _aws(
    credential: AuthCredential, config: AuthConfig, http_client: HTTPClient
) -> SaslConversation:
    return AwsSaslConversation(
        credential,
        metadata_client=MetadataEndpointClient(http_client, config.metadata),
    )


def _plain(
    credential: AuthCredential, config: AuthConfig, http_client: HTTPClient
) -> SaslConversation:
    return PlainSaslConversation(credential)


_MECHANISMS: dict[str, ConversationFactory] = {
    MONGODB_AWS: _aws,
    PLAIN: _plain,
}


def create_conversation(
    credential: AuthCredential, *, config: AuthConfig, http_client: HTTPClient
) -> SaslConversation:
    """Create a fresh conversation for the credential's mechanism.

    :raises ConfigurationError: If the mechanism is empty or not supported.
    """
    name = credential.mechanism_name
    try:
        factory = _MECHANISMS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported authentication mechanism: {name}"
        ) from None
    return factory(credential, config, http_client)


__all__ = (
    "AwsSaslConversation",
    "ConversationFactory",
    "PlainSaslConversation",
    "create_conversation",
)
