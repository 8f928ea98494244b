#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from unittest.mock import AsyncMock

import pytest
from aws_sasl_auth.config import MONGODB_AWS, PLAIN, AuthConfig, AuthCredential
from aws_sasl_auth.exceptions import ConfigurationError, TooManyStepsError
from aws_sasl_auth.interfaces import SaslConversation
from aws_sasl_auth.mechanisms import (
    AwsSaslConversation,
    PlainSaslConversation,
    create_conversation,
)


def _plain_credential() -> AuthCredential:
    return AuthCredential(mechanism=PLAIN, username="user", password="pencil")


async def test_plain_single_step():
    conversation = PlainSaslConversation(_plain_credential())
    assert isinstance(conversation, SaslConversation)
    assert conversation.mechanism_name == PLAIN
    assert not conversation.is_complete

    assert await conversation.evaluate_challenge(b"") == b"\x00user\x00pencil"
    assert conversation.is_complete

    with pytest.raises(TooManyStepsError, match="PLAIN"):
        await conversation.evaluate_challenge(b"")


@pytest.mark.parametrize("username,password", [(None, "pencil"), ("user", None)])
def test_plain_requires_username_and_password(
    username: str | None, password: str | None
):
    credential = AuthCredential(mechanism=PLAIN, username=username, password=password)
    with pytest.raises(ConfigurationError):
        PlainSaslConversation(credential)


@pytest.mark.parametrize(
    "credential,expected",
    [
        (AuthCredential(mechanism=MONGODB_AWS), AwsSaslConversation),
        (AuthCredential(mechanism="mongodb-aws"), AwsSaslConversation),
        (_plain_credential(), PlainSaslConversation),
    ],
)
def test_create_conversation(credential: AuthCredential, expected: type):
    conversation = create_conversation(
        credential, config=AuthConfig(), http_client=AsyncMock()
    )
    assert isinstance(conversation, expected)


def test_create_conversation_returns_new_instances():
    credential = AuthCredential(mechanism=MONGODB_AWS)
    first = create_conversation(credential, config=AuthConfig(), http_client=AsyncMock())
    second = create_conversation(
        credential, config=AuthConfig(), http_client=AsyncMock()
    )
    assert first is not second


@pytest.mark.parametrize("mechanism", [None, "", "GSSAPI"])
def test_create_conversation_rejects_mechanism(mechanism: str | None):
    with pytest.raises(ConfigurationError):
        create_conversation(
            AuthCredential(mechanism=mechanism),
            config=AuthConfig(),
            http_client=AsyncMock(),
        )
