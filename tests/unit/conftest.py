#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import json
from unittest.mock import AsyncMock

import pytest
from aws_sasl_auth.config import MONGODB_AWS, AuthCredential

CLIENT_NONCE = bytes(range(32))
SERVER_NONCE = bytes(range(64))

METADATA_RESPONSE = {
    "AccessKeyId": "akid123",
    "SecretAccessKey": "s3cr3t",
    "Token": "session_token",
    "Expiration": "2099-03-13T07:28:47Z",
}


@pytest.fixture
def explicit_credential() -> AuthCredential:
    return AuthCredential(mechanism=MONGODB_AWS, username="AKID", password="SECRET")


@pytest.fixture
def derived_credential() -> AuthCredential:
    return AuthCredential(mechanism=MONGODB_AWS)


@pytest.fixture
def metadata_client() -> AsyncMock:
    client = AsyncMock()
    client.fetch_credentials_document.return_value = json.dumps(METADATA_RESPONSE)
    return client
