#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import pytest
from aws_sasl_auth.config import (
    AWS_SESSION_TOKEN,
    DEFAULT_SOURCE,
    MONGODB_AWS,
    AuthConfig,
    AuthCredential,
)
from aws_sasl_auth.exceptions import ConfigurationError
from aws_sasl_auth.metadata import MetadataConfig


@pytest.mark.parametrize("mechanism", [None, ""])
def test_empty_mechanism_name(mechanism: str | None):
    credential = AuthCredential(mechanism=mechanism)
    with pytest.raises(ConfigurationError):
        credential.mechanism_name


def test_mechanism_name_is_upper_cased():
    assert AuthCredential(mechanism="mongodb-aws").mechanism_name == MONGODB_AWS


def test_credential_defaults():
    credential = AuthCredential(mechanism=MONGODB_AWS)
    assert credential.source == DEFAULT_SOURCE
    assert credential.username is None
    assert credential.password is None
    assert not credential.has_explicit_credentials


@pytest.mark.parametrize(
    "username,password,expected",
    [
        ("AKID", "SECRET", True),
        ("AKID", None, False),
        (None, "SECRET", False),
    ],
)
def test_has_explicit_credentials(
    username: str | None, password: str | None, expected: bool
):
    credential = AuthCredential(
        mechanism=MONGODB_AWS, username=username, password=password
    )
    assert credential.has_explicit_credentials is expected


def test_password_not_in_repr():
    credential = AuthCredential(
        mechanism=MONGODB_AWS,
        username="AKID",
        password="SECRET",
        mechanism_properties={AWS_SESSION_TOKEN: "TOKEN"},
    )
    assert "SECRET" not in repr(credential)
    assert "TOKEN" not in repr(credential)


def test_mechanism_property_lookup_ignores_case():
    credential = AuthCredential(
        mechanism=MONGODB_AWS, mechanism_properties={"aws_session_token": "TOKEN"}
    )
    assert credential.get_mechanism_property(AWS_SESSION_TOKEN) == "TOKEN"
    assert credential.get_mechanism_property("missing") is None
    assert credential.get_mechanism_property("missing", "default") == "default"


def test_auth_config_defaults():
    config = AuthConfig()
    assert config.metadata == MetadataConfig()
    assert config.metadata.timeout == 2


@pytest.mark.parametrize("timeout", [0, -1])
def test_metadata_config_rejects_non_positive_timeout(timeout: float):
    with pytest.raises(ValueError):
        MetadataConfig(timeout=timeout)
