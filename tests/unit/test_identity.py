#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime, timedelta

import pytest
from aws_sasl_auth.identity import AWSCredentialsIdentity, CredentialOrigin, Secret


def test_secret_reveal():
    secret = Secret("s3cr3t")
    assert secret.reveal() == "s3cr3t"
    assert not secret.cleared
    assert secret


def test_secret_accepts_bytes():
    assert Secret(b"abc").reveal() == "abc"


def test_secret_clear():
    secret = Secret("s3cr3t")
    secret.clear()
    assert secret.cleared
    assert not secret
    with pytest.raises(ValueError):
        secret.reveal()


def test_secret_repr_is_masked():
    secret = Secret("s3cr3t")
    assert "s3cr3t" not in repr(secret)
    assert "s3cr3t" not in str(secret)


def test_identity_repr_hides_secrets():
    identity = AWSCredentialsIdentity(
        access_key_id="AKID",
        secret_access_key=Secret("s3cr3t"),
        session_token=Secret("tok3n"),
    )
    assert "AKID" in repr(identity)
    assert "s3cr3t" not in repr(identity)
    assert "tok3n" not in repr(identity)


def test_identity_defaults():
    identity = AWSCredentialsIdentity(
        access_key_id="AKID", secret_access_key=Secret("SECRET")
    )
    assert identity.session_token is None
    assert identity.origin is CredentialOrigin.EXPLICIT
    assert identity.expiration is None
    assert not identity.is_expired


@pytest.mark.parametrize(
    "delta,expired",
    [(timedelta(hours=1), False), (timedelta(hours=-1), True)],
)
def test_identity_expiration(delta: timedelta, expired: bool):
    identity = AWSCredentialsIdentity(
        access_key_id="AKID",
        secret_access_key=Secret("SECRET"),
        expiration=datetime.now(UTC) + delta,
    )
    assert identity.is_expired is expired


def test_identity_clear():
    identity = AWSCredentialsIdentity(
        access_key_id="AKID",
        secret_access_key=Secret("SECRET"),
        session_token=Secret("TOKEN"),
    )
    identity.clear()
    assert identity.secret_access_key.cleared
    assert identity.session_token is not None
    assert identity.session_token.cleared
