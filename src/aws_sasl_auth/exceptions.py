#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0


class AuthError(Exception):
    """Base exception type for all exceptions raised by aws-sasl-auth."""


class ConfigurationError(AuthError, ValueError):
    """The supplied credential or configuration can't be used to authenticate."""


class ProtocolError(AuthError):
    """The server sent a message that violates the mechanism's exchange."""


class InvalidServerNonceError(ProtocolError):
    """The server nonce has the wrong length or doesn't echo the client nonce."""


class TooManyStepsError(ProtocolError):
    """More challenges were received than the mechanism allows."""

    def __init__(self, mechanism: str) -> None:
        super().__init__(f"Too many steps involved in the {mechanism} negotiation.")
        self.mechanism = mechanism


class CredentialSourceError(AuthError):
    """Credentials could not be retrieved from the metadata service."""


class SigningError(AuthError):
    """The authorization signature could not be computed."""


class ServerError(AuthError):
    """The server rejected a SASL command."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class AuthenticationError(AuthError):
    """An authentication attempt failed.

    The connection the attempt was made on must not be reused. The original
    error is available as ``__cause__``.
    """

    def __init__(self, message: str, *, mechanism: str | None = None) -> None:
        super().__init__(message)
        self.mechanism = mechanism
