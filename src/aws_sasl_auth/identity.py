#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class Secret:
    """A secret string held in a buffer that can be wiped once it's no longer needed.

    The value is only exposed through :py:meth:`reveal`. ``repr`` and ``str``
    never include it.
    """

    __slots__ = ("_buffer", "_cleared")

    def __init__(self, value: str | bytes) -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._buffer = bytearray(value)
        self._cleared = False

    @property
    def cleared(self) -> bool:
        return self._cleared

    def reveal(self) -> str:
        """Return the secret value as text.

        :raises ValueError: If the secret has already been cleared.
        """
        if self._cleared:
            raise ValueError("Secret has been cleared and can no longer be used.")
        return self._buffer.decode("utf-8")

    def clear(self) -> None:
        """Overwrite the buffer with zeros and release it."""
        self._buffer[:] = bytes(len(self._buffer))
        del self._buffer[:]
        self._cleared = True

    def __bool__(self) -> bool:
        return not self._cleared and len(self._buffer) > 0

    def __repr__(self) -> str:
        return "Secret('**********')"

    __str__ = __repr__


class CredentialOrigin(Enum):
    """Where a set of credentials came from."""

    EXPLICIT = "explicit"
    """Supplied by the driver configuration."""

    DERIVED = "derived"
    """Fetched, at least in part, from a metadata service."""


@dataclass(frozen=True, kw_only=True)
class AWSCredentialsIdentity:
    """AWS credentials resolved for a single authentication attempt."""

    access_key_id: str
    """A unique identifier for an AWS user or role."""

    secret_access_key: Secret = field(repr=False)
    """A secret key used in conjunction with the access key ID to sign requests."""

    session_token: Secret | None = field(default=None, repr=False)
    """A temporary token used to specify the current session for the supplied
    credentials."""

    origin: CredentialOrigin = CredentialOrigin.EXPLICIT

    expiration: datetime | None = None
    """The expiration time of the credentials, always in UTC."""

    @property
    def is_expired(self) -> bool:
        if self.expiration is None:
            return False
        return datetime.now(tz=UTC) >= self.expiration

    def clear(self) -> None:
        """Wipe the secret key and session token."""
        self.secret_access_key.clear()
        if self.session_token is not None:
            self.session_token.clear()
