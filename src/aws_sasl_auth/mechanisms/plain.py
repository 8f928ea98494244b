#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from ..config import AuthCredential
from ..exceptions import ConfigurationError, TooManyStepsError


class PlainSaslConversation:
    """The PLAIN mechanism (RFC 4616): a single message carrying the username and
    password."""

    def __init__(self, credential: AuthCredential) -> None:
        if credential.username is None or credential.password is None:
            raise ConfigurationError("PLAIN requires a username and password.")
        self._credential = credential
        self._step = -1

    @property
    def mechanism_name(self) -> str:
        return self._credential.mechanism_name

    @property
    def has_initial_response(self) -> bool:
        return True

    @property
    def is_complete(self) -> bool:
        return self._step == 0

    async def evaluate_challenge(self, challenge: bytes) -> bytes:
        self._step += 1
        if self._step > 0:
            raise TooManyStepsError(self.mechanism_name)
        assert self._credential.username is not None  # noqa: S101
        assert self._credential.password is not None  # noqa: S101
        return b"\x00".join(
            (
                b"",
                self._credential.username.encode("utf-8"),
                self._credential.password.encode("utf-8"),
            )
        )
