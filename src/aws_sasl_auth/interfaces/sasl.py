#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Protocol, runtime_checkable


@runtime_checkable
class SaslConversation(Protocol):
    """One run of a mechanism's challenge-response exchange.

    A conversation is created for a single authentication attempt and is never
    reused, including for retries.
    """

    @property
    def mechanism_name(self) -> str:
        """The name of the mechanism sent in ``saslStart``."""
        ...

    @property
    def has_initial_response(self) -> bool:
        """Whether the client speaks first.

        If True, :py:meth:`evaluate_challenge` is called with an empty challenge to
        produce the ``saslStart`` payload.
        """
        ...

    @property
    def is_complete(self) -> bool:
        """Whether the client has sent its last message."""
        ...

    async def evaluate_challenge(self, challenge: bytes) -> bytes:
        """Compute the response to a server challenge.

        :param challenge: The payload of the server's last reply.
        :raises ProtocolError: If the challenge is malformed or the mechanism
            doesn't allow another step.
        """
        ...
