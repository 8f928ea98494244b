#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Any, Protocol


class AuthConnection(Protocol):
    """The part of a driver connection an authenticator talks to.

    Framing and document serialization of commands are the connection's concern.
    """

    async def command(
        self, database: str, command: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        """Run a command against ``database`` and return the server's reply."""
        ...

    async def close(self) -> None:
        """Close the connection. Called when authentication fails."""
        ...
