#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field


@dataclass(kw_only=True)
class HTTPRequest:
    """HTTP primitives for an Exchange to construct a version agnostic HTTP message."""

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(kw_only=True)
class HTTPResponse:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    reason: str | None = None

    async def consume_body_async(self) -> bytes:
        return self.body


__all__ = ("HTTPRequest", "HTTPResponse")
