#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from enum import Enum


class ConversationStatus(Enum):
    NOT_STARTED = "not_started"
    AWAITING_SERVER_FIRST = "awaiting_server_first"
    COMPLETE = "complete"
    """The final client message has been produced; the server's verdict is pending."""
    FAILED = "failed"


@dataclass
class ConversationState:
    """Mutable state of one conversation attempt.

    Owned by exactly one conversation and discarded with it.
    """

    step: int = -1
    client_nonce: bytes = field(default=b"", repr=False)
    metadata_response: str | None = field(default=None, repr=False)
    """The raw metadata credentials document, fetched at most once per attempt."""
    failed: bool = False

    @property
    def status(self) -> ConversationStatus:
        if self.failed:
            return ConversationStatus.FAILED
        if self.step < 0:
            return ConversationStatus.NOT_STARTED
        if self.step == 0:
            return ConversationStatus.AWAITING_SERVER_FIRST
        return ConversationStatus.COMPLETE
