#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .connection import AuthConnection
from .http import HTTPClient, HTTPResponse
from .sasl import SaslConversation

__all__ = (
    "AuthConnection",
    "HTTPClient",
    "HTTPResponse",
    "SaslConversation",
)
