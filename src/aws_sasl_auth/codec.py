#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Any

import bson
from bson.errors import BSONError

from .exceptions import ProtocolError


def encode_document(document: Mapping[str, Any]) -> bytes:
    """Serialize a SASL payload document to BSON.

    ``bytes`` values are written as generic binary and ints that fit are written
    as 32-bit integers.
    """
    return bson.encode(document)


def decode_document(payload: bytes) -> dict[str, Any]:
    """Deserialize a BSON SASL payload.

    :raises ProtocolError: If the payload isn't a valid BSON document.
    """
    try:
        return bson.decode(payload)
    except BSONError as e:
        raise ProtocolError("Server sent a malformed SASL payload") from e
