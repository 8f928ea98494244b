#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .metadata import MetadataConfig

MONGODB_AWS = "MONGODB-AWS"
PLAIN = "PLAIN"

AWS_SESSION_TOKEN = "AWS_SESSION_TOKEN"  # noqa: S105
"""Mechanism property holding an explicitly configured session token."""

DEFAULT_SOURCE = "$external"


@dataclass(frozen=True, kw_only=True)
class AuthCredential:
    """The authentication settings supplied at the driver boundary."""

    mechanism: str | None
    """Name of the mechanism advertised by the server, e.g. ``MONGODB-AWS``."""

    username: str | None = None
    """For ``MONGODB-AWS`` this is the AWS access key ID."""

    password: str | None = field(default=None, repr=False)
    """For ``MONGODB-AWS`` this is the AWS secret access key."""

    source: str = DEFAULT_SOURCE
    """The database the SASL commands are sent to."""

    mechanism_properties: Mapping[str, str] = field(default_factory=dict, repr=False)

    @property
    def mechanism_name(self) -> str:
        if not self.mechanism:
            raise ConfigurationError("Authentication mechanism cannot be empty.")
        return self.mechanism.upper()

    @property
    def has_explicit_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def get_mechanism_property(
        self, name: str, default: str | None = None
    ) -> str | None:
        """Look up a mechanism property, ignoring the case of its name."""
        lowered = name.lower()
        for key, value in self.mechanism_properties.items():
            if key.lower() == lowered:
                return value
        return default


@dataclass
class AuthConfig:
    """Settings applied to every authentication attempt made by an authenticator."""

    metadata: MetadataConfig = field(default_factory=MetadataConfig)
