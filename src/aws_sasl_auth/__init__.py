#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""SASL authentication for database drivers, including the ``MONGODB-AWS``
mechanism which authenticates with AWS IAM credentials."""

from .authenticator import SaslAuthenticator
from .config import MONGODB_AWS, PLAIN, AuthConfig, AuthCredential
from .identity import AWSCredentialsIdentity, CredentialOrigin, Secret
from .metadata import MetadataConfig, MetadataEndpointClient
from .signers import AuthorizationHeader, StsRequestSigner

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "MONGODB_AWS",
    "PLAIN",
    "AWSCredentialsIdentity",
    "AuthConfig",
    "AuthCredential",
    "AuthorizationHeader",
    "CredentialOrigin",
    "MetadataConfig",
    "MetadataEndpointClient",
    "SaslAuthenticator",
    "Secret",
    "StsRequestSigner",
)
