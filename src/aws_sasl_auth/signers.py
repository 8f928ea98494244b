#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import base64
import hmac
from dataclasses import dataclass
from hashlib import sha256

from .exceptions import ProtocolError, SigningError
from .identity import AWSCredentialsIdentity

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
SIGNING_ALGORITHM: str = "AWS4-HMAC-SHA256"

STS_SERVICE: str = "sts"
STS_DEFAULT_HOST: str = "sts.amazonaws.com"
STS_DEFAULT_REGION: str = "us-east-1"
STS_REQUEST_BODY: str = "Action=GetCallerIdentity&Version=2011-06-15"
STS_CONTENT_TYPE: str = "application/x-www-form-urlencoded"

GS2_CB_FLAG: str = "n"
_MAX_HOST_LENGTH = 255


@dataclass(frozen=True, kw_only=True)
class AuthorizationHeader:
    """The value of the ``Authorization`` field of a SigV4 signed request."""

    credential: str
    """Defined as: <access_key>/<date>/<region>/<service>/aws4_request"""

    signed_headers: tuple[str, ...]
    signature: str
    timestamp: str

    def __str__(self) -> str:
        return (
            f"{SIGNING_ALGORITHM} Credential={self.credential}, "
            f"SignedHeaders={';'.join(self.signed_headers)}, "
            f"Signature={self.signature}"
        )


def region_from_host(host: str) -> str:
    """Derive the signing region from the STS host sent by the server.

    ``sts.amazonaws.com`` and single label hosts sign for ``us-east-1``; any other
    host signs for its second label, e.g. ``sts.us-west-2.amazonaws.com``.

    :raises ProtocolError: If the host is empty, too long, or has an empty label.
    """
    labels = host.split(".")
    if not host or len(host) > _MAX_HOST_LENGTH or not all(labels):
        raise ProtocolError(f"Server returned an invalid STS host: {host!r}")
    if host == STS_DEFAULT_HOST or len(labels) == 1:
        return STS_DEFAULT_REGION
    return labels[1]


class StsRequestSigner:
    """Signs an STS GetCallerIdentity request with AWS Signature Version 4.

    The request itself is never sent by the client. The server forwards the
    signature to STS to learn who the client is, and checks that the signed
    ``X-MongoDB-Server-Nonce`` field carries the nonce it issued.
    """

    def sign(
        self,
        *,
        identity: AWSCredentialsIdentity,
        host: str,
        server_nonce: bytes,
        timestamp: str,
    ) -> AuthorizationHeader:
        """Generate the authorization header for the given request context.

        :param identity: Credentials to sign with.
        :param host: The STS host named by the server.
        :param server_nonce: The full 64 byte nonce sent by the server.
        :param timestamp: Signing time in ``yyyyMMdd'T'HHmmss'Z'`` format.
        """
        self._validate_identity(identity=identity)
        region = region_from_host(host)
        fields = self._signing_fields(
            identity=identity, host=host, server_nonce=server_nonce, timestamp=timestamp
        )
        canonical_request = self.canonical_request(fields=fields)
        scope = self._scope(timestamp=timestamp, region=region)
        string_to_sign = self.string_to_sign(
            canonical_request=canonical_request, timestamp=timestamp, scope=scope
        )
        signature = self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_access_key.reveal(),
            timestamp=timestamp,
            region=region,
        )
        return AuthorizationHeader(
            credential=f"{identity.access_key_id}/{scope}",
            signed_headers=tuple(fields),
            signature=signature,
            timestamp=timestamp,
        )

    def canonical_request(self, *, fields: dict[str, str]) -> str:
        """The canonical request is a standardized string laying out the components
        used in the SigV4 signing algorithm.

        The SigV4 specification defines the canonical request to be:
            <HTTPMethod>\\n
            <CanonicalURI>\\n
            <CanonicalQueryString>\\n
            <CanonicalHeaders>\\n
            <SignedHeaders>\\n
            <HashedPayload>

        :param fields: Lower-cased, sorted field names mapped to their values.
        """
        canonical_fields = "".join(
            f"{key}:{' '.join(value.split())}\n" for key, value in fields.items()
        )
        payload_hash = sha256(STS_REQUEST_BODY.encode()).hexdigest()
        return (
            "POST\n"
            "/\n"
            "\n"
            f"{canonical_fields}\n"
            f"{';'.join(fields)}\n"
            f"{payload_hash}"
        )

    def string_to_sign(
        self, *, canonical_request: str, timestamp: str, scope: str
    ) -> str:
        """The SigV4 specification defines the string to sign as:
            Algorithm \\n
            RequestDateTime \\n
            CredentialScope  \\n
            HashedCanonicalRequest
        """
        return (
            f"{SIGNING_ALGORITHM}\n"
            f"{timestamp}\n"
            f"{scope}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )

    def _signing_fields(
        self,
        *,
        identity: AWSCredentialsIdentity,
        host: str,
        server_nonce: bytes,
        timestamp: str,
    ) -> dict[str, str]:
        fields = {
            "content-length": str(len(STS_REQUEST_BODY)),
            "content-type": STS_CONTENT_TYPE,
            "host": host,
            "x-amz-date": timestamp,
            "x-mongodb-gs2-cb-flag": GS2_CB_FLAG,
            "x-mongodb-server-nonce": base64.b64encode(server_nonce).decode("ascii"),
        }
        if identity.session_token:
            fields["x-amz-security-token"] = identity.session_token.reveal()
        return dict(sorted(fields.items()))

    def _scope(self, *, timestamp: str, region: str) -> str:
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return f"{timestamp[0:8]}/{region}/{STS_SERVICE}/aws4_request"

    def _signature(
        self, *, string_to_sign: str, secret_key: str, timestamp: str, region: str
    ) -> str:
        # Components of Signing Key Calculation
        #
        # DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        # DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        # DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        # SigningKey = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
        k_date = self._hash(key=f"AWS4{secret_key}".encode(), value=timestamp[0:8])
        k_region = self._hash(key=k_date, value=region)
        k_service = self._hash(key=k_region, value=STS_SERVICE)
        k_signing = self._hash(key=k_service, value="aws4_request")

        return self._hash(key=k_signing, value=string_to_sign).hex()

    def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    def _validate_identity(self, *, identity: AWSCredentialsIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, AWSCredentialsIdentity):  # pyright: ignore
            raise SigningError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialsIdentity but received {type(identity)}."
            )
        elif identity.secret_access_key.cleared:
            raise SigningError("The secret access key has already been cleared.")
        elif identity.is_expired:
            raise SigningError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials."
            )
