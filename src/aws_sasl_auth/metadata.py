#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Final

import aiohttp

from .exceptions import CredentialSourceError
from .http import HTTPRequest
from .interfaces.http import HTTPClient

logger: Final = logging.getLogger(__name__)

CONTAINER_CREDENTIALS_ENV_VAR = "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI"

_CONTAINER_METADATA_BASE = "http://169.254.170.2"
_INSTANCE_METADATA_BASE = (
    "http://169.254.169.254/latest/meta-data/iam/security-credentials/"
)
_DEFAULT_TIMEOUT = 2


@dataclass
class MetadataConfig:
    """Configuration for metadata credential retrieval operations."""

    timeout: float = _DEFAULT_TIMEOUT
    """Seconds allowed for the whole retrieval, including role discovery."""

    container_base_uri: str = _CONTAINER_METADATA_BASE
    instance_base_uri: str = _INSTANCE_METADATA_BASE

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"Metadata timeout must be positive, got {self.timeout}.")


class MetadataEndpointClient:
    """Fetches the credentials document from the ECS or EC2 metadata service.

    If ``AWS_CONTAINER_CREDENTIALS_RELATIVE_URI`` is set, the document is read from
    the container endpoint at that path. Otherwise the instance endpoint is asked
    for the name of the attached role and then for that role's credentials.
    """

    def __init__(self, http_client: HTTPClient, config: MetadataConfig | None = None):
        self._http_client = http_client
        self._config = config or MetadataConfig()

    async def fetch_credentials_document(self) -> str:
        """Return the raw credentials document.

        :raises CredentialSourceError: If any request fails, times out or returns a
            non-2xx status.
        """
        url = self._container_credentials_url()
        try:
            async with asyncio.timeout(self._config.timeout):
                if url is None:
                    logger.debug("Using instance metadata endpoint.")
                    url = self._config.instance_base_uri
                    url = f"{url}{await self._role_name(url)}"
                else:
                    logger.debug("Using container metadata endpoint.")
                return await self._get(url, accept="application/json")
        except TimeoutError as e:
            raise CredentialSourceError(
                f"Timed out after {self._config.timeout}s retrieving credentials "
                f"from {url}"
            ) from e

    def _container_credentials_url(self) -> str | None:
        relative_uri = os.environ.get(CONTAINER_CREDENTIALS_ENV_VAR)
        if relative_uri is None:
            return None
        return f"{self._config.container_base_uri}{relative_uri}"

    async def _role_name(self, base: str) -> str:
        role_name = (await self._get(base)).strip()
        if not role_name:
            raise CredentialSourceError(
                f"Instance metadata service at {base} returned no role name"
            )
        return role_name

    async def _get(self, url: str, accept: str | None = None) -> str:
        headers = {"Accept": accept} if accept else {}
        request = HTTPRequest(method="GET", url=url, headers=headers)
        try:
            response = await self._http_client.send(
                request=request, timeout=self._config.timeout
            )
            body = await response.consume_body_async()
        except TimeoutError:
            raise
        except (aiohttp.ClientError, OSError) as e:
            raise CredentialSourceError(
                f"Unable to retrieve metadata from {url}: {e!r}"
            ) from e

        if not 200 <= response.status < 300:
            raise CredentialSourceError(
                f"Metadata service at {url} returned {response.status}"
            )
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CredentialSourceError(
                f"Unable to read valid utf-8 bytes from {url}"
            ) from e
