"""
HTTP client for the external meta components data source.
"""

from typing import Optional

import requests

from metaview.logger import get_logger
from metaview.meta.models import RawPayload

logger = get_logger(__name__)


class MetaFetchError(Exception):
    """Base class for every way a fetch of the meta payload can fail."""


class MetaTransportError(MetaFetchError):
    """The request could not be completed (DNS, refused connection, timeout...)."""


class MetaStatusError(MetaFetchError):
    """The data source answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Data source returned HTTP {status_code}")


class MetaPayloadError(MetaFetchError):
    """The response body is not valid JSON."""


class MetaClient:
    """
    Fetches the raw meta payload with a single GET request.

    No retries are attempted and, unless a timeout is configured, a hung
    request blocks until the server answers.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "MetaClient":
        return cls(endpoint=settings.meta_endpoint, timeout=settings.meta_fetch_timeout)

    def fetch(self) -> RawPayload:
        """
        Fetch and decode the payload.

        Returns:
            Decoded JSON body of any shape

        Raises:
            MetaTransportError: network failure
            MetaStatusError: non-2xx response
            MetaPayloadError: body is not JSON
        """
        logger.info(f"Fetching meta payload from {self.endpoint}")
        try:
            resp = self.session.get(self.endpoint, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise MetaTransportError(f"Request to {self.endpoint} failed: {e}") from e

        if not resp.ok:
            raise MetaStatusError(resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise MetaPayloadError(f"Response from {self.endpoint} is not valid JSON") from e

        logger.debug(f"Meta payload received ({type(payload).__name__}, status {resp.status_code})")
        return payload

    def __call__(self) -> RawPayload:
        return self.fetch()
