"""Ad Manager API client implementation.

The ``googleads`` SOAP services are synchronous, so every call is pushed to
the default executor to keep the event loop free while Ad Manager responds.
"""

import asyncio
import functools
import gzip
import logging
from typing import Any, Callable

import httpx
from google.auth.exceptions import GoogleAuthError
from googleads import errors as googleads_errors

from admanager_relay.clients.admanager.auth import AdManagerAuthenticator
from admanager_relay.core.exceptions import (
    AdManagerRelayError,
    APIError,
    AuthenticationError,
    DownloadError,
    ReportParseError,
)

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class AdManagerAPIClient:
    """Ad Manager API client for network metadata and report jobs."""

    def __init__(
        self,
        authenticator: AdManagerAuthenticator,
        api_version: str = "v202505",
        download_timeout: float = 30.0,
        call_timeout: float | None = 30.0,
    ):
        """Initialize the Ad Manager API client.

        Args:
            authenticator: Source of the authenticated ``AdManagerClient``
            api_version: SOAP API version, e.g. ``v202505``
            download_timeout: Timeout in seconds for report downloads
            call_timeout: Timeout in seconds for each SOAP call, None for no limit
        """
        self.authenticator = authenticator
        self.api_version = api_version
        self.download_timeout = download_timeout
        self.call_timeout = call_timeout

    def _get_service(self, service_name: str) -> Any:
        client = self.authenticator.get_client()
        return client.GetService(service_name, version=self.api_version)

    def _invoke(
        self, service_name: str, method_name: str, *args: Any
    ) -> Any:
        """Call a SOAP service method, translating failures into relay errors."""
        try:
            service = self._get_service(service_name)
            return getattr(service, method_name)(*args)
        except AdManagerRelayError:
            raise
        except GoogleAuthError as ex:
            logger.error(f"Ad Manager authentication failed in {method_name}: {ex}")
            raise AuthenticationError(
                f"Failed to authenticate with Ad Manager API: {ex}"
            ) from ex
        except googleads_errors.GoogleAdsServerFault as ex:
            if "AuthenticationError" in str(ex):
                raise AuthenticationError(
                    f"Ad Manager rejected the service account: {ex}"
                ) from ex
            logger.error(f"Ad Manager {service_name}.{method_name} fault: {ex}")
            raise APIError(f"Ad Manager {method_name} failed: {ex}") from ex
        except Exception as ex:
            logger.error(f"Ad Manager {service_name}.{method_name} failed: {ex}")
            raise APIError(f"Ad Manager {method_name} failed: {ex}") from ex

    async def _invoke_async(
        self, service_name: str, method_name: str, *args: Any
    ) -> Any:
        call: Callable[[], Any] = functools.partial(
            self._invoke, service_name, method_name, *args
        )
        future = asyncio.get_event_loop().run_in_executor(None, call)
        try:
            return await asyncio.wait_for(future, timeout=self.call_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Ad Manager {service_name}.{method_name} timed out after {self.call_timeout}s"
            )
            raise APIError(
                f"Ad Manager {method_name} timed out after {self.call_timeout}s"
            ) from None

    async def get_current_network(self) -> Any:
        """Fetch the network the service account is bound to."""
        return await self._invoke_async("NetworkService", "getCurrentNetwork")

    async def run_report_job(self, report_job: dict[str, Any]) -> Any:
        """Submit a report job and return it with its assigned ``id``."""
        return await self._invoke_async("ReportService", "runReportJob", report_job)

    async def get_report_job_status(self, job_id: int | str) -> str:
        """Return the job status: ``COMPLETED``, ``IN_PROGRESS`` or ``FAILED``."""
        status = await self._invoke_async(
            "ReportService", "getReportJobStatus", job_id
        )
        return str(status)

    async def get_report_download_url(
        self, job_id: int | str, export_format: str = "CSV_DUMP"
    ) -> str:
        """Return the URL the finished report can be downloaded from."""
        url = await self._invoke_async(
            "ReportService", "getReportDownloadURL", job_id, export_format
        )
        return str(url)

    async def download_report(self, url: str) -> str:
        """Download a finished report and return it as text.

        ``CSV_DUMP`` exports are served gzip-compressed; they are inflated here.

        Raises:
            DownloadError: If the request fails or returns an error status
            ReportParseError: If the body is not readable text
        """
        try:
            async with httpx.AsyncClient(timeout=self.download_timeout) as http:
                response = await http.get(url)
                response.raise_for_status()
                content = response.content
        except httpx.HTTPError as ex:
            logger.error(f"Report download failed: {ex}")
            raise DownloadError(f"Failed to download report: {ex}") from ex

        try:
            if content[:2] == GZIP_MAGIC:
                content = gzip.decompress(content)
            return content.decode("utf-8-sig")
        except (OSError, EOFError, UnicodeDecodeError) as ex:
            raise ReportParseError(f"Report output is not readable CSV: {ex}") from ex
