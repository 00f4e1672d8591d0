"""Bounded polling of Ad Manager report jobs."""

import asyncio
import logging

from admanager_relay.clients.admanager.client import AdManagerAPIClient
from admanager_relay.core.exceptions import (
    ReportCancelledError,
    ReportFailedError,
    ReportTimeoutError,
)

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "COMPLETED"
STATUS_FAILED = "FAILED"


class ReportJobPoller:
    """Waits for a report job by checking its status at a fixed interval.

    Each attempt sleeps ``interval_seconds`` and then asks for the status. The
    whole wait, status calls included, is capped by ``deadline_seconds``,
    which defaults to ``interval_seconds * max_attempts``. The wait stops
    early when the job completes or fails, when the awaiting task is
    cancelled, or when ``cancel_event`` is set.
    """

    def __init__(
        self,
        client: AdManagerAPIClient,
        interval_seconds: float = 2.0,
        max_attempts: int = 30,
        deadline_seconds: float | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")
        if deadline_seconds is None:
            deadline_seconds = interval_seconds * max_attempts
        if deadline_seconds < 0:
            raise ValueError("deadline_seconds must not be negative")

        self.client = client
        self.interval_seconds = interval_seconds
        self.max_attempts = max_attempts
        # Zero means only max_attempts bounds the wait
        self.deadline_seconds = deadline_seconds or None

    async def _pause(self, job_id: int | str, cancel_event: asyncio.Event | None) -> None:
        if cancel_event is None:
            await asyncio.sleep(self.interval_seconds)
            return

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self.interval_seconds)
        except asyncio.TimeoutError:
            return
        raise ReportCancelledError(job_id)

    async def wait_for_completion(
        self, job_id: int | str, cancel_event: asyncio.Event | None = None
    ) -> int:
        """Poll until the job completes.

        Args:
            job_id: Report job ID returned by ``runReportJob``
            cancel_event: Optional event that stops the wait when set

        Returns:
            Number of status checks made

        Raises:
            ReportFailedError: If Ad Manager reports the job as failed
            ReportTimeoutError: If the job is not complete after ``max_attempts``
                or ``deadline_seconds`` runs out first
            ReportCancelledError: If ``cancel_event`` is set while waiting
        """
        attempts = 0

        async def poll() -> int:
            nonlocal attempts
            for attempt in range(1, self.max_attempts + 1):
                if cancel_event is not None and cancel_event.is_set():
                    raise ReportCancelledError(job_id)

                await self._pause(job_id, cancel_event)

                attempts = attempt
                status = await self.client.get_report_job_status(job_id)
                logger.info(
                    f"Waiting for report {job_id}: attempt {attempt}/{self.max_attempts} ({status})"
                )

                if status == STATUS_COMPLETED:
                    return attempt
                if status == STATUS_FAILED:
                    raise ReportFailedError(job_id)

            raise ReportTimeoutError(job_id, self.max_attempts)

        try:
            return await asyncio.wait_for(poll(), timeout=self.deadline_seconds)
        except asyncio.TimeoutError:
            logger.error(
                f"Report {job_id} not ready after {self.deadline_seconds}s "
                f"({attempts} status checks)"
            )
            raise ReportTimeoutError(job_id, attempts) from None
