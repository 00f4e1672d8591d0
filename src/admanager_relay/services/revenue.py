"""Campaign revenue aggregation over Ad Manager report jobs."""

import asyncio
import logging
from typing import Any

from admanager_relay.clients.admanager.client import AdManagerAPIClient
from admanager_relay.clients.admanager.query import build_revenue_report_job
from admanager_relay.core.config import ReportConfig
from admanager_relay.core.exceptions import AdManagerRelayError, sanitize_error_message
from admanager_relay.models.revenue import RevenueQuery, RevenueResult
from admanager_relay.services.polling import ReportJobPoller
from admanager_relay.utils.csv_parsing import sum_revenue_column

logger = logging.getLogger(__name__)


def _job_id(report_job: Any) -> Any:
    if isinstance(report_job, dict):
        return report_job["id"]
    return report_job.id


class RevenueAggregator:
    """Runs a revenue report for a campaign tag and sums the result."""

    def __init__(self, client: AdManagerAPIClient, config: ReportConfig | None = None):
        self.client = client
        self.config = config or ReportConfig()
        self.poller = ReportJobPoller(
            client,
            interval_seconds=self.config.poll_interval_seconds,
            max_attempts=self.config.poll_max_attempts,
            deadline_seconds=self.config.deadline_seconds,
        )

    async def run_report(
        self, query: RevenueQuery, cancel_event: asyncio.Event | None = None
    ) -> RevenueResult:
        """Run the report end to end.

        Raises:
            AdManagerRelayError: On any failure along the way
        """
        report_job = build_revenue_report_job(
            query.campaign_tag,
            query.start_date,
            query.end_date,
            revenue_column=self.config.revenue_column,
        )

        submitted = await self.client.run_report_job(report_job)
        job_id = _job_id(submitted)
        logger.info(f"Report job {job_id} submitted for '{query.campaign_tag}'")

        await self.poller.wait_for_completion(job_id, cancel_event=cancel_event)

        url = await self.client.get_report_download_url(job_id, self.config.export_format)
        csv_text = await self.client.download_report(url)

        totals = sum_revenue_column(csv_text, self.config.revenue_column_index)
        logger.info(
            f"Total revenue found: ${totals.total_revenue:.2f} "
            f"across {totals.records_found} rows"
        )
        return RevenueResult.real(query, totals.total_revenue, totals.records_found)

    async def fetch_revenue(
        self, query: RevenueQuery, cancel_event: asyncio.Event | None = None
    ) -> RevenueResult:
        """Look up campaign revenue, falling back to a zero mock result on failure.

        Callers tell real figures from placeholders by ``source``. Task
        cancellation is not masked.
        """
        logger.info(f"Fetching revenue for UTM: '{query.campaign_tag}'")
        logger.info(f"Period: {query.start_date} to {query.end_date}")
        logger.info(f"Website: {query.website_url or 'not specified'}")

        try:
            return await self.run_report(query, cancel_event=cancel_event)
        except AdManagerRelayError as e:
            message = sanitize_error_message(str(e))
            logger.error(f"Revenue lookup failed ({e.kind.value}): {message}")
            return RevenueResult.mock(error=message, requires_auth=e.requires_auth)
        except Exception as e:
            message = sanitize_error_message(str(e))
            logger.exception(f"Unexpected error during revenue lookup: {message}")
            return RevenueResult.mock(error=message, requires_auth=False)
