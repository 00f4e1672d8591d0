"""Pytest configuration and shared fixtures for relay tests."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from admanager_relay.clients.admanager.client import AdManagerAPIClient
from admanager_relay.core.config import ReportConfig, Settings
from admanager_relay.models.revenue import RevenueQuery

from tests.utils import (
    SAMPLE_REPORT_CSV,
    TEST_DOWNLOAD_URL,
    TEST_EMAIL,
    TEST_NETWORK_CODE,
    TEST_PRIVATE_KEY,
)

RELAY_ENV_VARS = (
    "GOOGLE_SERVICE_ACCOUNT_EMAIL",
    "GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY",
    "GOOGLE_ADMANAGER_NETWORK_CODE",
    "PORT",
    "FRONTEND_URL",
    "RELAY_SERVICE_ACCOUNT_EMAIL",
    "RELAY_SERVICE_ACCOUNT_PRIVATE_KEY",
    "RELAY_NETWORK_CODE",
    "RELAY_PORT",
    "RELAY_FRONTEND_URL",
)


@pytest.fixture(autouse=True)
def clean_relay_env(monkeypatch):
    """Keep the developer's environment out of settings built in tests."""
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings with a fast polling loop."""
    return Settings(
        service_account_email=TEST_EMAIL,
        service_account_private_key=TEST_PRIVATE_KEY,
        network_code=TEST_NETWORK_CODE,
        report=ReportConfig(poll_interval_seconds=0, poll_max_attempts=30),
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no service account or network code."""
    return Settings(
        service_account_email=None,
        service_account_private_key=None,
        network_code=None,
    )


@pytest.fixture
def revenue_query() -> RevenueQuery:
    return RevenueQuery(
        campaign_tag="summer_sale",
        website_url="https://example.com",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 30),
    )


@pytest.fixture
def mock_admanager_client():
    """AdManagerAPIClient double whose report job completes on the first check."""
    client = MagicMock(spec=AdManagerAPIClient)
    client.run_report_job.return_value = {"id": 42}
    client.get_report_job_status.return_value = "COMPLETED"
    client.get_report_download_url.return_value = TEST_DOWNLOAD_URL
    client.download_report.return_value = SAMPLE_REPORT_CSV
    client.get_current_network.return_value = {
        "networkCode": TEST_NETWORK_CODE,
        "displayName": "Test Network",
        "timeZone": "America/Sao_Paulo",
        "currencyCode": "USD",
        "propertyCode": "ca-pub-1234567890123456",
        "effectiveRootAdUnitId": "21700000",
    }
    return client
