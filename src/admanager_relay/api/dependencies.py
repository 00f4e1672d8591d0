"""FastAPI dependencies wiring settings into the relay services."""

from fastapi import Depends, Request

from admanager_relay.clients.admanager.auth import AdManagerAuthenticator
from admanager_relay.clients.admanager.client import AdManagerAPIClient
from admanager_relay.core.config import Settings
from admanager_relay.services.connectivity import ConnectivityProber
from admanager_relay.services.revenue import RevenueAggregator


def get_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_admanager_client(settings: Settings = Depends(get_settings)) -> AdManagerAPIClient:
    return AdManagerAPIClient(
        AdManagerAuthenticator(settings),
        api_version=settings.admanager_api_version,
        download_timeout=settings.report.download_timeout_seconds,
        call_timeout=settings.report.api_call_timeout_seconds,
    )


def get_connectivity_prober(
    client: AdManagerAPIClient = Depends(get_admanager_client),
) -> ConnectivityProber:
    return ConnectivityProber(client)


def get_revenue_aggregator(
    client: AdManagerAPIClient = Depends(get_admanager_client),
    settings: Settings = Depends(get_settings),
) -> RevenueAggregator:
    return RevenueAggregator(client, settings.report)
