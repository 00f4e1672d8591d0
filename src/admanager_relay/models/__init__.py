"""Request and response models for the relay."""

from admanager_relay.models.network import (
    ConnectionTestFailure,
    ConnectionTestResult,
    NetworkInfo,
)
from admanager_relay.models.revenue import (
    ReportPeriod,
    RevenueQuery,
    RevenueRequest,
    RevenueResult,
    RevenueSource,
)

__all__ = [
    "ConnectionTestFailure",
    "ConnectionTestResult",
    "NetworkInfo",
    "ReportPeriod",
    "RevenueQuery",
    "RevenueRequest",
    "RevenueResult",
    "RevenueSource",
]
