"""Relay services built on the Ad Manager client."""

from admanager_relay.services.connectivity import ConnectivityProber
from admanager_relay.services.polling import ReportJobPoller
from admanager_relay.services.revenue import RevenueAggregator

__all__ = ["ConnectivityProber", "ReportJobPoller", "RevenueAggregator"]
