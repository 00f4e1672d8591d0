"""Ad Manager network models."""

from typing import Any

from pydantic import Field

from admanager_relay.models.base import RelayModel


class NetworkInfo(RelayModel):
    """Summary of the Ad Manager network the service account belongs to."""

    network_code: str | None = Field(None, description="Ad Manager network code")
    display_name: str | None = None
    time_zone: str | None = None
    currency_code: str | None = None
    publisher_id: str | None = Field(
        None, description="AdX publisher ID (the network's property code)"
    )
    effective_root_ad_unit_id: str | None = None

    @classmethod
    def from_network(cls, network: Any) -> "NetworkInfo":
        """Build from a NetworkService ``Network`` object or dict."""

        def read(name: str) -> str | None:
            if isinstance(network, dict):
                value = network.get(name)
            else:
                value = getattr(network, name, None)
            return None if value is None else str(value)

        return cls(
            network_code=read("networkCode"),
            display_name=read("displayName"),
            time_zone=read("timeZone"),
            currency_code=read("currencyCode"),
            publisher_id=read("propertyCode"),
            effective_root_ad_unit_id=read("effectiveRootAdUnitId"),
        )


class ConnectionTestResult(RelayModel):
    """Successful connectivity probe."""

    success: bool = True
    network_info: NetworkInfo
    message: str = "Service account connected successfully"


class ConnectionTestFailure(RelayModel):
    """Failed connectivity probe."""

    success: bool = False
    error: str
    requires_setup: bool = False
