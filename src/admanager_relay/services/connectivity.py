"""Service-account connectivity check."""

import logging

from admanager_relay.clients.admanager.client import AdManagerAPIClient
from admanager_relay.models.network import NetworkInfo

logger = logging.getLogger(__name__)


class ConnectivityProber:
    """Verifies the service account by reading the current network."""

    def __init__(self, client: AdManagerAPIClient):
        self.client = client

    async def probe(self) -> NetworkInfo:
        """Fetch current network metadata.

        Raises:
            ConfigurationError: If credentials or the network code are missing
            AuthenticationError: If the service account is rejected
            APIError: If the NetworkService call fails
        """
        logger.info("Testing service account connection")
        network = await self.client.get_current_network()
        info = NetworkInfo.from_network(network)
        logger.info(
            f"Service account authenticated for network {info.network_code} "
            f"({info.display_name})"
        )
        return info
