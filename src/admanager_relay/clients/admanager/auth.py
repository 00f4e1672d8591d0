"""Ad Manager authentication module.

Builds service-account credentials from the relay settings and wraps them in
an authenticated ``googleads`` Ad Manager client.
"""

import logging
from dataclasses import dataclass

from google.oauth2 import service_account
from googleads import ad_manager, oauth2

from admanager_relay.core.config import Settings
from admanager_relay.core.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ADMANAGER_SCOPES = (
    "https://www.googleapis.com/auth/dfp",
    "https://www.googleapis.com/auth/adexchange.seller.readonly",
)
TOKEN_URI = "https://oauth2.googleapis.com/token"

MISSING_CREDENTIALS_MESSAGE = (
    "Service account credentials not configured. Set the variables: "
    "GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY, "
    "GOOGLE_ADMANAGER_NETWORK_CODE"
)


def normalize_private_key(raw_key: str) -> str:
    """Turn escaped ``\\n`` sequences from a single-line env value into newlines."""
    return raw_key.replace("\\n", "\n")


@dataclass(frozen=True)
class ServiceAccountIdentity:
    """Service-account identity material and the scopes it is used with."""

    service_account_email: str
    private_key: str
    scopes: tuple[str, ...] = ADMANAGER_SCOPES

    def __post_init__(self):
        if not self.service_account_email or not self.service_account_email.strip():
            raise ConfigurationError(
                f"Service account email not configured. {MISSING_CREDENTIALS_MESSAGE}"
            )
        if not self.private_key or not self.private_key.strip():
            raise ConfigurationError(
                f"Service account private key not configured. {MISSING_CREDENTIALS_MESSAGE}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceAccountIdentity":
        """Read identity material from settings.

        Raises:
            ConfigurationError: If the email or private key is absent or blank
        """
        raw_key = (
            settings.service_account_private_key.get_secret_value()
            if settings.service_account_private_key
            else ""
        )
        return cls(
            service_account_email=(settings.service_account_email or "").strip(),
            private_key=normalize_private_key(raw_key),
        )

    def to_info(self) -> dict[str, str]:
        """Service-account info in the shape of a JSON key file."""
        return {
            "type": "service_account",
            "client_email": self.service_account_email,
            "private_key": self.private_key,
            "token_uri": TOKEN_URI,
        }


class AdManagerAuthenticator:
    """Handles Ad Manager authentication and client creation."""

    def __init__(self, settings: Settings):
        """Initialize the authenticator.

        Args:
            settings: Relay settings holding the service account and network code
        """
        self.settings = settings
        self._client: ad_manager.AdManagerClient | None = None

    @property
    def network_code(self) -> str:
        network_code = (self.settings.network_code or "").strip()
        if not network_code:
            raise ConfigurationError(
                f"Ad Manager network code not configured. {MISSING_CREDENTIALS_MESSAGE}"
            )
        return network_code

    def get_credentials(self) -> service_account.Credentials:
        """Build scoped service-account credentials.

        Raises:
            ConfigurationError: If the email or private key is missing
            AuthenticationError: If google-auth rejects the key material
        """
        identity = ServiceAccountIdentity.from_settings(self.settings)
        try:
            return service_account.Credentials.from_service_account_info(
                identity.to_info(), scopes=list(identity.scopes)
            )
        except Exception as e:
            logger.error(f"Service account credential construction failed: {e}")
            raise AuthenticationError(
                f"Invalid service account credentials: {e}"
            ) from e

    def get_client(self) -> ad_manager.AdManagerClient:
        """Get authenticated Ad Manager client.

        Raises:
            ConfigurationError: If credentials or the network code are missing
            AuthenticationError: If the client cannot be created
        """
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> ad_manager.AdManagerClient:
        network_code = self.network_code
        credentials = self.get_credentials()

        try:
            oauth2_client = oauth2.GoogleCredentialsClient(credentials)
            client = ad_manager.AdManagerClient(
                oauth2_client,
                self.settings.application_name,
                network_code=network_code,
            )
        except Exception as e:
            logger.error(f"Failed to create Ad Manager client: {e}")
            raise AuthenticationError(
                f"Failed to authenticate with Ad Manager API: {e}"
            ) from e

        logger.info(f"Ad Manager client created for network {network_code}")
        return client
