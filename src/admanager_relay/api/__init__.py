"""HTTP facade of the relay."""

from admanager_relay.api.main import create_app

__all__ = ["create_app"]
