"""AdManager Revenue Relay.

A small HTTP relay that looks up campaign revenue in Google Ad Manager with a
service account.
"""

__version__ = "1.0.0"
