"""Google Ad Manager platform integration."""
