"""External API clients."""
