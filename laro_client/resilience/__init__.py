"""Resilience components for the API client."""

from laro_client.resilience.retry import RetryStrategy, with_retry

__all__ = ["RetryStrategy", "with_retry"]
