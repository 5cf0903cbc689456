"""Shared helpers."""

from .retry import RetryableException, RetryExhaustedError, retry_async  # noqa: F401

__all__ = ["RetryableException", "RetryExhaustedError", "retry_async"]
