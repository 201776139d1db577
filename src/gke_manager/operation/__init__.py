"""Long-running operation handling."""

from .waiter import DEFAULT_POLL_INTERVAL, OperationWaiter

__all__ = ["DEFAULT_POLL_INTERVAL", "OperationWaiter"]
