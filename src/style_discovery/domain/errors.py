"""Errors raised by the discovery core."""


class DiscoveryError(Exception):
    """Base error for discovery session failures."""


class InsufficientPoolError(DiscoveryError):
    """Raised when there are not enough eligible images to start a session."""

    def __init__(self, pool_size: int, min_required: int) -> None:
        super().__init__(
            f"Library not ready: {pool_size} active images, {min_required} required"
        )
        self.pool_size = pool_size
        self.min_required = min_required


class SessionAlreadyActiveError(DiscoveryError):
    """Raised when a session is started while another is still running."""
