"""External API client implementations."""

from .polisher_client import HttpTextPolisherClient, PolisherResponseError

__all__ = [
    "HttpTextPolisherClient",
    "PolisherResponseError",
]
