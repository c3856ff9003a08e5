"""API clients for external services.

Clients accept their API key in __init__, expose an `is_available`
property (True when the key is set) and use httpx for HTTP calls.
"""

from pitchcraft.clients.brave import BraveSearchClient, BraveWebResult, SearchResponseError

__all__ = [
    "BraveSearchClient",
    "BraveWebResult",
    "SearchResponseError",
]
