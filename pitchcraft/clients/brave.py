"""Client for the Brave Search web API.

Brave returns independent-index web results as JSON under ``web.results``.
Free tier: 2,000 queries/month, 1 query/second.
Docs: https://api-dashboard.search.brave.com/app/documentation/web-search
"""

from __future__ import annotations

import httpx
import structlog
from typing_extensions import TypedDict

logger = structlog.get_logger()

_DEFAULT_BASE_URL = "https://api.search.brave.com"
_TIMEOUT = 10.0


class SearchResponseError(Exception):
    """The search provider answered with a body we cannot read."""


class BraveWebResult(TypedDict):
    title: str | None
    description: str | None
    url: str | None


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_results(data: object) -> list[BraveWebResult]:
    """Pull ``web.results`` out of a response body.

    A body without a ``web`` section is a valid empty answer; a body that is
    not a JSON object at all is not.
    """
    if not isinstance(data, dict):
        raise SearchResponseError(f"Expected a JSON object, got {type(data).__name__}")

    web = data.get("web")
    if not isinstance(web, dict):
        return []
    raw_results = web.get("results")
    if not isinstance(raw_results, list):
        return []

    return [
        BraveWebResult(
            title=_optional_str(item.get("title")),
            description=_optional_str(item.get("description")),
            url=_optional_str(item.get("url")),
        )
        for item in raw_results
        if isinstance(item, dict)
    ]


class BraveSearchClient:
    """Brave Search API client.

    Unlike the fallback-aware research layer, this client raises on failure:
    ``httpx.HTTPError`` for transport problems and non-2xx responses,
    ``SearchResponseError`` for unreadable bodies.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = _TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def search(self, query: str, count: int = 10) -> list[BraveWebResult]:
        """Run one web search.

        Args:
            query: Full search query string.
            count: Maximum number of web results to request (1-20).

        Returns:
            List of result dicts with keys: title, description, url. Any of
            them may be None when the provider omits it.
        """
        logger.info("brave_search", query=query, count=count)
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.get(
                f"{self.base_url}/res/v1/web/search",
                params={"q": query, "count": count},
                headers={
                    "Accept": "application/json",
                    "Accept-Encoding": "gzip",
                    "X-Subscription-Token": self.api_key,
                },
            )
            resp.raise_for_status()
            try:
                data = resp.json()
            except ValueError as exc:
                raise SearchResponseError("Response body is not valid JSON") from exc
        return _parse_results(data)
