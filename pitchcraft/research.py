"""Competitor research: web search synthesis with a static topic fallback.

``research(query)`` always returns a usable ``ResearchResult``. It issues a
single web search; if that yields at least three usable hits they are
cleaned into "<company> - <description>" entries. Otherwise every remote
result is discarded and a hand-written topic bucket is returned instead.
The two sources are never blended.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from pitchcraft.clients.brave import BraveSearchClient
from pitchcraft.metrics import research_requests_total, search_duration_seconds, search_errors_total
from pitchcraft.models.research import MAX_COMPETITORS, MAX_SOURCES, ResearchResult
from pitchcraft.text import extract_entity_name, sanitize, truncate_at_sentence

if TYPE_CHECKING:
    from pitchcraft.clients.brave import BraveWebResult
    from pitchcraft.config import Settings

logger = structlog.get_logger()

SEARCH_SUFFIX = "competitors alternatives similar companies market"
SEARCH_COUNT = 10
MAX_HITS_EXAMINED = 6
MIN_COMPETITORS = 3
DESCRIPTION_BUDGET = 120

FALLBACK_SOURCES: tuple[str, ...] = (
    "https://crunchbase.com",
    "https://producthunt.com",
    "https://techcrunch.com",
)


@dataclass(frozen=True)
class TopicBucket:
    """Canned research for queries mentioning any of *keywords*."""

    name: str
    keywords: tuple[str, ...]
    competitors: tuple[str, ...]
    insights: str

    def matches(self, lowered_query: str) -> bool:
        return any(keyword in lowered_query for keyword in self.keywords)

    def to_result(self) -> ResearchResult:
        return ResearchResult(
            competitors=list(self.competitors),
            insights=self.insights,
            sources=list(FALLBACK_SOURCES),
        )


# Evaluated top to bottom; the first matching bucket wins.
TOPIC_BUCKETS: tuple[TopicBucket, ...] = (
    TopicBucket(
        name="saas",
        keywords=("saas", "productivity", "workflow"),
        competitors=(
            "Notion - All-in-one workspace with $10B valuation, 30M+ users",
            "Asana - Project management platform, $5.5B market cap",
            "Monday.com - Work OS platform serving 186K+ customers",
            "Airtable - Collaborative database tool, $11B valuation",
        ),
        insights=(
            "The SaaS productivity market is projected to reach $102B by 2026, "
            "growing at 13% CAGR. Key trends include AI integration, no-code "
            "solutions, and hybrid work optimization."
        ),
    ),
    TopicBucket(
        name="accounting",
        keywords=("accounting", "finance", "bookkeeping"),
        competitors=(
            "QuickBooks - Market leader with 7M+ customers, Intuit-owned",
            "Xero - Cloud accounting platform, 3.5M subscribers globally",
            "FreshBooks - Small business focused, 30M+ users",
            "Wave - Free accounting software for small businesses",
        ),
        insights=(
            "The cloud accounting software market is $12B in 2024, expected to "
            "reach $20B by 2028. SMBs increasingly prefer mobile-first, AI-powered "
            "solutions with real-time insights."
        ),
    ),
    TopicBucket(
        name="social",
        keywords=("social", "community", "network"),
        competitors=(
            "Discord - 150M+ active users, valued at $15B",
            "Slack - Business communication, 18M+ daily users",
            "Telegram - Privacy-focused messaging, 800M+ users",
            "Circle - Community platform for creators, $27M raised",
        ),
        insights=(
            "The social networking market is $192B in 2024, with decentralized and "
            "niche community platforms gaining traction. Users seek privacy, content "
            "ownership, and ad-free experiences."
        ),
    ),
    TopicBucket(
        name="ai",
        keywords=("ai", "machine learning", "artificial intelligence"),
        competitors=(
            "OpenAI - ChatGPT platform, $80B+ valuation",
            "Anthropic - Claude AI assistant, $18.4B valuation",
            "Jasper - AI writing assistant, 105K+ customers",
            "Hugging Face - AI model hub, $4.5B valuation",
        ),
        insights=(
            "The AI market is projected to reach $407B by 2027, with enterprise AI "
            "adoption growing 270% over the past 4 years. Focus areas include "
            "generative AI, automation, and personalization."
        ),
    ),
    TopicBucket(
        name="ecommerce",
        keywords=("ecommerce", "marketplace", "shop"),
        competitors=(
            "Shopify - E-commerce platform, $65B market cap, 4M+ merchants",
            "WooCommerce - WordPress plugin, powers 26% of online stores",
            "BigCommerce - Enterprise e-commerce, $485M market cap",
            "Square - Payments and commerce, $41B market cap",
        ),
        insights=(
            "Global e-commerce sales will reach $6.3T in 2024. Key trends include "
            "social commerce, mobile-first shopping, AI personalization, and "
            "direct-to-consumer brands."
        ),
    ),
    TopicBucket(
        name="health",
        keywords=("health", "fitness", "wellness"),
        competitors=(
            "Peloton - Connected fitness, 6.7M members",
            "MyFitnessPal - Nutrition tracking, 200M+ users",
            "Strava - Fitness social network, 100M+ athletes",
            "Noom - Behavior-change platform, 50M downloads",
        ),
        insights=(
            "The digital health market is $220B in 2024, expected to reach $660B by "
            "2030. Growth driven by wearables, telehealth adoption, and personalized "
            "wellness programs."
        ),
    ),
)


def generic_bucket(query: str) -> TopicBucket:
    """Bucket used when no topic keyword matches; interpolates the raw query."""
    return TopicBucket(
        name="generic",
        keywords=(),
        competitors=(
            f"Established players in the {query} market with proven product-market "
            "fit and strong user bases",
            f"Emerging startups in {query} space backed by top VCs like a16z, "
            "Sequoia, and Y Combinator",
            f"Enterprise solutions serving {query} use cases with multi-million "
            "dollar contracts",
            f"Open-source alternatives in {query} gaining traction in developer "
            "communities",
        ),
        insights=(
            f"The {query} market shows strong growth potential with increasing demand "
            "from both consumers and enterprises. Key success factors include user "
            "experience, pricing flexibility, and integration capabilities."
        ),
    )


def select_bucket(query: str) -> TopicBucket:
    lowered = query.lower()
    for bucket in TOPIC_BUCKETS:
        if bucket.matches(lowered):
            return bucket
    return generic_bucket(query)


def compose_competitor(hit: BraveWebResult) -> tuple[str, str] | None:
    """Turn one search hit into (entity name, display entry).

    Returns None for hits without a title, or whose description is empty
    once markup is stripped.
    """
    title = hit.get("title")
    description = hit.get("description")
    if not title or not description:
        return None

    clean_description = sanitize(description)
    if not clean_description:
        return None
    clean_title = sanitize(title)
    name = extract_entity_name(clean_title)
    short_description = truncate_at_sentence(clean_description, DESCRIPTION_BUDGET)
    return name, f"{name} - {short_description}"


def synthesize(query: str, hits: list[BraveWebResult]) -> ResearchResult | None:
    """Build a result from search hits, or None when there are too few.

    Only the first ``MAX_HITS_EXAMINED`` hits are looked at, usable or not.
    """
    names: list[str] = []
    competitors: list[str] = []
    sources: list[str] = []

    for hit in hits[:MAX_HITS_EXAMINED]:
        composed = compose_competitor(hit)
        if composed is None:
            continue
        name, entry = composed
        names.append(name)
        competitors.append(entry)
        url = hit.get("url")
        if url:
            sources.append(url)

    if len(competitors) < MIN_COMPETITORS:
        return None

    insights = (
        f"Found {len(competitors)} active competitors in the {query} space including "
        f"{', '.join(names[:3])}. The market shows strong competition with both "
        "established players and emerging innovators, indicating validated demand "
        "and growth potential."
    )
    return ResearchResult(
        competitors=competitors[:MAX_COMPETITORS],
        insights=insights,
        sources=sources[:MAX_SOURCES],
    )


class ResearchSynthesizer:
    """Runs one web search per query and degrades to the topic table.

    Never raises: transport errors, bad responses and sparse results all
    resolve to the fallback bucket for the query.
    """

    def __init__(self, client: BraveSearchClient) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> ResearchSynthesizer:
        return cls(
            BraveSearchClient(
                api_key=settings.brave_api_key,
                base_url=settings.brave_base_url,
                timeout=settings.search_timeout,
            )
        )

    def _lookup(self, query: str) -> list[BraveWebResult]:
        if not self.client.is_available:
            logger.debug("Brave search not configured, skipping lookup")
            return []

        search_query = f"{query} {SEARCH_SUFFIX}"
        try:
            with search_duration_seconds.time():
                return self.client.search(search_query, count=SEARCH_COUNT)
        except Exception as exc:
            search_errors_total.labels(kind=type(exc).__name__).inc()
            logger.warning(
                "Competitor search failed, using fallback data",
                query=query,
                error=str(exc),
            )
            return []

    def research(self, query: str) -> ResearchResult:
        hits = self._lookup(query)
        result = synthesize(query, hits)
        if result is not None:
            research_requests_total.labels(outcome="synthesized").inc()
            logger.info(
                "Research synthesized from search",
                query=query,
                competitors=len(result.competitors),
                sources=len(result.sources),
            )
            return result

        bucket = select_bucket(query)
        research_requests_total.labels(outcome="fallback").inc()
        logger.info(
            "Research using fallback bucket",
            query=query,
            bucket=bucket.name,
            hits=len(hits),
        )
        return bucket.to_result()


def research(query: str, settings: Settings | None = None) -> ResearchResult:
    """Research competitors for *query* using configured settings."""
    if settings is None:
        from pitchcraft.config import Settings

        settings = Settings()
    return ResearchSynthesizer.from_settings(settings).research(query)
