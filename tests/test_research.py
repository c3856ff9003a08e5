"""Tests for competitor research synthesis and the topic fallback.

Verifies:
- Hits are cleaned into "<company> - <description>" entries, bounded to five
- Fewer than three usable hits discards everything and uses a topic bucket
- Transport failures never escape ``research``
- Topic buckets are matched in declaration order
"""

from __future__ import annotations

import re

import httpx
import pytest
import respx
from prometheus_client import REGISTRY
from structlog.testing import capture_logs

from pitchcraft.clients.brave import BraveSearchClient, BraveWebResult, SearchResponseError
from pitchcraft.research import (
    FALLBACK_SOURCES,
    TOPIC_BUCKETS,
    ResearchSynthesizer,
    generic_bucket,
    research,
    select_bucket,
    synthesize,
)
from pitchcraft.text import ELLIPSIS

COMPETITOR_RE = re.compile(r"^.+ - .+$")


def _hit(
    title: str | None = "Acme Corp | Home",
    description: str | None = "Acme builds tools for teams.",
    url: str | None = "https://acme.example.com",
) -> BraveWebResult:
    return BraveWebResult(title=title, description=description, url=url)


def _hits(n: int) -> list[BraveWebResult]:
    return [
        _hit(
            title=f"Company{i} | Official Site",
            description=f"Company{i} helps startups ship faster.",
            url=f"https://company{i}.example.com",
        )
        for i in range(1, n + 1)
    ]


def _counter(outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "pitchcraft_research_requests_total", {"outcome": outcome}
    )
    return value or 0.0


# =====================================================================
# Synthesis from search hits
# =====================================================================


class TestSynthesis:
    def test_five_hits(self, make_synthesizer) -> None:
        synthesizer, _ = make_synthesizer(hits=_hits(5))
        result = synthesizer.research("developer tools")

        assert len(result.competitors) == 5
        assert "Found 5" in result.insights
        assert result.insights.startswith(
            "Found 5 active competitors in the developer tools space including "
            "Company1, Company2, Company3."
        )
        assert all(COMPETITOR_RE.match(c) for c in result.competitors)
        assert result.competitors[0] == "Company1 - Company1 helps startups ship faster."
        assert result.sources == [f"https://company{i}.example.com" for i in range(1, 6)]

    def test_search_query_and_count(self, make_synthesizer) -> None:
        synthesizer, client = make_synthesizer(hits=_hits(3))
        synthesizer.research("invoicing")
        assert client.queries == [
            ("invoicing competitors alternatives similar companies market", 10)
        ]

    def test_only_first_six_hits_examined(self, make_synthesizer) -> None:
        synthesizer, _ = make_synthesizer(hits=_hits(9))
        result = synthesizer.research("crm")

        assert "Found 6" in result.insights
        assert len(result.competitors) == 5
        assert len(result.sources) == 5

    def test_malformed_hits_skipped(self, make_synthesizer) -> None:
        hits = [
            _hit(title="Alpha | Home", description="Alpha does A."),
            _hit(title=None, description="No title here."),
            _hit(title="Beta | Home", description="Beta does B."),
            _hit(title="Gamma | Home", description=""),
            _hit(title="Delta | Home", description="Delta does D."),
        ]
        synthesizer, _ = make_synthesizer(hits=hits)
        result = synthesizer.research("widgets")

        assert result.competitors == [
            "Alpha - Alpha does A.",
            "Beta - Beta does B.",
            "Delta - Delta does D.",
        ]
        assert "Found 3" in result.insights

    def test_markup_only_description_is_skipped(self) -> None:
        hits = [_hit(title="Co0 | Home", description="<b></b>"), *_hits(3)]
        result = synthesize("q", hits)

        assert result is not None
        assert len(result.competitors) == 3
        assert all(COMPETITOR_RE.match(c) for c in result.competitors)
        assert not any(c.startswith("Co0") for c in result.competitors)

    def test_usable_hits_after_sixth_position_do_not_count(self, make_synthesizer) -> None:
        bad = _hit(title="", description="")
        hits = [bad, *_hits(2), bad, bad, bad, *_hits(3)]
        synthesizer, _ = make_synthesizer(hits=hits)
        result = synthesizer.research("quantum widgets")

        assert result == generic_bucket("quantum widgets").to_result()

    def test_sources_bounded_independently(self, make_synthesizer) -> None:
        hits = _hits(4)
        hits[1] = _hit(title="NoLink | Home", description="No link.", url=None)
        hits[3] = _hit(title="EmptyLink | Home", description="Empty link.", url="")
        synthesizer, _ = make_synthesizer(hits=hits)
        result = synthesizer.research("analytics")

        assert len(result.competitors) == 4
        assert result.sources == ["https://company1.example.com", "https://company3.example.com"]

    def test_cleans_markup_and_entities(self) -> None:
        hits = [
            _hit(
                title="<strong>Acme</strong> &amp; Co | Official Site",
                description="Acme &amp; Co builds <b>tools</b>&nbsp;for   teams.",
            ),
            *_hits(2),
        ]
        result = synthesize("tools", hits)

        assert result is not None
        assert result.competitors[0] == "Acme & Co - Acme & Co builds tools for teams."

    def test_long_description_ends_with_ellipsis(self, make_synthesizer) -> None:
        long_description = "word " * 16 + "y" * 60
        hits = [_hit(title="Longwinded | Home", description=long_description), *_hits(2)]
        synthesizer, _ = make_synthesizer(hits=hits)
        result = synthesizer.research("verbosity")

        entry = result.competitors[0]
        name, _, description = entry.partition(" - ")
        assert name == "Longwinded"
        assert description.endswith(ELLIPSIS)
        assert len(description) <= 120 + len(ELLIPSIS)

    def test_synthesize_returns_none_below_threshold(self) -> None:
        assert synthesize("x", _hits(2)) is None
        assert synthesize("x", []) is None


# =====================================================================
# Fallback path
# =====================================================================


class TestFallback:
    def test_zero_results_uses_saas_bucket(self, make_synthesizer) -> None:
        synthesizer, _ = make_synthesizer(hits=[])
        result = synthesizer.research("B2B SaaS workflow tool")

        assert result.competitors[0].startswith("Notion - ")
        assert result.insights.startswith("The SaaS productivity market")
        assert result.sources == list(FALLBACK_SOURCES)

    def test_sparse_results_discarded(self, make_synthesizer) -> None:
        synthesizer, _ = make_synthesizer(hits=_hits(2))
        result = synthesizer.research("bookkeeping for freelancers")

        assert result.competitors[0].startswith("QuickBooks - ")
        assert not any(c.startswith("Company") for c in result.competitors)

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            SearchResponseError("bad body"),
            RuntimeError("unexpected"),
        ],
    )
    def test_transport_failure_falls_back(self, make_synthesizer, error: Exception) -> None:
        synthesizer, _ = make_synthesizer(error=error)
        result = synthesizer.research("community app for runners")

        assert 1 <= len(result.competitors) <= 4
        assert len(result.sources) == 3
        assert result.insights

    def test_failure_is_logged(self, make_synthesizer) -> None:
        synthesizer, _ = make_synthesizer(error=httpx.ConnectError("connection refused"))
        with capture_logs() as logs:
            synthesizer.research("invoicing")

        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert warnings[0]["event"] == "Competitor search failed, using fallback data"
        assert warnings[0]["error"] == "connection refused"

    def test_unconfigured_client_skips_lookup(self, offline_synthesizer) -> None:
        result = offline_synthesizer.research("online shop builder")
        assert result.competitors[0].startswith("Shopify - ")

    @respx.mock
    def test_http_500_falls_back(self) -> None:
        route = respx.route(
            method="GET", host="api.search.brave.com", path="/res/v1/web/search"
        ).mock(return_value=httpx.Response(500, text="Internal Server Error"))

        synthesizer = ResearchSynthesizer(BraveSearchClient(api_key="brave-test-key"))
        result = synthesizer.research("fitness tracker")

        assert route.call_count == 1
        assert result.competitors[0].startswith("Peloton - ")
        assert result.sources == list(FALLBACK_SOURCES)

    def test_outcome_metrics(self, make_synthesizer) -> None:
        before_fallback = _counter("fallback")
        before_synthesized = _counter("synthesized")

        make_synthesizer(hits=[])[0].research("anything")
        make_synthesizer(hits=_hits(3))[0].research("anything")

        assert _counter("fallback") == before_fallback + 1
        assert _counter("synthesized") == before_synthesized + 1


class TestTopicBuckets:
    def test_bucket_order(self) -> None:
        assert [b.name for b in TOPIC_BUCKETS] == [
            "saas",
            "accounting",
            "social",
            "ai",
            "ecommerce",
            "health",
        ]

    def test_first_match_wins(self) -> None:
        assert select_bucket("SaaS for health clinics").name == "saas"
        assert select_bucket("fitness marketplace").name == "ecommerce"
        assert select_bucket("AI bookkeeping assistant").name == "accounting"

    def test_matching_is_case_insensitive(self) -> None:
        assert select_bucket("WELLNESS Retreats").name == "health"

    def test_every_bucket_is_bounded(self) -> None:
        for bucket in TOPIC_BUCKETS:
            result = bucket.to_result()
            assert len(result.competitors) == 4
            assert result.insights
            assert result.sources == list(FALLBACK_SOURCES)

    def test_generic_bucket_interpolates_query(self) -> None:
        result = select_bucket("quantum widgets").to_result()

        assert len(result.competitors) == 4
        assert result.competitors[0].startswith("Established players in the quantum widgets market")
        assert all("quantum widgets" in c for c in result.competitors)
        assert result.insights.startswith("The quantum widgets market shows strong growth")
        assert result.sources == list(FALLBACK_SOURCES)


class TestResearchFunction:
    def test_uses_settings(self, settings) -> None:
        result = research("B2B SaaS workflow tool", settings=settings)
        assert result.competitors[0].startswith("Notion - ")
