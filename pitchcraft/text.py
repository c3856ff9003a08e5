"""Text helpers for turning noisy search snippets into display strings."""

from __future__ import annotations

import re

UNKNOWN_COMPANY = "Unknown Company"
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_PARENS_RE = re.compile(r"\(.*?\)")
_YEAR_RE = re.compile(r"\d{4}")
_LAST_WHITESPACE_RE = re.compile(r"\s(?!.*\s)", re.DOTALL)

# Decoded in this order; anything else is left untouched.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&nbsp;", " "),
    ("&#39;", "'"),
)

_SENTENCE_ENDS = (". ", "! ", "? ")


def _strip_and_decode(text: str) -> str:
    cleaned = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES:
        cleaned = cleaned.replace(entity, char)
    return cleaned


def sanitize(text: str) -> str:
    """Remove markup, decode common entities and collapse whitespace.

    Tag stripping and entity decoding repeat until the text stops changing,
    so escaped markup such as ``&lt;b&gt;`` is removed as well and the
    function is idempotent.
    """
    if not text:
        return ""

    cleaned = text
    while True:
        decoded = _strip_and_decode(cleaned)
        if decoded == cleaned:
            break
        cleaned = decoded

    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def extract_entity_name(title: str) -> str:
    """Derive a short company name from a search result title.

    "Acme Corp | Home" -> "Acme Corp"; "Notion (2024) - All-in-one" -> "Notion".
    At most four words are kept.
    """
    if not title:
        return UNKNOWN_COMPANY

    candidate = title.split("|")[0]
    candidate = candidate.split("-")[0]
    candidate = candidate.split(":")[0]
    candidate = _PARENS_RE.sub("", candidate)
    candidate = _YEAR_RE.sub("", candidate)

    words = [w for w in candidate.strip().split() if w]
    if not words:
        return UNKNOWN_COMPANY
    return " ".join(words[:4])


def truncate_at_sentence(text: str, max_length: int) -> str:
    """Shorten *text* to *max_length* without cutting mid-sentence or mid-word.

    Tries, in order:
    1. the last sentence end (". ", "! ", "? ") at or past 60% of the budget, kept
       without an ellipsis;
    2. the last whitespace at or past 70% of the budget, with an ellipsis;
    3. a hard cut at *max_length*, with an ellipsis.
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_sentence_end = max(truncated.rfind(marker) for marker in _SENTENCE_ENDS)
    if last_sentence_end >= max_length * 0.6:
        return truncated[: last_sentence_end + 1].strip()

    last_space = _LAST_WHITESPACE_RE.search(truncated)
    if last_space is not None and last_space.start() >= max_length * 0.7:
        return truncated[: last_space.start()].strip() + ELLIPSIS

    return truncated.strip() + ELLIPSIS
