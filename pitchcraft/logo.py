"""Placeholder logo generator.

Logos are placehold.co images: the startup name on a brand-coloured square.
"""

from __future__ import annotations

import random
import re
from urllib.parse import quote

from pitchcraft.models.pitch import LogoResult

LOGO_COLORS: tuple[str, ...] = ("6366f1", "8b5cf6", "06b6d4", "10b981", "f59e0b", "ef4444")

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_logo_text(name: str) -> str:
    """Keep ASCII letters, digits and spaces; join words with '+'."""
    cleaned = _NON_ALNUM_RE.sub("", name.strip())
    return _WHITESPACE_RE.sub("+", cleaned)


def generate_logo(name: str, rng: random.Random | None = None) -> LogoResult:
    """Build a logo URL for *name*.

    Args:
        name: Startup name; returned unchanged in the result.
        rng: Source of randomness for the colour. Defaults to the
            module-level ``random`` generator.
    """
    chooser = rng if rng is not None else random
    color = chooser.choice(LOGO_COLORS)
    text = quote(clean_logo_text(name), safe="")
    logo_url = f"https://placehold.co/300x300/{color}/white?text={text}&font=raleway"
    return LogoResult(logo_url=logo_url, name=name)
