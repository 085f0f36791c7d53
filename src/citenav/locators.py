from __future__ import annotations

import re
from urllib.parse import unquote

from .models import MediaLocation, PageLocation

CITEKEY_RE = re.compile(r"cite:@([^\s;\]]+)")
PAGE_RE = re.compile(r"\bpp?\.\s*(\d+)(?:\s*[-–]\s*(\d+))?")
REGION_RE = re.compile(r"\bpp?\.\s*\d+(?:\s*[-–]\s*\d+)?.*?\(([-+0-9.eE,\s]+)\)")
TIMESTAMP_RE = re.compile(r"(?<![\d:])(\d{1,2}):([0-5]\d)(?::([0-5]\d))?(?![\d:])")
MEDIA_LINK_RE = re.compile(r"(?:\[\[)?cite:@([^\s;\]]+)\s+([^\s\]]+)\]\[([^\]]+)\]\]")
LEADING_CITATION_RE = re.compile(r"\[*cite:@")


def extract_citekey(text: str) -> str | None:
    m = CITEKEY_RE.search(text)
    return m.group(1) if m else None


def extract_page(text: str) -> int | None:
    """First page number after a `p.`/`pp.` marker; a range yields its start."""
    m = PAGE_RE.search(text)
    return int(m.group(1)) if m else None


def extract_page_label(text: str) -> str | None:
    m = PAGE_RE.search(text)
    return m.group(0) if m else None


def parse_region(raw: str) -> tuple[float, ...] | None:
    parts = [p for p in re.split(r"[\s,]+", raw.strip()) if p]
    if not parts:
        return None
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        return None


def extract_region(text: str) -> tuple[float, ...] | None:
    """Parenthesized coordinate tuple following the page marker.

    Coordinates only make sense relative to a page, so text without a page
    marker never yields a region.
    """
    m = REGION_RE.search(text)
    return parse_region(m.group(1)) if m else None


def extract_timestamp(text: str) -> str | None:
    m = TIMESTAMP_RE.search(text)
    return m.group(0) if m else None


def timestamp_bucket(timestamp: str) -> str:
    """Coarse `H:MM` bucket of a timestamp."""
    m = TIMESTAMP_RE.fullmatch(timestamp)
    if not m:
        return timestamp
    return f"{m.group(1)}:{m.group(2)}"


def timestamp_seconds(timestamp: str) -> int | None:
    m = TIMESTAMP_RE.fullmatch(timestamp)
    if not m:
        return None
    first, second, third = m.groups()
    if third is None:
        # H:MM
        return int(first) * 3600 + int(second) * 60
    return int(first) * 3600 + int(second) * 60 + int(third)


def parse_media_link(text: str) -> tuple[str, str, str] | None:
    """Split `[[cite:@key resource][timestamp]]` into its three parts.

    The leading brackets are optional, since search summaries start at
    `cite:@`. The resource comes back url-decoded.
    """
    m = MEDIA_LINK_RE.search(text)
    if not m:
        return None
    return m.group(1), unquote(m.group(2).strip()), m.group(3).strip()


def citation_context(text: str) -> str:
    """Trailing text that belongs to the leading citation.

    Stops at the next `cite:@` so a later citation on the same line never
    lends its page or timestamp to this one.
    """
    m = LEADING_CITATION_RE.match(text)
    start = m.end() if m else 0
    nxt = text.find("cite:@", start)
    return text if nxt < 0 else text[:nxt]


def extract_location(text: str) -> PageLocation | MediaLocation | None:
    """Classify a match's trailing text.

    A timestamp wins over a page marker; neither means a plain note (None).
    """
    text = citation_context(text)
    timestamp = extract_timestamp(text)
    if timestamp is not None:
        link = parse_media_link(text)
        return MediaLocation(
            bucket=timestamp_bucket(timestamp),
            timestamp=timestamp,
            resource=link[1] if link else None,
        )
    page = extract_page(text)
    if page is not None:
        return PageLocation(
            page=page,
            label=extract_page_label(text) or f"p. {page}",
            region=extract_region(text),
        )
    return None
