"""Citation strings written into note files.

Two literal formats are read back by the locator extractor and must stay
byte-compatible:

    [cite:@<citekey> p. <page>]
    [cite:@<citekey> p. <page>] [[<coordinates>][<label>]]
    [[cite:@<citekey> <url-encoded-resource>][<timestamp>]]
"""
from __future__ import annotations

import re
from urllib.parse import quote


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_region(region: tuple[float, ...]) -> str:
    return "(" + " ".join(format_number(v) for v in region) + ")"


def page_citation(citekey: str, page: int, region: tuple[float, ...] | None = None, label: str | None = None) -> str:
    cite = f"[cite:@{citekey} p. {page}]"
    if not region:
        return cite
    return f"{cite} [[{format_region(region)}][{label or f'p. {page}'}]]"


def media_citation(citekey: str, resource: str, timestamp: str) -> str:
    return f"[[cite:@{citekey} {quote(resource, safe='')}][{timestamp}]]"


def citekey_pattern(citekey: str) -> str:
    """Regex that finds citations of one citekey."""
    return rf"cite:@{re.escape(citekey)}(?=[\s;\]]|$)"
