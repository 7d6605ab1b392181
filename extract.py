"""
HTML fragment extraction: text, headings, links and images.

The scorer only talks to the functions in this module, so the parser
behind them can be swapped without touching any check.
"""

import logging
from urllib.parse import urlparse

from bs4 import BeautifulSoup, ParserRejectedMarkup

logger = logging.getLogger(__name__)

LOCAL_HOSTS = ("localhost", "127.0.0.1")


def parse_fragment(html: str | None) -> BeautifulSoup:
    """Parse a fragment; markup the parser rejects yields an empty document."""
    try:
        return BeautifulSoup(html or "", "html.parser")
    except ParserRejectedMarkup as e:
        logger.debug("Unparseable markup treated as empty: %s", e)
        return BeautifulSoup("", "html.parser")


def extract_text(html: str | None) -> str:
    """Concatenated text nodes of the fragment, like a DOM's textContent."""
    return parse_fragment(html).get_text()


def extract_headings(html: str | None, title: str = "") -> dict[str, list[str]]:
    soup = parse_fragment(html)
    return {
        "h1": [title] if title else [],
        "h2": [h.get_text() for h in soup.find_all("h2")],
        "h3": [h.get_text() for h in soup.find_all("h3")],
    }


def _hostname(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def site_host(origin: str | None) -> str:
    if not origin:
        return ""
    origin = origin.strip().lower()
    if "://" not in origin:
        origin = "//" + origin
    return _hostname(origin)


def classify_link(href: str, host: str = "") -> str | None:
    """Return "internal", "external", or None for hrefs that are neither."""
    lowered = href.lower()
    if href.startswith(("/", "#")) or any(h in lowered for h in LOCAL_HOSTS):
        return "internal"
    if not href.startswith("http") and "://" not in href:
        return "internal"
    if host and _hostname(lowered) == host:
        return "internal"
    if href.startswith("http"):
        return "external"
    return None


def extract_links(html: str | None, site_origin: str | None = None) -> dict[str, list[str]]:
    host = site_host(site_origin)
    links = {"internal": [], "external": []}
    for a in parse_fragment(html).find_all("a", href=True):
        href = a["href"] or ""
        kind = classify_link(href, host)
        if kind:
            links[kind].append(href)
    return links


def extract_images(html: str | None) -> list[tuple[str, str | None]]:
    """(src, alt) for every <img>; alt is None when the attribute is missing."""
    return [(img.get("src", ""), img.get("alt")) for img in parse_fragment(html).find_all("img")]


def has_alt_text(alt: str | None) -> bool:
    return alt is not None and alt.strip() != ""
