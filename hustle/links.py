"""
Website-link handling for generated ideas.

The provider suggests websites as free text: sometimes a bare hostname,
sometimes a full URL, sometimes garbage. Everything here decides whether a
string is safe to render as a clickable link.
"""

import ipaddress
import re
from typing import List, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_SCHEME = "https"

# Max length of an invalid entry before it gets shortened for display
INVALID_DISPLAY_LIMIT = 30

_HOST_LABEL = r"[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"
_HOSTNAME_RE = re.compile(rf"^{_HOST_LABEL}(?:\.{_HOST_LABEL})*\.?$")


class WebsiteLink(BaseModel):
    """A website suggestion prepared for display."""
    raw: str
    label: str
    href: Optional[str] = None
    clickable: bool = False


def _is_valid_host(hostname: str) -> bool:
    # urlsplit strips the brackets from IPv6 literals
    if ":" in hostname:
        try:
            return ipaddress.ip_address(hostname).version == 6
        except ValueError:
            return False
    try:
        ascii_host = hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return bool(_HOSTNAME_RE.match(ascii_host))


def normalize_website(url: str) -> Optional[str]:
    """
    Return an absolute http(s) URL for a website suggestion, or None.

    Strings without a scheme are treated as bare hostnames and get
    ``https://`` prefixed before parsing.
    """
    if not isinstance(url, str):
        return None
    candidate = url.strip()
    if not candidate:
        return None
    if "://" not in candidate:
        candidate = f"{DEFAULT_SCHEME}://{candidate}"

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates it and raises ValueError when malformed
        parts.port
    except ValueError:
        return None

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return None
    # "mailto:x@host" gains a scheme and parses as userinfo@host
    if parts.username or parts.password:
        return None
    hostname = parts.hostname
    if not hostname or not _is_valid_host(hostname):
        return None
    if any(ch.isspace() for ch in candidate):
        return None
    return parts.geturl()


def is_valid_website(url: str) -> bool:
    return normalize_website(url) is not None


def _invalid_label(raw: str) -> str:
    text = raw if len(raw) <= INVALID_DISPLAY_LIMIT else f"{raw[:INVALID_DISPLAY_LIMIT - 3]}..."
    return f"{text} (invalid link)"


def website_link(url: str) -> WebsiteLink:
    """Build the display form of a single website suggestion."""
    raw = url if isinstance(url, str) else str(url)
    href = normalize_website(raw)
    if href is None:
        return WebsiteLink(raw=raw, label=_invalid_label(raw))
    return WebsiteLink(raw=raw, label=urlsplit(href).hostname, href=href, clickable=True)


def website_links(websites: List[str]) -> List[WebsiteLink]:
    return [website_link(url) for url in websites or []]
