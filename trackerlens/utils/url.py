"""
URL and domain helpers shared by the analysis engines.

Hostname extraction is tolerant: an unparsable ``url`` yields
``None`` so the caller can leave the event out of URL-based
grouping while still counting it elsewhere.
"""

from __future__ import annotations

import re
from urllib import parse

import tldextract

# Offline extractor: uses the public suffix snapshot bundled with
# tldextract and never touches the network or the disk cache.
_extractor = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())

_TRACKER_PREFIX_RE = re.compile(r"^(www\.|analytics\.|tracking\.|ads\.)")


def extract_hostname(url: str) -> str | None:
    """Extract the lower-cased hostname from a URL string.

    Returns:
        The hostname, or ``None`` when *url* cannot be parsed or
        has no network location.
    """
    if not url:
        return None
    try:
        hostname = parse.urlparse(url).hostname
    except ValueError:
        return None
    return hostname or None


def site_key(url: str) -> str | None:
    """Return the visited-site key for a page URL.

    The key is the hostname with a leading ``www.`` removed, so
    ``https://www.example.com/a`` and ``https://example.com/b``
    are the same site.
    """
    hostname = extract_hostname(url)
    if hostname is None:
        return None
    return hostname.removeprefix("www.")


def normalize_site(domain: str) -> str:
    """Normalise a caller-supplied site domain to a site key."""
    return domain.strip().lower().removeprefix("www.")


def company_key(tracker_domain: str) -> str:
    """Map a tracker domain to the company that operates it.

    Uses the public suffix list so multi-part suffixes resolve
    correctly (``ads.tracker.co.uk`` -> ``tracker``).  Falls back
    to stripping well-known tracker subdomain prefixes and taking
    the second-to-last label when the domain has no recognised
    suffix.

    Args:
        tracker_domain: A hostname like ``"analytics.google.com"``.

    Returns:
        The company label, e.g. ``"google"``.
    """
    clean = tracker_domain.strip().lower().rstrip(".")
    extracted = _extractor(clean)
    if extracted.domain and extracted.suffix:
        return extracted.domain

    stripped = _TRACKER_PREFIX_RE.sub("", clean)
    parts = stripped.split(".")
    return parts[-2] if len(parts) >= 2 else stripped
