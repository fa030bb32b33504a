#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/html.py
"""HTML-related string helpers.

These are pure text-level transformations applied to rendered leaf content:
escaping, turning bare URLs into hyperlinks, stripping source document
suffixes from link targets and refusing dangerous URL schemes.

Examples
--------
    >>> linkify("see https://example.com for details")
    'see <a href="https://example.com">https://example.com</a> for details'
    >>> strip_document_suffix("page.html")
    'page'

"""

from __future__ import annotations

import re
from html import escape as _html_escape

from adoc2html.constants import DANGEROUS_SCHEMES, DEFAULT_DOCUMENT_SUFFIX

# A bare URL starts after whitespace and ends at whitespace or markup
_BARE_URL_PATTERN = re.compile(r'(?<!\S)(https?://[^\s<"]+)')


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return _html_escape(value, quote=True)


def linkify(text: str) -> str:
    """Wrap every bare ``http(s)://`` URL in an anchor pointing at itself.

    A bare URL is a maximal run beginning with ``http://`` or ``https://``
    that contains no whitespace, ``<`` or ``"``. The input is rendered markup
    whose text is already escaped, so a literal ``<`` always starts a tag.
    Surrounding text is left untouched and text without such a run is
    returned unchanged.

    Parameters
    ----------
    text : str
        Rendered text to scan

    Returns
    -------
    str
        Text with each bare URL wrapped in exactly one ``<a>`` element

    Notes
    -----
    The transformation is not guaranteed to be idempotent; run it once on
    a given fragment.

    """
    if "http" not in text:
        return text
    return _BARE_URL_PATTERN.sub(r'<a href="\1">\1</a>', text)


def strip_document_suffix(target: str, suffix: str = DEFAULT_DOCUMENT_SUFFIX) -> str:
    """Remove a trailing source document suffix from a link target.

    The match is exact and case-sensitive and the suffix is removed once:
    ``"a.html.html"`` becomes ``"a.html"``.
    """
    if suffix and target.endswith(suffix):
        return target[: -len(suffix)]
    return target


def is_url_safe(url: str) -> bool:
    """Return False for URLs using a scheme that can execute script."""
    normalized = "".join(url.split()).lower()
    return not normalized.startswith(DANGEROUS_SCHEMES)


def sanitize_url(url: str) -> str:
    """Sanitize a URL by removing dangerous schemes.

    Examples
    --------
    >>> sanitize_url("https://example.com")
    'https://example.com'
    >>> sanitize_url("javascript:alert('xss')")
    ''

    """
    if not is_url_safe(url):
        return ""
    return url


__all__ = [
    "escape_html",
    "escape_attribute",
    "linkify",
    "strip_document_suffix",
    "is_url_safe",
    "sanitize_url",
]
