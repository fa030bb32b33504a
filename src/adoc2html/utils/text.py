#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/text.py
"""Text processing utilities for section identifiers.

Functions
---------
slugify : Convert text to an identifier-safe slug
make_unique_id : Register an id, appending a counter on collisions

"""

from __future__ import annotations

import re
import unicodedata

from adoc2html.constants import SECTION_ID_PREFIX, SECTION_ID_SEPARATOR

_INVALID_CHARS = re.compile(r"[^\w\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s_-]+")


def slugify(text: str, *, separator: str = "-", max_length: int = 100) -> str:
    """Create a lowercase, ASCII-only slug from text.

    Parameters
    ----------
    text : str
        Text to slugify (usually a section title)
    separator : str, default = "-"
        Separator placed between words
    max_length : int, default = 100
        Maximum length of the slug

    Returns
    -------
    str
        The slug; empty when ``text`` contains no word characters

    Examples
    --------
        >>> slugify("My Heading Title")
        'my-heading-title'
        >>> slugify("Café & Bar", separator="_")
        'cafe_bar'

    """
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = _INVALID_CHARS.sub("", normalized.lower())
    slug = _SEPARATOR_RUNS.sub(separator, normalized).strip(separator)
    return slug[:max_length].rstrip(separator)


def section_id(title: str, prefix: str = SECTION_ID_PREFIX, separator: str = SECTION_ID_SEPARATOR) -> str:
    """Build an Asciidoctor-style automatic section id (``_my_title``).

    ``prefix`` and ``separator`` follow the ``idprefix`` and ``idseparator``
    document attributes.
    """
    return f"{prefix}{slugify(title, separator=separator or SECTION_ID_SEPARATOR)}"


def make_unique_id(candidate: str, seen: dict[str, int], separator: str = SECTION_ID_SEPARATOR) -> str:
    """Return ``candidate`` or a numbered variant not yet present in ``seen``.

    ``seen`` is updated in place. The first occurrence keeps the bare id and
    later ones receive ``_2``, ``_3`` and so on.
    """
    if candidate not in seen:
        seen[candidate] = 1
        return candidate
    while True:
        seen[candidate] += 1
        numbered = f"{candidate}{separator}{seen[candidate]}"
        if numbered not in seen:
            seen[numbered] = 1
            return numbered
