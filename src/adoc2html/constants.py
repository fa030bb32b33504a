#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/constants.py
"""Constants and default values used across adoc2html.

Defaults for every options dataclass live here so that the CLI, the API and
the options classes agree on a single source of truth.
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Backends
# =============================================================================

BACKEND_FRANKLIN = "franklin"
BACKEND_HTML5 = "html5"
DEFAULT_BACKEND = BACKEND_FRANKLIN

# =============================================================================
# Franklin renderer
# =============================================================================

# Suffix of rendered source documents; links ending with it point at logical pages
DEFAULT_DOCUMENT_SUFFIX = ".html"
SECTION_OPEN_TAG = "<div>"
SECTION_CLOSE_TAG = "</div>"
THEMATIC_BREAK_MARKUP = "<hr>"
LIST_WRAPPER_PREFIXES = ("<ul>", "<ol>")

# =============================================================================
# HTML5 renderer
# =============================================================================

DEFAULT_HTML_LANGUAGE = "en"
DEFAULT_HTML_SECTION_IDS = True
DEFAULT_HTML_INCLUDE_FOOTNOTES = True
DEFAULT_HTML_SHOW_TITLE = False

# Labels used for admonition captions when no icon font is enabled
ADMONITION_CAPTIONS = {
    "note": "Note",
    "tip": "Tip",
    "important": "Important",
    "warning": "Warning",
    "caution": "Caution",
}

# Tags emitted for inline_quoted nodes by the HTML5 renderer
QUOTE_TAGS = {
    "emphasis": ("<em>", "</em>"),
    "strong": ("<strong>", "</strong>"),
    "monospaced": ("<code>", "</code>"),
    "superscript": ("<sup>", "</sup>"),
    "subscript": ("<sub>", "</sub>"),
    "mark": ("<mark>", "</mark>"),
    "double": ("&#8220;", "&#8221;"),
    "single": ("&#8216;", "&#8217;"),
}

# =============================================================================
# AsciiDoc parser
# =============================================================================

AttributeMissingPolicy = Literal["keep", "blank", "warn"]
ATTRIBUTE_MISSING_POLICIES = ("keep", "blank", "warn")

DEFAULT_ASCIIDOC_PARSE_ATTRIBUTES = True
DEFAULT_ASCIIDOC_RESOLVE_ATTRIBUTE_REFS = True
DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY: AttributeMissingPolicy = "keep"
DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS = True
DEFAULT_ASCIIDOC_SUPPORT_UNCONSTRAINED_FORMATTING = True
DEFAULT_ASCIIDOC_PARSE_ADMONITIONS = True
DEFAULT_ASCIIDOC_AUTOLINK_URLS = True

ADMONITION_STYLES = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")
SOURCE_DOCUMENT_SUFFIX = ".adoc"
DEFAULT_OUTFILESUFFIX = ".html"
SECTION_ID_PREFIX = "_"
SECTION_ID_SEPARATOR = "_"
MAX_SECTION_LEVEL = 5

# Attributes every document starts with; API attributes and entries override them
DEFAULT_DOCUMENT_ATTRIBUTES = {
    "outfilesuffix": DEFAULT_OUTFILESUFFIX,
    "sectids": "",
    "idprefix": SECTION_ID_PREFIX,
    "idseparator": SECTION_ID_SEPARATOR,
}

# Read-only character replacement attributes
INTRINSIC_ATTRIBUTES = {
    "empty": "",
    "sp": " ",
    "nbsp": "\u00a0",
    "zwsp": "\u200b",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
    "startsb": "[",
    "endsb": "]",
    "vbar": "|",
    "caret": "^",
    "asterisk": "*",
    "tilde": "~",
    "plus": "+",
    "backslash": "\\",
    "backtick": "`",
}

# Numbering styles of nested ordered lists, outermost first
ORDERED_LIST_STYLES = ("arabic", "loweralpha", "lowerroman", "upperalpha", "upperroman")
ORDERED_LIST_TYPES = {
    "loweralpha": "a",
    "lowerroman": "i",
    "upperalpha": "A",
    "upperroman": "I",
}

STEM_STYLES = ("stem", "latexmath", "asciimath")

# =============================================================================
# Page shell
# =============================================================================

DEFAULT_PAGE_TEMPLATE = "page.html.jinja"
DEFAULT_PAGE_SCRIPT = "/scripts/scripts.js"
DEFAULT_PAGE_STYLESHEET = "/styles/styles.css"

# =============================================================================
# URL safety
# =============================================================================

DANGEROUS_SCHEMES = ("javascript:", "vbscript:", "data:text/html")
