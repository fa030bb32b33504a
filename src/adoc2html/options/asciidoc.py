#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/options/asciidoc.py
"""Configuration options for AsciiDoc parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from adoc2html.constants import (
    ATTRIBUTE_MISSING_POLICIES,
    DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY,
    DEFAULT_ASCIIDOC_AUTOLINK_URLS,
    DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS,
    DEFAULT_ASCIIDOC_PARSE_ADMONITIONS,
    DEFAULT_ASCIIDOC_PARSE_ATTRIBUTES,
    DEFAULT_ASCIIDOC_RESOLVE_ATTRIBUTE_REFS,
    DEFAULT_ASCIIDOC_SUPPORT_UNCONSTRAINED_FORMATTING,
    AttributeMissingPolicy,
)
from adoc2html.exceptions import ValidationError
from adoc2html.options.base import BaseParserOptions


@dataclass(frozen=True)
class AsciiDocParserOptions(BaseParserOptions):
    """Configuration options for AsciiDoc-to-tree parsing.

    Parameters
    ----------
    parse_attributes : bool, default True
        Collect document attributes (``:name: value`` entries).
    resolve_attribute_refs : bool, default True
        Replace ``{name}`` references with attribute values.
    attribute_missing_policy : {"keep", "blank", "warn"}, default "keep"
        What to do with references to undefined attributes:
        keep the reference, drop it, or keep it and log a warning.
    honor_hard_breaks : bool, default True
        Turn a trailing `` +`` into an ``inline_break`` node.
    support_unconstrained_formatting : bool, default True
        Recognize ``**strong**`` and ``__emphasis__`` inside words.
    parse_admonitions : bool, default True
        Recognize ``NOTE:`` paragraphs and ``[NOTE]`` blocks as admonitions.
    autolink_urls : bool, default True
        Turn bare ``http(s)://`` URLs into ``inline_anchor`` nodes.
    attributes : dict, default empty
        Attributes applied before the document's own entries, like the
        ``attributes`` API option of Asciidoctor. A value of ``None`` unsets.

    """

    parse_attributes: bool = DEFAULT_ASCIIDOC_PARSE_ATTRIBUTES
    resolve_attribute_refs: bool = DEFAULT_ASCIIDOC_RESOLVE_ATTRIBUTE_REFS
    attribute_missing_policy: AttributeMissingPolicy = DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY
    honor_hard_breaks: bool = DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS
    support_unconstrained_formatting: bool = DEFAULT_ASCIIDOC_SUPPORT_UNCONSTRAINED_FORMATTING
    parse_admonitions: bool = DEFAULT_ASCIIDOC_PARSE_ADMONITIONS
    autolink_urls: bool = DEFAULT_ASCIIDOC_AUTOLINK_URLS
    attributes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.attribute_missing_policy not in ATTRIBUTE_MISSING_POLICIES:
            raise ValidationError(
                f"attribute_missing_policy must be one of {ATTRIBUTE_MISSING_POLICIES}, "
                f"got {self.attribute_missing_policy!r}",
                parameter_name="attribute_missing_policy",
                parameter_value=self.attribute_missing_policy,
            )
