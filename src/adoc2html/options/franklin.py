#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the Franklin renderer."""

from __future__ import annotations

from dataclasses import dataclass

from adoc2html.constants import DEFAULT_DOCUMENT_SUFFIX
from adoc2html.options.base import BaseRendererOptions


@dataclass(frozen=True)
class FranklinRendererOptions(BaseRendererOptions):
    """Configuration options for the Franklin renderer.

    Parameters
    ----------
    document_suffix : str, default ".html"
        Suffix removed from link targets so authored links point at logical
        pages rather than rendered file names. An empty string disables it.
    linkify_list_items : bool, default True
        Turn bare URLs in list item content into hyperlinks.

    """

    document_suffix: str = DEFAULT_DOCUMENT_SUFFIX
    linkify_list_items: bool = True
