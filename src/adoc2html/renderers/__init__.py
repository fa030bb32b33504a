#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning the document tree into HTML."""

from adoc2html.renderers.base import BaseRenderer, RenderContext
from adoc2html.renderers.franklin import FRANKLIN_RULES, FranklinRenderer, RuleRegistry
from adoc2html.renderers.html5 import Html5Renderer
from adoc2html.renderers.registry import (
    BackendMetadata,
    BackendRegistry,
    get_renderer,
    list_backends,
    register_backend,
)

__all__ = [
    "BackendMetadata",
    "BackendRegistry",
    "BaseRenderer",
    "FRANKLIN_RULES",
    "FranklinRenderer",
    "Html5Renderer",
    "RenderContext",
    "RuleRegistry",
    "get_renderer",
    "list_backends",
    "register_backend",
]
