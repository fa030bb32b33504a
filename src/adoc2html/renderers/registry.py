#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/registry.py
"""Registry of rendering backends.

Backends are selected by name (``"franklin"``, ``"html5"``). Renderers are
stateless between conversions, so the registry hands out one shared instance
per backend unless the caller supplies its own options.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from adoc2html.constants import BACKEND_FRANKLIN, BACKEND_HTML5
from adoc2html.exceptions import FormatError
from adoc2html.options.base import BaseRendererOptions
from adoc2html.options.franklin import FranklinRendererOptions
from adoc2html.options.html import HtmlRendererOptions
from adoc2html.renderers.base import BaseRenderer
from adoc2html.renderers.franklin import FranklinRenderer
from adoc2html.renderers.html5 import Html5Renderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendMetadata:
    """Description of a registered backend.

    Parameters
    ----------
    name : str
        Backend name used for lookup
    renderer_class : type
        BaseRenderer subclass implementing the backend
    options_class : type or None
        Options class accepted by the renderer
    description : str
        Short human-readable description

    """

    name: str
    renderer_class: Type[BaseRenderer]
    options_class: Optional[Type[BaseRendererOptions]] = None
    description: str = ""


class BackendRegistry:
    """Registry mapping backend names to renderer classes.

    Attributes
    ----------
    _backends : dict
        Registered backends by name
    _instances : dict
        Shared renderer instances created on first use

    """

    def __init__(self) -> None:
        self._backends: Dict[str, BackendMetadata] = {}
        self._instances: Dict[str, BaseRenderer] = {}
        self._lock = threading.Lock()

    def register(self, metadata: BackendMetadata) -> None:
        """Register a backend, replacing any backend of the same name."""
        with self._lock:
            if metadata.name in self._backends:
                logger.debug(f"Replacing backend: {metadata.name}")
            else:
                logger.debug(f"Registered backend: {metadata.name}")
            self._backends[metadata.name] = metadata
            self._instances.pop(metadata.name, None)

    def unregister(self, name: str) -> bool:
        """Remove a backend; return True if it was registered."""
        with self._lock:
            self._instances.pop(name, None)
            return self._backends.pop(name, None) is not None

    def get_metadata(self, name: str) -> BackendMetadata:
        """Return the metadata of a backend.

        Raises
        ------
        FormatError
            If no backend of that name is registered

        """
        try:
            return self._backends[name]
        except KeyError:
            raise FormatError(format_type=name, supported_formats=self.list_backends()) from None

    def get_renderer(self, name: str, options: Optional[BaseRendererOptions] = None) -> BaseRenderer:
        """Return a renderer for the named backend.

        Parameters
        ----------
        name : str
            Backend name
        options : BaseRendererOptions or None, default = None
            Renderer options; when given a new renderer is built with them,
            otherwise the shared instance is returned

        Raises
        ------
        FormatError
            If no backend of that name is registered
        InvalidOptionsError
            If ``options`` is not accepted by the backend's renderer

        """
        metadata = self.get_metadata(name)
        if options is not None:
            return metadata.renderer_class(options)  # type: ignore[call-arg]
        with self._lock:
            renderer = self._instances.get(name)
            if renderer is None:
                renderer = metadata.renderer_class()  # type: ignore[call-arg]
                self._instances[name] = renderer
            return renderer

    def list_backends(self) -> List[str]:
        return sorted(self._backends)


registry = BackendRegistry()
registry.register(
    BackendMetadata(
        name=BACKEND_FRANKLIN,
        renderer_class=FranklinRenderer,
        options_class=FranklinRendererOptions,
        description="Lean page markup with custom rules over HTML5",
    )
)
registry.register(
    BackendMetadata(
        name=BACKEND_HTML5,
        renderer_class=Html5Renderer,
        options_class=HtmlRendererOptions,
        description="Asciidoctor-style HTML5",
    )
)


def register_backend(metadata: BackendMetadata) -> None:
    """Register a backend with the global registry."""
    registry.register(metadata)


def get_renderer(name: str, options: Optional[BaseRendererOptions] = None) -> BaseRenderer:
    """Return a renderer for ``name`` from the global registry."""
    return registry.get_renderer(name, options)


def list_backends() -> List[str]:
    """Return the names of all registered backends."""
    return registry.list_backends()
