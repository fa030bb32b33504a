#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/page.py
"""Page shell wrapped around rendered markup.

The shell is a Jinja2 template with a viewport meta tag, the site script
(loaded as a module), the site stylesheet, an empty icon and the
``header``/``main``/``footer`` skeleton. The rendered markup is placed inside
``<main>`` unescaped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, Template, TemplateError, select_autoescape
from markupsafe import Markup

from adoc2html.constants import DEFAULT_PAGE_SCRIPT, DEFAULT_PAGE_STYLESHEET, DEFAULT_PAGE_TEMPLATE
from adoc2html.exceptions import RenderingError

logger = logging.getLogger(__name__)

_package_env: Optional[Environment] = None


def _get_template(template: Union[str, Path, None]) -> Template:
    """Load the built-in page template or a template file."""
    global _package_env
    if template is None:
        if _package_env is None:
            # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
            _package_env = Environment(
                loader=PackageLoader("adoc2html", "templates"),
                autoescape=select_autoescape(["html", "jinja"]),
            )
        return _package_env.get_template(DEFAULT_PAGE_TEMPLATE)

    template_path = Path(template)
    # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
    )
    return env.get_template(template_path.name)


def render_page(
    markup: str,
    template: Union[str, Path, None] = None,
    *,
    script: str = DEFAULT_PAGE_SCRIPT,
    stylesheet: str = DEFAULT_PAGE_STYLESHEET,
    **context: Any,
) -> str:
    """Wrap rendered markup in the page shell.

    Parameters
    ----------
    markup : str
        Rendered HTML placed inside ``<main>`` verbatim
    template : str, Path or None, default = None
        Path of a Jinja2 template to use instead of the built-in shell. The
        template receives ``content``, ``script``, ``stylesheet`` and any
        extra ``context`` values.
    script : str, default = "/scripts/scripts.js"
        Module script referenced by the shell
    stylesheet : str, default = "/styles/styles.css"
        Stylesheet referenced by the shell

    Returns
    -------
    str
        Complete HTML page

    Raises
    ------
    RenderingError
        If the template cannot be loaded or rendered

    Examples
    --------
    >>> page = render_page("<p>Hello</p>")
    >>> "<main>" in page and "<p>Hello</p>" in page
    True

    """
    try:
        page_template = _get_template(template)
        # Markup was produced by a renderer and is already escaped
        return page_template.render(content=Markup(markup), script=script, stylesheet=stylesheet, **context)
    except TemplateError as e:
        raise RenderingError(f"Failed to render page template: {e}", rendering_stage="page", original_error=e) from e
    except OSError as e:
        raise RenderingError(
            f"Failed to load page template {template}: {e}", rendering_stage="page", original_error=e
        ) from e
