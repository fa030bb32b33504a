"""Command-line interface for the adoc2html converter.

This module provides the ``adoc2html`` command, which converts an AsciiDoc
file to HTML using the library's conversion API.

Examples
--------
Basic conversion, printing the page to standard output:
    $ adoc2html page.adoc

Write the result to a file:
    $ adoc2html page.adoc -o page.html

Render a fragment without the page shell, using the plain HTML5 backend:
    $ adoc2html page.adoc --backend html5 --no-page

Set document attributes:
    $ adoc2html page.adoc -a icons=font -a sectids!

Read from standard input and highlight the output:
    $ cat page.adoc | adoc2html - --rich
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2html/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from adoc2html.api import adoc2html
from adoc2html.constants import DEFAULT_BACKEND
from adoc2html.exceptions import Adoc2HtmlError
from adoc2html.logging_utils import configure_logging
from adoc2html.options.convert import ConvertOptions
from adoc2html.renderers.registry import list_backends

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2


def _get_version() -> str:
    """Get the version of the adoc2html package."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("adoc2html")
    except PackageNotFoundError:
        return "unknown"


def parse_attribute(value: str) -> Tuple[str, Any]:
    """Parse a ``-a`` argument into an attribute name and value.

    ``NAME=VALUE`` sets a value, ``NAME`` sets the attribute to an empty
    value and ``NAME!`` unsets it (the value is None).

    Raises
    ------
    argparse.ArgumentTypeError
        If the attribute name is empty

    """
    name, separator, attr_value = value.partition("=")
    name = name.strip()
    if name.endswith("!") and not separator:
        name = name[:-1]
        if name:
            return name, None
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid attribute '{value}': expected NAME, NAME=VALUE or NAME!")
    return name, attr_value if separator else ""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``adoc2html`` command."""
    parser = argparse.ArgumentParser(
        prog="adoc2html",
        description="Convert AsciiDoc documents to HTML pages.",
        epilog=f"Available backends: {', '.join(list_backends())}",
    )
    parser.add_argument("input", help="AsciiDoc file to convert, or '-' to read standard input")
    parser.add_argument("-o", "--out", dest="output", help="Output file (default: standard output)")
    parser.add_argument(
        "-b",
        "--backend",
        default=DEFAULT_BACKEND,
        help=f"Rendering backend (default: {DEFAULT_BACKEND})",
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        help="Render the document transform instead of the embedded one",
    )
    parser.add_argument("--no-page", action="store_true", help="Do not wrap the output in the page shell")
    parser.add_argument("--page-template", help="Jinja2 template file replacing the built-in page shell")
    parser.add_argument(
        "-a",
        "--attribute",
        dest="attributes",
        action="append",
        type=parse_attribute,
        default=[],
        metavar="NAME[=VALUE]",
        help="Set a document attribute; NAME! unsets it (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--rich", action="store_true", help="Syntax-highlight the HTML on the terminal")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    return parser


def _read_source(input_arg: str) -> Any:
    if input_arg == "-":
        return sys.stdin.buffer.read()
    path = Path(input_arg)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {input_arg}")
    return path


def _print_rich(html: str) -> None:
    """Print HTML with syntax highlighting."""
    from rich.console import Console
    from rich.syntax import Syntax

    Console().print(Syntax(html, "html", theme="monokai", word_wrap=True))


def main(args: Optional[List[str]] = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    args : list of str or None, default = None
        Command line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Exit code: 0 on success, 1 on conversion errors, 2 on usage errors

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_USAGE_ERROR

    configure_logging(parsed.log_level, log_file=parsed.log_file)

    if parsed.backend not in list_backends():
        print(
            f"Error: unknown backend '{parsed.backend}' (available: {', '.join(list_backends())})",
            file=sys.stderr,
        )
        return EXIT_USAGE_ERROR

    options = ConvertOptions(
        backend=parsed.backend,
        standalone=parsed.standalone,
        wrap_page=not parsed.no_page,
        page_template=parsed.page_template,
        attributes=dict(parsed.attributes),
    )

    try:
        html = adoc2html(_read_source(parsed.input), options)
        if parsed.output:
            Path(parsed.output).write_text(html, encoding="utf-8")
            logger.info(f"Wrote {parsed.output}")
    except (Adoc2HtmlError, OSError) as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not parsed.output:
        if parsed.rich:
            _print_rich(html)
        else:
            print(html)
    return EXIT_SUCCESS
