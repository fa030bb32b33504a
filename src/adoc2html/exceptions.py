#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adoc2html library.

Exception Hierarchy
-------------------
- Adoc2HtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class or unknown option)

  - FormatError (unknown backend)

  - ParsingError (AsciiDoc source could not be turned into a node tree)

  - RenderingError (a node tree could not be turned into markup)

"""

from typing import Any


class Adoc2HtmlError(Exception):
    """Base exception class for all adoc2html-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Adoc2HtmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a component receives options it cannot use.

    Raised either when an options object of the wrong class is passed to a
    parser or renderer, or when a pass-through mapping names an option the
    receiving renderer does not define.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that rejected the options
    expected_type : type, optional
        Options class the component expects
    received_type : type, optional
        Options class that was actually received
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type | None = None,
        received_type: type | None = None,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the error and build a default message."""
        if message is None:
            expected = expected_type.__name__ if expected_type else "unknown"
            received = received_type.__name__ if received_type else "unknown"
            message = f"'{converter_name}' expects options of type {expected}, got {received}"
        super().__init__(message, parameter_name="options", original_error=original_error)
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FormatError(Adoc2HtmlError):
    """Exception raised when an unknown rendering backend is requested.

    Parameters
    ----------
    message : str, optional
        Custom error message
    format_type : str, optional
        The backend name that was requested
    supported_formats : list[str], optional
        Registered backend names, for reference

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the format error."""
        if message is None:
            if format_type:
                message = f"Unknown backend: '{format_type}'"
                if supported_formats:
                    message += f". Available backends: {', '.join(supported_formats)}"
            else:
                message = "Unknown backend"
        super().__init__(message, original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats


class ParsingError(Adoc2HtmlError):
    """Exception raised when AsciiDoc parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Adoc2HtmlError):
    """Exception raised when output rendering fails.

    A conversion either produces the full markup or raises this error once for
    the whole document; partial output is never returned.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred (usually the node name)
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


__all__ = [
    "Adoc2HtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "FormatError",
    "ParsingError",
    "RenderingError",
]
