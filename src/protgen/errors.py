"""
Custom exceptions for protgen.
"""

from typing import Optional


class ProtGenError(Exception):
    """Base exception for protgen errors."""

    pass


class ParseError(ProtGenError):
    """Error parsing function prototype source."""

    pass


class PrototypeSyntaxError(ParseError):
    """Malformed token sequence in a prototype declaration.

    Attributes:
        token: The token the parser stopped at, if there was one.
    """

    def __init__(self, message: str, token: Optional[object] = None):
        super().__init__(message)
        self.token = token


class ValidationError(ProtGenError):
    """Error validating configuration or inputs."""

    pass


class PresetError(ProtGenError):
    """Error reading or writing a preset file."""

    pass
