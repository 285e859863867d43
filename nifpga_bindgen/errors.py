"""Exceptions raised by the interface extraction and binding generation pipeline.

Every condition that must fail the build derives from ``GenerationError`` so
build scripts can catch one type. Skip conditions (unmatched names, non-enum
typedefs) never raise.
"""

from pathlib import Path
from typing import Optional


class GenerationError(Exception):
    """Base class for fatal generation failures."""


class ConstantError(GenerationError):
    """A C constant did not have the literal shape the extractor expects."""


class SignatureNotFoundError(GenerationError):
    """The header does not declare the interface signature string."""

    def __init__(self, interface_name: str):
        self.interface_name = interface_name
        super().__init__(f"No signature found for interface '{interface_name}'")


class ArraySizeNotFoundError(GenerationError):
    """An array element has no paired ``*Size`` definition."""

    def __init__(self, name: str, datatype: str):
        self.name = name
        self.datatype = datatype
        super().__init__(f"Array size not found for '{name}' ({datatype})")


class UnknownTypeError(GenerationError):
    """The vendor generator emitted a datatype tag with no mapping."""

    def __init__(self, datatype: str):
        self.datatype = datatype
        super().__init__(f"Unknown type '{datatype}'")


class InvalidIdentifierError(GenerationError):
    """An element name cannot be used as a Python identifier."""

    def __init__(self, name: str, reason: str = "is not a valid Python identifier"):
        self.name = name
        super().__init__(f"Element name '{name}' {reason}")


class DuplicateElementError(GenerationError):
    """Two elements of one generated namespace share a name."""

    def __init__(self, name: str, namespace: str):
        self.name = name
        self.namespace = namespace
        super().__init__(f"Element name '{name}' is declared more than once in '{namespace}'")


class CustomTypeError(GenerationError):
    """Custom type (FXP/cluster) constants are incomplete or inconsistent."""


class LocatedError(GenerationError):
    """Error that can point at a file and line."""

    def __init__(
        self, message: str, file_path: Optional[Path] = None, line: Optional[int] = None
    ):
        self.file_path = file_path
        self.line = line
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with file and line information."""
        parts = []
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.line is not None:
            parts.append(f"Line: {self.line}")
        parts.append(message)
        return " | ".join(parts)


class HeaderParseError(LocatedError):
    """Error while preprocessing or parsing a C header."""


class ConfigError(LocatedError):
    """Error while loading a YAML build configuration."""
