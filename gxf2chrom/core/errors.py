"""
MIT License

Error taxonomy for GTF/GFF3 line parsing.
"""

from __future__ import annotations


class GxfParseError(ValueError):
    """Base class for line-local parse failures."""

    kind = "parse_error"


class EmptyInputError(GxfParseError):
    kind = "empty_input"

    def __init__(self, what: str = "input") -> None:
        super().__init__(f"Empty {what}, nothing to parse")


class MalformedAttributePairError(GxfParseError):
    kind = "malformed_attribute_pair"

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid attribute pair: {field}")
        self.field = field


class MissingIdentifierError(GxfParseError):
    kind = "missing_identifier"

    def __init__(self, key: str, text: str) -> None:
        super().__init__(f"Missing {key} attribute in: {text}")
        self.key = key
        self.text = text


class StructuralError(GxfParseError):
    kind = "structural"

    def __init__(self, reason: str, line: str) -> None:
        super().__init__(f"{reason}: {line}")
        self.reason = reason
        self.line = line


class AttributeParseError(GxfParseError):
    """Attribute column of a line could not be resolved; the cause is chained."""

    def __init__(self, line: str, cause: GxfParseError) -> None:
        super().__init__(f"Error parsing attribute ({cause}) in line: {line}")
        self.line = line
        self.kind = cause.kind


class ConfigError(ValueError):
    """Invalid run configuration."""


__all__ = [
    "GxfParseError",
    "EmptyInputError",
    "MalformedAttributePairError",
    "MissingIdentifierError",
    "StructuralError",
    "AttributeParseError",
    "ConfigError",
]
