"""
MIT License

Attribute column parsing for GTF (``key "value";``) and GFF3 (``key=value;``)
annotations. Both styles may be mixed within one column.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import EmptyInputError, MalformedAttributePairError, MissingIdentifierError

FIELD_DELIMITER = ";"
PAIR_SEPARATORS = (" ", "=")


def split_pair(field: str) -> Tuple[str, str]:
    """
    Split one ``key value`` / ``key=value`` field at its first separator.

    The value is stripped of surrounding whitespace and enclosing double
    quotes. Raises MalformedAttributePairError when the field holds neither
    a space nor an ``=``.
    """

    field = field.strip()
    positions = [idx for idx in (field.find(sep) for sep in PAIR_SEPARATORS) if idx >= 0]
    if not positions:
        raise MalformedAttributePairError(field)
    idx = min(positions)
    key = field[:idx]
    value = field[idx + 1 :].strip().strip('"').strip()
    return key, value


def parse_attributes(text: str) -> Dict[str, str]:
    """
    Parse an attribute column into a key -> value mapping.

    Empty fields are skipped and the final field does not need a trailing
    ``;``. A repeated key keeps the value of its last occurrence.
    """

    if not text:
        raise EmptyInputError("attribute column")
    out: Dict[str, str] = {}
    for chunk in text.rstrip().split(FIELD_DELIMITER):
        if not chunk.strip():
            continue
        key, value = split_pair(chunk)
        out[key] = value
    return out


@dataclass(frozen=True)
class AttributeBlock:
    """The single attribute value retained from one attribute column."""

    key: str
    value: str

    @classmethod
    def parse(cls, text: str, key: str) -> "AttributeBlock":
        attributes = parse_attributes(text)
        try:
            value = attributes[key]
        except KeyError:
            raise MissingIdentifierError(key, text) from None
        return cls(key=key, value=value)


def extract_attribute(text: str, key: str) -> str:
    """Return the value stored under ``key`` in an attribute column."""
    return AttributeBlock.parse(text, key).value


__all__ = ["AttributeBlock", "parse_attributes", "extract_attribute", "split_pair"]
