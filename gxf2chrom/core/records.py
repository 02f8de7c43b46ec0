"""
MIT License

Per-line GTF/GFF3 record parsing.
"""

from __future__ import annotations

from dataclasses import dataclass

from .attributes import AttributeBlock
from .errors import AttributeParseError, EmptyInputError, GxfParseError, StructuralError

MIN_COLUMNS = 9

COL_CHROMOSOME = 0
COL_FEATURE = 2
COL_START = 3
COL_END = 4
COL_STRAND = 6
COL_ATTRIBUTES = 8


@dataclass(frozen=True)
class Record:
    """
    One annotation line with 0-based half-open coordinates.

    ``start`` is the source start minus one; ``end`` is the source
    (1-based, inclusive) end unchanged.
    """

    chromosome: str
    feature_type: str
    start: int
    end: int
    strand: str
    identifier: str

    @property
    def length(self) -> int:
        return self.end - self.start


def _coordinate(value: str, column: str, line: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise StructuralError(f"Non-integer {column} coordinate {value!r}", line)
    return int(value)


def parse_record(line: str, attribute: str) -> Record:
    """
    Parse a single tab-delimited annotation line.

    Parameters
    ----------
    line:
        Raw line without its trailing newline.
    attribute:
        Attribute key whose value becomes the record identifier.
    """

    if not line:
        raise EmptyInputError("line")
    fields = line.split("\t")
    if len(fields) < MIN_COLUMNS:
        raise StructuralError(f"Line has {len(fields)} fields, expected at least {MIN_COLUMNS}", line)

    start = _coordinate(fields[COL_START], "start", line)
    end = _coordinate(fields[COL_END], "end", line)
    if start < 1:
        raise StructuralError("Start coordinate must be 1-based", line)
    strand = fields[COL_STRAND]
    if len(strand) != 1:
        raise StructuralError(f"Strand {strand!r} is not a single character", line)

    try:
        block = AttributeBlock.parse(fields[COL_ATTRIBUTES], attribute)
    except GxfParseError as exc:
        raise AttributeParseError(line, exc) from exc

    return Record(
        chromosome=fields[COL_CHROMOSOME],
        feature_type=fields[COL_FEATURE],
        start=start - 1,
        end=end,
        strand=strand,
        identifier=block.value,
    )


__all__ = ["Record", "parse_record", "MIN_COLUMNS"]
