"""
MIT License

Partitioned min/max aggregation of CDS coordinates per identifier.

The input text is cut into contiguous line ranges, each range is folded into
its own identifier -> CoordinateSpan table by an independent worker, and the
partial tables are merged into the final ResultTable. Chromosome and strand
are taken from the record with the lowest line number, so the result does not
depend on the number of partitions or on the order in which they finish.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .errors import ConfigError, GxfParseError
from .records import Record, parse_record
from ..util.logging import get_logger

LOGGER = get_logger(__name__)

FEATURE_CDS = "CDS"
COMMENT_PREFIX = "#"
BACKENDS = ("thread", "process")

Placement = Tuple[str, str]


@dataclass
class CoordinateSpan:
    chromosome: str
    strand: str
    start: int
    end: int
    first_line: int = field(default=0, compare=False, repr=False)
    placements: Dict[Placement, int] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.placements.setdefault((self.chromosome, self.strand), self.first_line)

    @classmethod
    def from_record(cls, record: Record, line_number: int) -> "CoordinateSpan":
        return cls(
            chromosome=record.chromosome,
            strand=record.strand,
            start=record.start,
            end=record.end,
            first_line=line_number,
        )

    def extend(self, start: int, end: int) -> None:
        self.start = min(self.start, start)
        self.end = max(self.end, end)

    def add_placement(self, chromosome: str, strand: str, line_number: int) -> None:
        """Remember the lowest line number at which a chromosome/strand pair was seen."""
        key = (chromosome, strand)
        seen = self.placements.get(key)
        if seen is None or line_number < seen:
            self.placements[key] = line_number

    def absorb(self, other: "CoordinateSpan") -> None:
        """Fold another span for the same identifier into this one."""
        self.extend(other.start, other.end)
        for (chromosome, strand), line_number in other.placements.items():
            self.add_placement(chromosome, strand, line_number)
        if other.first_line < self.first_line:
            self.chromosome = other.chromosome
            self.strand = other.strand
            self.first_line = other.first_line


ResultTable = Dict[str, CoordinateSpan]


@dataclass
class SpanConflict:
    """Two contributing records disagree on chromosome or strand."""

    identifier: str
    kept: Tuple[str, str]
    other: Tuple[str, str]
    line_number: int


@dataclass
class LineFailure:
    line_number: int
    kind: str
    message: str


@dataclass
class ParseStats:
    lines: int = 0
    comments: int = 0
    parsed: int = 0
    kept: int = 0
    skipped_feature: int = 0
    skipped_span: int = 0
    dropped: Counter = field(default_factory=Counter)
    conflicts: List[SpanConflict] = field(default_factory=list)
    failures: List[LineFailure] = field(default_factory=list)

    @property
    def n_dropped(self) -> int:
        return sum(self.dropped.values())

    def update(self, other: "ParseStats") -> None:
        self.lines += other.lines
        self.comments += other.comments
        self.parsed += other.parsed
        self.kept += other.kept
        self.skipped_feature += other.skipped_feature
        self.skipped_span += other.skipped_span
        self.dropped.update(other.dropped)
        self.failures.extend(other.failures)

    def as_dict(self) -> Dict[str, object]:
        return {
            "lines": self.lines,
            "comments": self.comments,
            "parsed": self.parsed,
            "kept": self.kept,
            "skipped_feature": self.skipped_feature,
            "skipped_span": self.skipped_span,
            "dropped": dict(self.dropped),
            "conflicts": len(self.conflicts),
        }


@dataclass
class PartitionResult:
    index: int
    spans: ResultTable
    stats: ParseStats


@dataclass
class AggregationResult:
    table: ResultTable
    stats: ParseStats


def split_lines(text: str) -> List[str]:
    """Split text on newlines, dropping a trailing ``\\r`` and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def partition_bounds(n_items: int, parts: int) -> List[Tuple[int, int]]:
    """Cut ``range(n_items)`` into at most ``parts`` contiguous, near-equal ranges."""
    parts = max(1, min(parts, n_items))
    edges = np.linspace(0, n_items, num=parts + 1, dtype=np.int64)
    return [(int(lo), int(hi)) for lo, hi in zip(edges[:-1], edges[1:])]


def fold_partition(
    index: int,
    offset: int,
    lines: Sequence[str],
    attribute: str,
    collect_failures: bool = False,
) -> PartitionResult:
    """
    Fold one contiguous range of lines into a local identifier table.

    ``offset`` is the number of lines preceding the range in the input and
    is used to number lines 1-based across the whole file.
    """

    spans: ResultTable = {}
    stats = ParseStats()
    for line_number, line in enumerate(lines, start=offset + 1):
        stats.lines += 1
        if line.startswith(COMMENT_PREFIX):
            stats.comments += 1
            continue
        try:
            record = parse_record(line, attribute)
        except GxfParseError as exc:
            stats.dropped[exc.kind] += 1
            if collect_failures:
                stats.failures.append(LineFailure(line_number, exc.kind, str(exc)))
            continue
        stats.parsed += 1
        if record.feature_type != FEATURE_CDS:
            stats.skipped_feature += 1
            continue
        if record.length <= 0:
            stats.skipped_span += 1
            continue
        stats.kept += 1

        span = spans.get(record.identifier)
        if span is None:
            spans[record.identifier] = CoordinateSpan.from_record(record, line_number)
            continue
        span.add_placement(record.chromosome, record.strand, line_number)
        span.extend(record.start, record.end)
    return PartitionResult(index=index, spans=spans, stats=stats)


def _fold_task(args: Tuple[int, int, Sequence[str], str, bool]) -> PartitionResult:
    return fold_partition(*args)


def merge_tables(target: ResultTable, other: ResultTable) -> ResultTable:
    """Merge ``other`` into ``target`` in place; spans of ``other`` may be reused."""
    for identifier, incoming in other.items():
        current = target.get(identifier)
        if current is None:
            target[identifier] = incoming
        else:
            current.absorb(incoming)
    return target


def span_conflicts(table: ResultTable) -> List[SpanConflict]:
    """List every chromosome/strand pair that lost to an identifier's first-seen placement."""
    conflicts = [
        SpanConflict(
            identifier=identifier,
            kept=(span.chromosome, span.strand),
            other=placement,
            line_number=line_number,
        )
        for identifier, span in table.items()
        for placement, line_number in span.placements.items()
        if placement != (span.chromosome, span.strand)
    ]
    conflicts.sort(key=lambda conflict: (conflict.line_number, conflict.identifier))
    return conflicts


def merge_partitions(partials: Sequence[PartitionResult]) -> AggregationResult:
    table: ResultTable = {}
    stats = ParseStats()
    for partial in sorted(partials, key=lambda item: item.index):
        stats.update(partial.stats)
        merge_tables(table, partial.spans)
    stats.conflicts = span_conflicts(table)

    if stats.conflicts:
        n_ids = len({conflict.identifier for conflict in stats.conflicts})
        LOGGER.warning(
            "%s identifiers have records on more than one chromosome/strand; first-seen values kept",
            n_ids,
        )
        for conflict in stats.conflicts:
            LOGGER.debug(
                "%s: kept %s, ignored %s from line %s",
                conflict.identifier,
                "".join(conflict.kept),
                "".join(conflict.other),
                conflict.line_number,
            )
    return AggregationResult(table=table, stats=stats)


def aggregate_spans(
    text: str,
    attribute: str,
    threads: int = 1,
    backend: str = "thread",
    collect_failures: bool = False,
) -> AggregationResult:
    """
    Summarize the CDS extent of every identifier found in ``text``.

    Parameters
    ----------
    text:
        Whole decompressed GTF/GFF3 content.
    attribute:
        Attribute key used as identifier (e.g. ``protein_id``).
    threads:
        Number of partitions and workers. ``1`` folds inline.
    backend:
        ``thread`` or ``process`` worker pool.
    collect_failures:
        Keep one LineFailure per dropped line in the returned stats.
    """

    if not attribute:
        raise ConfigError("Attribute key must not be empty")
    if threads < 1:
        raise ConfigError(f"Number of threads must be at least 1, got {threads}")
    if backend not in BACKENDS:
        raise ConfigError(f"Unsupported backend: {backend}")

    lines = split_lines(text)
    tasks = [
        (index, lo, lines[lo:hi], attribute, collect_failures)
        for index, (lo, hi) in enumerate(partition_bounds(len(lines), threads))
    ]
    if len(tasks) == 1:
        partials = [_fold_task(tasks[0])]
    else:
        executor_cls = ThreadPoolExecutor if backend == "thread" else ProcessPoolExecutor
        with executor_cls(max_workers=len(tasks)) as executor:
            partials = list(executor.map(_fold_task, tasks))

    result = merge_partitions(partials)
    LOGGER.info(
        "Parsed %s lines: %s CDS records kept, %s lines dropped, %s identifiers",
        result.stats.lines,
        result.stats.kept,
        result.stats.n_dropped,
        len(result.table),
    )
    return result


def parallel_parse(text: str, attribute: str, threads: int = 1) -> ResultTable:
    """Return only the identifier -> CoordinateSpan table."""
    return aggregate_spans(text, attribute, threads=threads).table


__all__ = [
    "CoordinateSpan",
    "ResultTable",
    "SpanConflict",
    "LineFailure",
    "ParseStats",
    "AggregationResult",
    "split_lines",
    "partition_bounds",
    "fold_partition",
    "merge_tables",
    "span_conflicts",
    "merge_partitions",
    "aggregate_spans",
    "parallel_parse",
]
