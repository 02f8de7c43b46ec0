"""
MIT License

Writers for the .chrom coordinate table and the run report.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from ..core.aggregate import ResultTable

CHROM_COLUMNS = ["identifier", "chromosome", "strand", "start", "end"]


def spans_to_frame(table: ResultTable, sort: bool = False) -> pd.DataFrame:
    """
    Flatten a ResultTable into one row per identifier.

    Parameters
    ----------
    table:
        Identifier -> CoordinateSpan mapping.
    sort:
        Order rows by chromosome, start and identifier instead of
        table iteration order.
    """

    df = pd.DataFrame(
        [
            (identifier, span.chromosome, span.strand, span.start, span.end)
            for identifier, span in table.items()
        ],
        columns=CHROM_COLUMNS,
    )
    df["start"] = df["start"].astype("int64")
    df["end"] = df["end"].astype("int64")
    if sort and not df.empty:
        df = df.sort_values(["chromosome", "start", "identifier"], kind="mergesort").reset_index(drop=True)
    return df


def write_lines(lines: Iterable[str], path: str | Path) -> None:
    """Write plain-text lines joined by newlines."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as handle:
        for line in lines:
            handle.write(f"{line}\n")


def write_chrom(table: ResultTable, path: str | Path, sort: bool = False) -> int:
    """
    Write ``identifier chromosome strand start end`` rows without header; return row count.

    Fields are written verbatim: tab-split GTF/GFF3 columns cannot hold a tab
    or newline, and quote characters inside identifiers are kept as-is.
    """
    df = spans_to_frame(table, sort=sort)
    write_lines(
        ("\t".join(str(value) for value in row) for row in df.itertuples(index=False, name=None)),
        path,
    )
    return len(df)


def write_run_metadata(path: str | Path, metadata: Dict[str, object]) -> None:
    """Write a single NDJSON record describing one run."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    metadata = dict(metadata)
    if "date_utc" not in metadata:
        metadata["date_utc"] = datetime.now(timezone.utc).isoformat()
    with out_path.open("w", encoding="utf-8") as handle:
        handle.write(json.dumps(metadata) + "\n")


__all__ = ["spans_to_frame", "write_chrom", "write_lines", "write_run_metadata", "CHROM_COLUMNS"]
