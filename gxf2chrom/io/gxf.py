"""
MIT License

GTF/GFF3 file reading.
"""

from __future__ import annotations

import gzip
from pathlib import Path

GXF_EXTENSIONS = (".gtf", ".gff", ".gff3", ".gz")


def is_gzipped(path: str | Path) -> bool:
    return Path(path).suffix == ".gz"


def read_gxf(path: str | Path) -> str:
    """Load a plain or gzip-compressed annotation file into memory as text."""
    gxf_path = Path(path)
    if not gxf_path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")
    if is_gzipped(gxf_path):
        # gzip.open reads concatenated members, as produced by bgzip
        with gzip.open(gxf_path, "rt", encoding="utf-8") as handle:
            return handle.read()
    with gxf_path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


__all__ = ["read_gxf", "is_gzipped", "GXF_EXTENSIONS"]
