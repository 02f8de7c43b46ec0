"""
MIT License

High-level orchestration: read annotation, aggregate CDS spans, write .chrom.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .aggregate import BACKENDS, AggregationResult, aggregate_spans
from .errors import ConfigError
from ..io.chrom import write_chrom, write_run_metadata
from ..io.gxf import GXF_EXTENSIONS, read_gxf
from ..util.logging import get_logger
from ..util.resources import max_mem_usage_mb

LOGGER = get_logger(__name__)

VERSION = "0.1.0"
DEFAULT_FEATURE = "protein_id"
CHROM_EXTENSION = ".chrom"


def available_cpus() -> int:
    """Logical CPUs this process may run on, honouring affinity masks where the platform has them."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


@dataclass
class RunConfig:
    gxf: str
    output: str
    threads: int
    feature: str = DEFAULT_FEATURE
    backend: str = "thread"
    sort: bool = False
    report: Optional[str] = None

    def check_input(self) -> None:
        path = Path(self.gxf)
        if not path.exists():
            raise ConfigError(f"Invalid input: file {self.gxf} does not exist")
        if path.suffix not in GXF_EXTENSIONS:
            raise ConfigError(
                f"Invalid input: file {self.gxf} is not a GTF or GFF3 file, please specify the correct format"
            )
        if path.stat().st_size == 0:
            raise ConfigError(f"Invalid input: file {self.gxf} is empty")

    def check_output(self) -> None:
        if Path(self.output).suffix != CHROM_EXTENSION:
            raise ConfigError(f"Invalid output: file {self.output} is not a {CHROM_EXTENSION} file")

    def check_threads(self) -> None:
        if self.threads < 1:
            raise ConfigError("Invalid number of threads: number of threads must be greater than 0")
        if self.threads > available_cpus():
            raise ConfigError(
                "Invalid number of threads: number of threads must be less than or equal to the number of logical CPUs"
            )

    def check(self) -> None:
        """Validate every field, raising ConfigError on the first problem."""
        self.check_input()
        self.check_output()
        self.check_threads()
        if not self.feature:
            raise ConfigError("Invalid feature: feature must not be empty")
        if self.backend not in BACKENDS:
            raise ConfigError(f"Invalid backend: {self.backend}")


@dataclass
class RunResult:
    config: RunConfig
    aggregation: AggregationResult
    rows_written: int
    elapsed: float
    memory_mb: float


def run(config: RunConfig) -> RunResult:
    """Execute one conversion and return the aggregation with run measurements."""

    config.check()
    LOGGER.info("%s", config)

    started = time.perf_counter()
    start_mem = max_mem_usage_mb()

    text = read_gxf(config.gxf)
    aggregation = aggregate_spans(
        text,
        config.feature,
        threads=config.threads,
        backend=config.backend,
    )
    rows = write_chrom(aggregation.table, config.output, sort=config.sort)

    elapsed = time.perf_counter() - started
    memory = max(max_mem_usage_mb() - start_mem, 0.0)
    LOGGER.info("Wrote %s identifiers to %s", rows, config.output)
    LOGGER.info("Elapsed: %.4f secs", elapsed)
    LOGGER.info("Memory: %.2f MB", memory)

    result = RunResult(
        config=config,
        aggregation=aggregation,
        rows_written=rows,
        elapsed=elapsed,
        memory_mb=memory,
    )
    if config.report:
        write_run_metadata(config.report, build_run_metadata(result))
        LOGGER.info("Run report written to %s", config.report)
    return result


def build_run_metadata(result: RunResult) -> Dict[str, object]:
    return {
        "version": VERSION,
        "input": str(result.config.gxf),
        "output": str(result.config.output),
        "feature": result.config.feature,
        "threads": result.config.threads,
        "backend": result.config.backend,
        "identifiers": result.rows_written,
        "elapsed_secs": round(result.elapsed, 4),
        "memory_mb": round(result.memory_mb, 2),
        "stats": result.aggregation.stats.as_dict(),
    }


__all__ = ["RunConfig", "RunResult", "run", "build_run_metadata", "VERSION", "DEFAULT_FEATURE"]
