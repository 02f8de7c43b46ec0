"""
MIT License

Command-line interface for gxf2chrom.
"""

from __future__ import annotations

import argparse

from .core.aggregate import BACKENDS
from .core.errors import ConfigError
from .core.pipeline import DEFAULT_FEATURE, VERSION, RunConfig, available_cpus, run
from .util.logging import get_logger, set_verbosity

LOGGER = get_logger(__name__)

PROG = "gxf2chrom"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Everything in .chrom from GTF/GFF: per-identifier CDS span, chromosome and strand",
    )
    parser.add_argument("-i", "--input", dest="gxf", required=True, metavar="GXF", help="Path to GTF/GFF file")
    parser.add_argument(
        "-o", "--output", required=True, metavar="CHROM", help="Path to output .chrom file"
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=int,
        default=available_cpus(),
        metavar="THREADS",
        help="Number of threads",
    )
    parser.add_argument(
        "-f",
        "--feature",
        default=DEFAULT_FEATURE,
        metavar="FEATURE",
        help="Attribute used as identifier",
    )
    parser.add_argument("--backend", choices=list(BACKENDS), default="thread", help="Worker pool type")
    parser.add_argument("--sort", action="store_true", help="Sort output by chromosome and start")
    parser.add_argument("--report", help="Write a JSON-lines run report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-identifier diagnostics")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def dispatch(args: argparse.Namespace) -> None:
    set_verbosity(args.verbose)
    LOGGER.info("%s v%s", PROG, VERSION)
    config = RunConfig(
        gxf=args.gxf,
        output=args.output,
        threads=args.threads,
        feature=args.feature,
        backend=args.backend,
        sort=args.sort,
        report=args.report,
    )
    try:
        result = run(config)
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        raise SystemExit(1) from exc

    stats = result.aggregation.stats
    if stats.n_dropped:
        breakdown = ", ".join(f"{kind}={count}" for kind, count in sorted(stats.dropped.items()))
        LOGGER.info("Dropped lines: %s", breakdown)
    LOGGER.info("Thank you for using %s!", PROG)


__all__ = ["build_parser", "dispatch"]
