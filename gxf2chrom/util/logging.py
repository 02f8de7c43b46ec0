"""
MIT License

Logging setup for gxf2chrom.

All modules log through children of the ``gxf2chrom`` logger, which owns the
single stderr handler; module loggers propagate to it.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER = "gxf2chrom"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_ROOT: Optional[logging.Logger] = None


def _root_logger() -> logging.Logger:
    global _ROOT
    if _ROOT is None:
        logger = logging.getLogger(ROOT_LOGGER)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        _ROOT = logger
    return _ROOT


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``name``'s logger, configuring the package handler on first use."""
    root = _root_logger()
    if name == ROOT_LOGGER:
        return root
    return logging.getLogger(name)


def set_verbosity(verbose: bool) -> None:
    """DEBUG adds per-identifier conflict detail; INFO is the CLI default."""
    _root_logger().setLevel(logging.DEBUG if verbose else logging.INFO)


__all__ = ["get_logger", "set_verbosity", "ROOT_LOGGER"]
