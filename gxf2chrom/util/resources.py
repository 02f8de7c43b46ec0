"""
MIT License

Process resource usage helpers.
"""

from __future__ import annotations

import resource
import sys


def max_mem_usage_mb() -> float:
    """Peak resident set size of this process in megabytes."""
    maxrss = float(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss)
    if sys.platform == "darwin":
        return maxrss / 1024.0 / 1024.0
    return maxrss / 1024.0


__all__ = ["max_mem_usage_mb"]
