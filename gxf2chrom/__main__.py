"""
MIT License

``python -m gxf2chrom`` and the ``gxf2chrom`` console script.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .cli import build_parser, dispatch


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Convert one annotation file; ``argv`` defaults to ``sys.argv[1:]``."""
    args = build_parser().parse_args(argv)
    dispatch(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
