"""Command-line host: print the paw-check panel to the terminal.

    python -m pawcheck                 # cached data when fresh
    python -m pawcheck force_refresh   # always fetch
"""

import argparse
import sys

import requests

from pawcheck.config import settings
from pawcheck.errors import PawCheckError
from pawcheck.presenter import build_paw_check, render_text
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="cli")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="pawcheck", description="Is the pavement safe for paws right now?")
    parser.add_argument("parameter", nargs="?", default=None,
                        help="invocation parameter; 'force_refresh' bypasses the cache")
    parser.add_argument("--no-color", action="store_true", help="plain text output")
    args = parser.parse_args(argv)

    setup_logging(level=settings.log_level, job_name="pawcheck-cli")

    try:
        result = build_paw_check(args.parameter)
    except (PawCheckError, requests.RequestException) as exc:
        logger.error(f"Paw check failed: {exc}")
        return 1

    print(render_text(result.panel, color=not args.no_color and sys.stdout.isatty()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
