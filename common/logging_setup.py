"""
common.logging_setup

Set up standard logging for the exporter. Diagnostics go to stderr so the
CSV summary on stdout stays clean.
"""
import logging
import sys


def setup_logging(level=logging.INFO):
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
