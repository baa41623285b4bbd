#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import IO

# Just for reference, the predefined logging levels:
#
# Python         added by us
# ---------------------------
# CRITICAL 50
# ERROR    40
# WARNING  30                 <= default level of the probe
# INFO     20
#                VERBOSE  15
# DEBUG    10
#
# The probe writes its result to stdout, so every log message has to go to
# stderr. Otherwise the monitoring core would take a log line for the status.

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("snmpwin")


def get_formatter(
    format_str: str = "%(asctime)s [%(levelno)s] [%(name)s] %(message)s",
) -> logging.Formatter:
    """Returns a new message formater instance that uses the standard
    log format by default. You can also set another format if you like."""
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.WARNING)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_console_logging(stream: IO[str] | None = None) -> None:
    """Write log messages to stderr without date/time or logger name.

    This is what the probe uses for its -v output."""
    setup_logging_handler(sys.stderr if stream is None else stream, get_formatter("%(message)s"))


def setup_logging_handler(stream: IO[str], formatter: logging.Formatter | None = None) -> None:
    if formatter is None:
        formatter = get_formatter()

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]  # Remove all previously existing handlers
    logger.addHandler(handler)


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables WARNING and above
      1: enables VERBOSE and above
      2: enables DEBUG and above (ALL messages)

    >>> verbosity_to_log_level(1)
    15
    >>> verbosity_to_log_level(5)
    10
    """
    if verbosity == 0:
        return logging.WARNING
    if verbosity == 1:
        return VERBOSE
    return logging.DEBUG
