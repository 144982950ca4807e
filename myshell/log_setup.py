"""Logging for the interpreter.

Diagnostics share stderr with the programs the interpreter runs, so
console records carry a ``myshell:`` prefix. Child processes inherit the
handlers across ``fork``; the trace file format records the pid so parent
and child records can be told apart.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

TRACE = 5
TRACE_DIR = "debug"
ROOT_LOGGER = "myshell"

logging.addLevelName(TRACE, "TRACE")

_CONSOLE_FMT = "myshell: %(levelname)s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s.%(msecs)03d [%(process)d] %(levelname)s %(name)s:%(funcName)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def console_level(*, debug: bool, trace: bool, verbose: bool) -> int:
    """Pick the console threshold for a combination of debug flags."""
    if trace and verbose:
        return TRACE
    if debug or trace:
        return logging.DEBUG
    return logging.INFO


def trace_file_path(directory: str) -> str:
    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    return os.path.join(directory, f"trace-{stamp}-{os.getpid()}.log")


def _make_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FMT))
    return handler


def _make_trace_handler(directory: str) -> logging.Handler:
    os.makedirs(directory, exist_ok=True)
    handler = logging.FileHandler(trace_file_path(directory))
    handler.setLevel(TRACE)
    handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(*, debug: bool, trace: bool, verbose: bool) -> logging.Logger:
    """Configure the ``myshell`` logger tree for one interpreter run.

    Calling this again closes and replaces the previous handlers, so the
    CLI can configure logging once from flags and again after the YAML
    file has been merged in.

    Args:
        debug: Lower the console threshold to DEBUG.
        trace: Also write a TRACE-level file under ``TRACE_DIR``.
        verbose: With ``trace``, send TRACE records to the console too.

    Returns:
        The configured ``myshell`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(TRACE)

    root.addHandler(_make_console_handler(console_level(debug=debug, trace=trace, verbose=verbose)))
    if trace:
        root.addHandler(_make_trace_handler(TRACE_DIR))
    return root
