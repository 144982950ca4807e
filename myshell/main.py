from __future__ import annotations

import argparse
import logging

from myshell.config import AppConfig, ConfigError, load_config
from myshell.history import HistoryBuffer
from myshell.log_setup import setup_logging
from myshell.shell import Shell
from myshell.state import InterpreterState

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def build_shell(config: AppConfig) -> Shell:
    """Build an interpreter wired from configuration."""
    state = InterpreterState(history=HistoryBuffer(config.history.size))
    shell = Shell(
        state=state,
        prompt=config.shell.prompt,
        max_line_length=config.shell.max_line_length,
        max_args=config.shell.max_args,
    )
    logger.debug(
        "Shell built: history=%d max_args=%d max_line_length=%d",
        config.history.size,
        config.shell.max_args,
        config.shell.max_line_length,
    )
    return shell


def _apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Let command-line debug flags switch on what the file left off."""
    if args.debug:
        config.debug.enabled = True
    if args.trace:
        config.debug.trace = True
    if args.verbose:
        config.debug.verbose = True
    return config


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(prog="myshell", description="Line-oriented command interpreter")
    parser.add_argument("config", nargs="?", default=None,
                        help="Path to YAML config file (default: built-in settings)")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug mode (verbose logging)")
    parser.add_argument("--trace", action="store_true",
                        help="Enable trace mode (writes trace file to debug/)")
    parser.add_argument("--verbose", action="store_true",
                        help="With --trace, also send trace output to terminal")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the myshell interpreter.

    Returns:
        The process exit status: 0 at end of input, ``EXIT_CONFIG_ERROR``
        if the configuration cannot be loaded. The ``exit`` builtin leaves
        through SystemExit instead.
    """
    args = _parse_args(argv)
    # Configured early so config errors are reported through logging
    setup_logging(debug=args.debug, trace=False, verbose=False)

    try:
        config = _apply_cli_overrides(load_config(args.config), args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    setup_logging(
        debug=config.debug.enabled,
        trace=config.debug.trace,
        verbose=config.debug.verbose,
    )
    return build_shell(config).run()


def run() -> None:
    """Console script wrapper."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
