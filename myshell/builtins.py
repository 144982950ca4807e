from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

from myshell.state import InterpreterState

logger = logging.getLogger(__name__)

EXIT_MESSAGE = "Exiting..."

BuiltinHandler = Callable[[list[str], InterpreterState, TextIO, TextIO], bool]


# --- Path resolution ---


def resolve_cd_target(args: list[str], state: InterpreterState) -> str | None:
    """Resolve the directory ``cd`` should move to.

    No argument means ``$HOME``. An absolute argument is used verbatim and
    a relative one is appended to the current directory with a single
    ``/``, without normalizing ``..`` segments.

    Args:
        args: Full argument vector, ``args[0]`` being ``cd``.
        state: Interpreter state providing the environment and cwd.

    Returns:
        The target path, or None when no argument was given and ``HOME``
        is not set.

    Raises:
        OSError: If a relative path is given and the current directory
            cannot be read.
    """
    if len(args) < 2:
        return state.home()
    target = args[1]
    if target.startswith("/"):
        return target
    return f"{state.cwd}/{target}"


# --- Handlers ---


def handle_cd(args: list[str], state: InterpreterState, out: TextIO, err: TextIO) -> bool:
    """Change the working directory and publish it as ``PWD``.

    Errors are reported on ``err`` and leave the state untouched.
    """
    try:
        path = resolve_cd_target(args, state)
    except OSError as exc:
        print(f"cd: cannot read current directory: {exc.strerror}", file=err)
        return False
    if path is None:
        print("HOME environment variable not set", file=err)
        return False

    try:
        state.change_directory(path)
    except OSError as exc:
        print(f"cd: {path}: {exc.strerror}", file=err)
        return False
    logger.debug("cd -> %s", path)
    return True


def handle_pwd(args: list[str], state: InterpreterState, out: TextIO, err: TextIO) -> bool:
    try:
        cwd = state.cwd
    except OSError as exc:
        print(f"pwd: {exc.strerror}", file=err)
        return False
    print(cwd, file=out)
    return True


def handle_history(args: list[str], state: InterpreterState, out: TextIO, err: TextIO) -> bool:
    for index, line in state.history.numbered():
        print(f"{index}: {line}", file=out)
    return True


def handle_exit(args: list[str], state: InterpreterState, out: TextIO, err: TextIO) -> bool:
    """Say goodbye and stop the interpreter at once.

    Background children are left running; nothing is waited on.
    """
    print(EXIT_MESSAGE, file=out)
    out.flush()
    logger.debug("exit builtin invoked")
    sys.exit(0)


BUILTINS: dict[str, BuiltinHandler] = {
    "cd": handle_cd,
    "pwd": handle_pwd,
    "history": handle_history,
    "exit": handle_exit,
}


def is_builtin(name: str | None) -> bool:
    return name in BUILTINS


def dispatch_builtin(
    args: list[str],
    state: InterpreterState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> bool:
    """Run ``args`` in-process if its program name is a builtin.

    Args:
        args: The primary command's argument vector.
        state: Interpreter state the builtin may read or mutate.
        out: Stream for regular output, ``sys.stdout`` by default.
        err: Stream for error reports, ``sys.stderr`` by default.

    Returns:
        True if a builtin handled the command (successfully or not),
        False if the caller should spawn a process instead.
    """
    if not args or not is_builtin(args[0]):
        return False
    handler = BUILTINS[args[0]]
    ok = handler(
        args,
        state,
        out if out is not None else sys.stdout,
        err if err is not None else sys.stderr,
    )
    logger.debug("builtin %s ok=%s", args[0], ok)
    return True
