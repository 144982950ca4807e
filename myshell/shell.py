from __future__ import annotations

import logging
import sys
from typing import TextIO

from myshell.builtins import dispatch_builtin
from myshell.orchestrator import ProcessOrchestrator
from myshell.parsing import ArgumentLimitError, LineTooLongError, classify, tokenize
from myshell.parsing.models import DEFAULT_MAX_ARGS
from myshell.state import InterpreterState

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "myshell> "
DEFAULT_MAX_LINE_LENGTH = 99


class Shell:
    """Line-at-a-time command interpreter.

    Each line is recorded in history, tokenized, classified and then
    either handled by a builtin or handed to the process orchestrator.
    """

    def __init__(
        self,
        state: InterpreterState | None = None,
        orchestrator: ProcessOrchestrator | None = None,
        prompt: str = DEFAULT_PROMPT,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        max_args: int = DEFAULT_MAX_ARGS,
        stdin: TextIO | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        """Initialize the interpreter.

        Args:
            state: Shared interpreter state; a fresh one by default.
            orchestrator: Process orchestrator; one writing to the same
                streams by default.
            prompt: Text written before every read.
            max_line_length: Longest accepted line, terminator excluded.
            max_args: Capacity of each command's argument vector.
            stdin: Input stream, ``sys.stdin`` by default.
            out: Output stream, ``sys.stdout`` by default.
            err: Error stream, ``sys.stderr`` by default.
        """
        self._state = state or InterpreterState()
        self._stdin = stdin
        self._out = out
        self._err = err
        self._orchestrator = orchestrator or ProcessOrchestrator(out=out, err=err)
        self._prompt = prompt
        self._max_line_length = max_line_length
        self._max_args = max_args

    @property
    def state(self) -> InterpreterState:
        return self._state

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def process_line(self, line: str) -> int | None:
        """Record, parse and run one raw input line.

        Args:
            line: The raw line; a trailing newline is stripped.

        Returns:
            The exit status reported by the orchestrator, or None when no
            process was run (empty line, builtin, or a rejected line).

        Raises:
            SystemExit: When the line is the ``exit`` builtin.
        """
        line = line.rstrip("\n")
        self._state.history.add(line)

        try:
            tokens = tokenize(line, max_length=self._max_line_length)
            parsed = classify(tokens, max_args=self._max_args)
        except (LineTooLongError, ArgumentLimitError) as exc:
            print(f"myshell: {exc}", file=self.err)
            return None

        if parsed.is_empty():
            return None

        if dispatch_builtin(parsed.primary.argv, self._state, self.out, self.err):
            return None

        status = self._orchestrator.execute(parsed)
        logger.debug("line %r finished status=%s", line, status)
        return status

    def run(self) -> int:
        """Prompt, read and process lines until end of input.

        Returns:
            0 once the input stream is exhausted.
        """
        while True:
            self.out.write(self._prompt)
            self.out.flush()
            try:
                line = self.stdin.readline()
            except KeyboardInterrupt:
                self.out.write("\n")
                continue

            if not line:
                logger.debug("end of input")
                return 0

            try:
                self.process_line(line)
            except KeyboardInterrupt:
                self.out.write("\n")
