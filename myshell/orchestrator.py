from __future__ import annotations

import logging
import os
import signal
import sys
from typing import TextIO

from myshell.log_setup import TRACE
from myshell.parsing.classifier import AND_THEN, PIPE
from myshell.parsing.models import CommandDescriptor, ParsedLine

logger = logging.getLogger(__name__)

EXEC_FAILURE_STATUS = 1
PROCESS_CREATION_FAILED = -1

STDIN_FILENO = 0
STDOUT_FILENO = 1
STDERR_FILENO = 2


class ProcessOrchestrator:
    """Realize a ParsedLine as one or two child processes.

    Children are created with ``fork`` and replace their image with
    ``execvp``. A child never returns into interpreter code: a failed exec
    reports on fd 2 and ``_exit``s with ``EXEC_FAILURE_STATUS``.
    Foreground children are always reaped; background ones are reported
    and never waited on.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            out: Stream for background pid reports, ``sys.stdout`` by
                default (resolved at call time).
            err: Stream for process-creation errors, ``sys.stderr`` by
                default (resolved at call time).
        """
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    # --- Entry point ---

    def execute(self, parsed: ParsedLine) -> int | None:
        """Run a classified line in the shape its flags select.

        Returns:
            The exit status of the shape (see the ``run_*`` methods), or
            None for an empty primary command, which runs nothing.
            ``PROCESS_CREATION_FAILED`` if a ``|`` or ``&&`` has no command
            after it; nothing is forked in that case.
        """
        if parsed.is_empty():
            logger.log(TRACE, "empty primary command, nothing to run")
            return None
        if (parsed.pipeline or parsed.sequence) and parsed.secondary.is_empty():
            operator = PIPE if parsed.pipeline else AND_THEN
            self._report(f"myshell: missing command after '{operator}'")
            return PROCESS_CREATION_FAILED
        if parsed.pipeline:
            return self.run_pipeline(parsed.primary, parsed.secondary, background=parsed.background)
        if parsed.sequence:
            return self.run_sequence(parsed.primary, parsed.secondary, background=parsed.background)
        return self.run_command(parsed.primary, background=parsed.background)

    # --- Execution shapes ---

    def run_command(self, command: CommandDescriptor, background: bool = False) -> int:
        """Run one command in a child process.

        Args:
            command: Argument vector, program name first.
            background: Report the pid and return without waiting.

        Returns:
            The child's exit code in the foreground (negative signal
            number if it was killed), 0 in the background, or
            ``PROCESS_CREATION_FAILED`` if no child could be created.
        """
        try:
            pid = self._spawn(command.argv)
        except OSError as exc:
            self._report(f"fork: {exc.strerror}")
            return PROCESS_CREATION_FAILED

        if background:
            print(f"Background process with PID: {pid}", file=self.out)
            self.out.flush()
            return 0
        return self._wait(pid)

    def run_pipeline(
        self,
        producer: CommandDescriptor,
        consumer: CommandDescriptor,
        background: bool = False,
    ) -> int:
        """Run ``producer | consumer`` through one anonymous pipe.

        The parent closes both pipe ends as soon as both children exist,
        so the consumer sees end-of-file when the producer exits. In the
        foreground both children are waited on whatever their outcome.

        Returns:
            The consumer's exit code in the foreground, 0 in the
            background, or ``PROCESS_CREATION_FAILED``.
        """
        try:
            read_fd, write_fd = os.pipe()
        except OSError as exc:
            self._report(f"pipe: {exc.strerror}")
            return PROCESS_CREATION_FAILED

        try:
            producer_pid = self._spawn(producer.argv, stdout_fd=write_fd, close_fds=(read_fd, write_fd))
        except OSError as exc:
            os.close(read_fd)
            os.close(write_fd)
            self._report(f"fork: {exc.strerror}")
            return PROCESS_CREATION_FAILED

        try:
            consumer_pid = self._spawn(consumer.argv, stdin_fd=read_fd, close_fds=(read_fd, write_fd))
        except BaseException as exc:
            os.close(read_fd)
            os.close(write_fd)
            # Without a reader the producer ends on SIGPIPE or EOF of its own.
            self._wait(producer_pid)
            if not isinstance(exc, OSError):
                raise
            self._report(f"fork: {exc.strerror}")
            return PROCESS_CREATION_FAILED

        os.close(read_fd)
        os.close(write_fd)

        if background:
            print(
                f"Background processes started with PID: {producer_pid} and {consumer_pid}",
                file=self.out,
            )
            self.out.flush()
            return 0

        self._wait(producer_pid)
        return self._wait(consumer_pid)

    def run_sequence(
        self,
        first: CommandDescriptor,
        second: CommandDescriptor,
        background: bool = False,
    ) -> int:
        """Run ``first && second``.

        ``second`` runs if and only if ``first`` returned 0. A backgrounded
        stage counts as successful since nothing waits for it.

        Returns:
            The status of the last stage that ran.
        """
        status = self.run_command(first, background=background)
        if status != 0:
            logger.debug("sequence stopped: %s returned %d", first.name, status)
            return status
        return self.run_command(second, background=background)

    # --- Process primitives ---

    def _spawn(
        self,
        argv: list[str],
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        close_fds: tuple[int, ...] = (),
    ) -> int:
        """Fork a child that execs ``argv`` with the given stream wiring.

        Raises:
            OSError: If the process could not be created.
        """
        # Pending buffered output would otherwise be written twice or late.
        self._flush()
        pid = os.fork()
        if pid == 0:
            self._exec_child(argv, stdin_fd, stdout_fd, close_fds)
        logger.debug("Spawned pid=%d argv=%s", pid, argv)
        return pid

    @staticmethod
    def _exec_child(
        argv: list[str],
        stdin_fd: int | None,
        stdout_fd: int | None,
        close_fds: tuple[int, ...],
    ) -> None:
        """Child side of ``_spawn``; leaves only through exec or ``_exit``."""
        try:
            # Python ignores SIGPIPE; exec would carry that over to the program.
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
            if stdin_fd is not None:
                os.dup2(stdin_fd, STDIN_FILENO)
            if stdout_fd is not None:
                os.dup2(stdout_fd, STDOUT_FILENO)
            for fd in close_fds:
                os.close(fd)
            os.execvp(argv[0], argv)
        except FileNotFoundError:
            os.write(STDERR_FILENO, f"Error: Command not found: {argv[0]}\n".encode())
        except OSError as exc:
            os.write(STDERR_FILENO, f"Error: {argv[0]}: {exc.strerror}\n".encode())
        finally:
            os._exit(EXEC_FAILURE_STATUS)

    @staticmethod
    def _wait(pid: int) -> int:
        """Block until ``pid`` terminates and return its exit code."""
        while True:
            try:
                _, status = os.waitpid(pid, 0)
                break
            except KeyboardInterrupt:
                # The child got the same SIGINT; keep waiting so it is reaped.
                logger.debug("interrupted while waiting for pid=%d", pid)
        code = os.waitstatus_to_exitcode(status)
        logger.debug("pid=%d exited status=%d", pid, code)
        return code

    def _flush(self) -> None:
        for stream in (self.out, self.err, sys.stdout, sys.stderr):
            try:
                stream.flush()
            except (OSError, ValueError) as exc:
                logger.debug("flush before fork failed: %s", exc)

    def _report(self, message: str) -> None:
        print(message, file=self.err)
        self.err.flush()
