from __future__ import annotations

import os
from collections.abc import MutableMapping
from dataclasses import dataclass, field

from myshell.history import HistoryBuffer


@dataclass
class InterpreterState:
    """Process-wide interpreter state, passed explicitly to whoever needs it.

    The working directory itself stays the OS-level cwd of the process so
    that spawned children inherit it; this object only exposes it.
    ``environ`` defaults to ``os.environ`` so that ``PWD`` published by
    ``cd`` is visible to children too.
    """

    history: HistoryBuffer = field(default_factory=HistoryBuffer)
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)

    @property
    def cwd(self) -> str:
        """Current working directory.

        Raises:
            OSError: If the directory has been removed or is unreadable.
        """
        return os.getcwd()

    def home(self) -> str | None:
        return self.environ.get("HOME")

    def change_directory(self, path: str) -> None:
        """Move the process to ``path`` and publish it as ``PWD``.

        Raises:
            OSError: If the directory cannot be entered; nothing changes.
        """
        os.chdir(path)
        self.environ["PWD"] = path
