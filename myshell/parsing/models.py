"""Shared data types for the line parsing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_MAX_ARGS = 10


class ArgumentLimitError(Exception):
    """Raised when a command receives more arguments than its capacity."""

    pass


@dataclass
class CommandDescriptor:
    """Bounded, ordered argument vector with the program name first.

    The end marker is implicit: it sits at ``len(argv)``, so an empty
    descriptor has its end marker at position 0.
    """

    capacity: int = DEFAULT_MAX_ARGS
    argv: list[str] = field(default_factory=list)

    def append(self, arg: str) -> None:
        """Append one argument, failing loudly when the vector is full.

        Raises:
            ArgumentLimitError: If the descriptor already holds
                ``capacity`` arguments.
        """
        if len(self.argv) >= self.capacity:
            raise ArgumentLimitError(
                f"too many arguments (max {self.capacity})"
            )
        self.argv.append(arg)

    @property
    def name(self) -> str | None:
        return self.argv[0] if self.argv else None

    def is_empty(self) -> bool:
        return not self.argv

    def __len__(self) -> int:
        return len(self.argv)


@dataclass
class ParsedLine:
    """Classifier output: two argument vectors and the shape flags.

    At most one of ``pipeline``/``sequence`` is set. ``secondary`` is
    only meaningful when one of them is.
    """

    primary: CommandDescriptor = field(default_factory=CommandDescriptor)
    secondary: CommandDescriptor = field(default_factory=CommandDescriptor)
    pipeline: bool = False
    sequence: bool = False
    background: bool = False

    def is_empty(self) -> bool:
        return self.primary.is_empty()
