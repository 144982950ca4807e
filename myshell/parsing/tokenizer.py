from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"[ \t\r\n]+")


class LineTooLongError(Exception):
    """Raised when a raw line exceeds the configured input bound."""

    pass


def tokenize(line: str, max_length: int | None = None) -> list[str]:
    """Split a raw input line into whitespace-delimited tokens.

    Runs of spaces, tabs and line terminators collapse into a single
    delimiter. Quotes carry no meaning, so ``echo "a b"`` yields the
    tokens ``echo``, ``"a`` and ``b"``. Operators are only recognized
    later, by exact token match.

    Args:
        line: The raw line, with or without its trailing newline.
        max_length: Optional bound on the line length (terminator
            excluded).

    Returns:
        The non-empty tokens in source order.

    Raises:
        LineTooLongError: If ``max_length`` is given and exceeded.
    """
    stripped = line.rstrip("\r\n")
    if max_length is not None and len(stripped) > max_length:
        raise LineTooLongError(f"line too long (max {max_length} characters)")
    return [token for token in _WHITESPACE_RE.split(stripped) if token]
