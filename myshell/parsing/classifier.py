from __future__ import annotations

import logging
from collections.abc import Iterable

from myshell.log_setup import TRACE
from myshell.parsing.models import DEFAULT_MAX_ARGS, CommandDescriptor, ParsedLine

logger = logging.getLogger(__name__)

BACKGROUND = "&"
PIPE = "|"
AND_THEN = "&&"
OPERATORS = frozenset({BACKGROUND, PIPE, AND_THEN})


def classify(tokens: Iterable[str], max_args: int = DEFAULT_MAX_ARGS) -> ParsedLine:
    """Bucket a token stream into primary/secondary commands and flags.

    Single left-to-right pass with no backtracking:

    * ``&`` before any other operator marks the line as background and
      ends scanning; whatever follows is dropped.
    * The first ``|`` or ``&&`` closes the primary command and switches
      to the secondary one, setting ``pipeline`` or ``sequence``.
    * Once an operator has been seen, ``|``, ``&&`` and ``&`` are plain
      arguments of the secondary command.

    Args:
        tokens: Tokens as produced by :func:`tokenize`.
        max_args: Capacity of each command descriptor.

    Returns:
        The ParsedLine. Its primary command is empty when the line is
        empty or starts with ``|``/``&&``.

    Raises:
        ArgumentLimitError: If either command exceeds ``max_args``.
    """
    parsed = ParsedLine(
        primary=CommandDescriptor(capacity=max_args),
        secondary=CommandDescriptor(capacity=max_args),
    )
    target = parsed.primary

    for token in tokens:
        operator_seen = parsed.pipeline or parsed.sequence
        if operator_seen or token not in OPERATORS:
            target.append(token)
        elif token == BACKGROUND:
            parsed.background = True
            break
        elif token == PIPE:
            parsed.pipeline = True
            target = parsed.secondary
        else:
            parsed.sequence = True
            target = parsed.secondary

    logger.log(
        TRACE,
        "classified primary=%s secondary=%s pipeline=%s sequence=%s background=%s",
        parsed.primary.argv,
        parsed.secondary.argv,
        parsed.pipeline,
        parsed.sequence,
        parsed.background,
    )
    return parsed
