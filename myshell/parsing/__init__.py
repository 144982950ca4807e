"""Line parsing pipeline: tokenizer → classifier → ParsedLine."""

from myshell.parsing.classifier import classify  # noqa: F401
from myshell.parsing.models import ArgumentLimitError, CommandDescriptor, ParsedLine  # noqa: F401
from myshell.parsing.tokenizer import LineTooLongError, tokenize  # noqa: F401

__all__ = [
    "ArgumentLimitError",
    "CommandDescriptor",
    "LineTooLongError",
    "ParsedLine",
    "classify",
    "tokenize",
]
