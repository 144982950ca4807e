"""myshell - a small line-oriented command interpreter."""

from myshell.shell import Shell
from myshell.state import InterpreterState

__version__ = "0.1.0"

__all__ = ["InterpreterState", "Shell"]
