import io
import os

import pytest

from myshell.history import HistoryBuffer
from myshell.state import InterpreterState


@pytest.fixture
def environ():
    """A private copy of the environment so tests never leak PWD/HOME."""
    return dict(os.environ)


@pytest.fixture
def state(environ):
    """Fresh interpreter state backed by the private environment."""
    return InterpreterState(history=HistoryBuffer(10), environ=environ)


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def err():
    return io.StringIO()


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run the test from a resolved temporary directory."""
    resolved = tmp_path.resolve()
    monkeypatch.chdir(resolved)
    return resolved
