import pytest

from myshell.history import HistoryBuffer


class TestHistoryBuffer:
    def test_starts_empty(self):
        history = HistoryBuffer()
        assert len(history) == 0
        assert history.entries() == []

    def test_default_capacity(self):
        assert HistoryBuffer().capacity == 10

    def test_keeps_submission_order(self):
        history = HistoryBuffer()
        for line in ["ls", "pwd", "cd /tmp"]:
            history.add(line)
        assert history.entries() == ["ls", "pwd", "cd /tmp"]

    def test_evicts_oldest_when_full(self):
        history = HistoryBuffer(10)
        lines = [f"echo {i}" for i in range(1, 13)]
        for line in lines:
            history.add(line)
        assert len(history) == 10
        assert history.entries() == lines[2:]

    def test_numbered_is_one_based(self):
        history = HistoryBuffer(3)
        for line in ["a", "b", "c", "d"]:
            history.add(line)
        assert history.numbered() == [(1, "b"), (2, "c"), (3, "d")]

    def test_entries_is_a_snapshot(self):
        history = HistoryBuffer()
        history.add("a")
        snapshot = history.entries()
        history.add("b")
        assert snapshot == ["a"]

    def test_keeps_duplicates_and_empty_lines(self):
        history = HistoryBuffer()
        for line in ["ls", "", "ls"]:
            history.add(line)
        assert list(history) == ["ls", "", "ls"]

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            HistoryBuffer(0)
