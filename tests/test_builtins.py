import os
from unittest.mock import patch

import pytest

from myshell.builtins import (
    EXIT_MESSAGE,
    dispatch_builtin,
    is_builtin,
    resolve_cd_target,
)


class TestIsBuiltin:
    @pytest.mark.parametrize("name", ["cd", "pwd", "history", "exit"])
    def test_recognized(self, name):
        assert is_builtin(name)

    @pytest.mark.parametrize("name", ["ls", "CD", "exit2", "", None])
    def test_not_recognized(self, name):
        assert not is_builtin(name)

    def test_dispatch_returns_false_for_external(self, state, out, err):
        assert dispatch_builtin(["ls", "-l"], state, out, err) is False
        assert out.getvalue() == ""

    def test_dispatch_returns_false_for_empty(self, state, out, err):
        assert dispatch_builtin([], state, out, err) is False


class TestResolveCdTarget:
    def test_no_argument_uses_home(self, state):
        state.environ["HOME"] = "/home/someone"
        assert resolve_cd_target(["cd"], state) == "/home/someone"

    def test_no_argument_without_home(self, state):
        state.environ.pop("HOME", None)
        assert resolve_cd_target(["cd"], state) is None

    def test_absolute_is_verbatim(self, state):
        assert resolve_cd_target(["cd", "/a/../b"], state) == "/a/../b"

    def test_relative_is_joined_to_cwd(self, state):
        with patch("myshell.state.os.getcwd", return_value="/a"):
            assert resolve_cd_target(["cd", "sub"], state) == "/a/sub"

    def test_relative_is_not_normalized(self, state):
        with patch("myshell.state.os.getcwd", return_value="/a"):
            assert resolve_cd_target(["cd", "../b"], state) == "/a/../b"


class TestCd:
    def test_cd_home(self, state, in_tmp, out, err):
        home = in_tmp / "home"
        home.mkdir()
        state.environ["HOME"] = str(home)
        assert dispatch_builtin(["cd"], state, out, err)
        assert os.getcwd() == str(home)
        assert state.environ["PWD"] == str(home)

    def test_cd_absolute(self, state, in_tmp, out, err):
        target = in_tmp / "abs"
        target.mkdir()
        dispatch_builtin(["cd", str(target)], state, out, err)
        assert os.getcwd() == str(target)
        assert state.environ["PWD"] == str(target)

    def test_cd_relative(self, state, in_tmp, out, err):
        (in_tmp / "sub").mkdir()
        dispatch_builtin(["cd", "sub"], state, out, err)
        assert os.getcwd() == str(in_tmp / "sub")
        assert state.environ["PWD"] == f"{in_tmp}/sub"

    def test_cd_missing_home_reports(self, state, in_tmp, out, err):
        state.environ.pop("HOME", None)
        assert dispatch_builtin(["cd"], state, out, err)
        assert "HOME environment variable not set" in err.getvalue()
        assert os.getcwd() == str(in_tmp)

    def test_cd_invalid_path_leaves_state_unchanged(self, state, in_tmp, out, err):
        state.environ["PWD"] = str(in_tmp)
        dispatch_builtin(["cd", "does-not-exist"], state, out, err)
        assert "cd:" in err.getvalue()
        assert "does-not-exist" in err.getvalue()
        assert os.getcwd() == str(in_tmp)
        assert state.environ["PWD"] == str(in_tmp)

    def test_cd_unreadable_cwd_reports(self, state, in_tmp, out, err):
        with patch("myshell.state.os.getcwd", side_effect=FileNotFoundError(2, "No such file or directory")):
            dispatch_builtin(["cd", "sub"], state, out, err)
        assert "cannot read current directory" in err.getvalue()

    def test_cd_ignores_extra_arguments(self, state, in_tmp, out, err):
        (in_tmp / "first").mkdir()
        dispatch_builtin(["cd", "first", "second"], state, out, err)
        assert os.getcwd() == str(in_tmp / "first")


class TestPwd:
    def test_prints_cwd(self, state, in_tmp, out, err):
        dispatch_builtin(["pwd"], state, out, err)
        assert out.getvalue() == f"{in_tmp}\n"

    def test_reports_new_directory_after_cd(self, state, in_tmp, out, err):
        (in_tmp / "next").mkdir()
        dispatch_builtin(["cd", "next"], state, out, err)
        dispatch_builtin(["pwd"], state, out, err)
        assert out.getvalue() == f"{in_tmp}/next\n"

    def test_reports_unreadable_cwd(self, state, out, err):
        with patch("myshell.state.os.getcwd", side_effect=FileNotFoundError(2, "No such file or directory")):
            dispatch_builtin(["pwd"], state, out, err)
        assert out.getvalue() == ""
        assert "pwd:" in err.getvalue()


class TestHistory:
    def test_lists_numbered_oldest_first(self, state, out, err):
        for line in ["ls", "pwd"]:
            state.history.add(line)
        dispatch_builtin(["history"], state, out, err)
        assert out.getvalue() == "1: ls\n2: pwd\n"

    def test_empty_history_prints_nothing(self, state, out, err):
        dispatch_builtin(["history"], state, out, err)
        assert out.getvalue() == ""

    def test_capped_at_capacity(self, state, out, err):
        for i in range(1, 13):
            state.history.add(f"cmd {i}")
        dispatch_builtin(["history"], state, out, err)
        lines = out.getvalue().splitlines()
        assert len(lines) == 10
        assert lines[0] == "1: cmd 3"
        assert lines[-1] == "10: cmd 12"


class TestExit:
    def test_prints_farewell_and_exits_zero(self, state, out, err):
        with pytest.raises(SystemExit) as exc_info:
            dispatch_builtin(["exit"], state, out, err)
        assert exc_info.value.code == 0
        assert out.getvalue() == f"{EXIT_MESSAGE}\n"
