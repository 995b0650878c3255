"""Tests for locating, reading and counting shell history."""

from pathlib import Path

import pytest

from histsearch.history import (
    ConfigurationError,
    build_frequency_index,
    history_path_from_env,
    load_history,
    read_history,
    resolve_history_path,
)


class TestResolveHistoryPath:
    @pytest.mark.parametrize(
        "shell, rel",
        [
            ("/bin/bash", ".bash_history"),
            ("/usr/bin/bash", ".bash_history"),
            ("/bin/zsh", ".zsh_history"),
            ("/usr/bin/zsh", ".zsh_history"),
            ("/usr/bin/fish", ".local/share/fish/fish_history"),
            ("/bin/fish", ".local/share/fish/fish_history"),
            ("zsh", ".zsh_history"),
            ("/opt/homebrew/bin/fish", ".local/share/fish/fish_history"),
        ],
    )
    def test_known_shells(self, shell, rel):
        assert resolve_history_path(shell, "/home/u") == Path("/home/u") / rel

    def test_unsupported_shell(self):
        with pytest.raises(ConfigurationError, match="Unsupported shell: /bin/tcsh"):
            resolve_history_path("/bin/tcsh", "/home/u")


class TestHistoryPathFromEnv:
    def test_uses_home_and_shell(self):
        env = {"HOME": "/home/u", "SHELL": "/bin/bash"}
        assert history_path_from_env(env) == Path("/home/u/.bash_history")

    def test_shell_override(self):
        env = {"HOME": "/home/u", "SHELL": "/bin/bash"}
        assert history_path_from_env(env, shell="zsh") == Path("/home/u/.zsh_history")

    def test_override_works_without_shell_var(self):
        assert history_path_from_env({"HOME": "/h"}, shell="bash") == Path("/h/.bash_history")

    def test_missing_home(self):
        with pytest.raises(ConfigurationError, match="HOME"):
            history_path_from_env({"SHELL": "/bin/bash"})

    def test_missing_shell(self):
        with pytest.raises(ConfigurationError, match="SHELL"):
            history_path_from_env({"HOME": "/home/u"})

    def test_empty_shell(self):
        with pytest.raises(ConfigurationError, match="SHELL"):
            history_path_from_env({"HOME": "/home/u", "SHELL": ""})


class TestReadHistory:
    def test_trims_and_drops_blank_lines(self, tmp_path):
        f = tmp_path / "hist"
        f.write_text("  ls -la  \n\n   \ngit status\n\tmake\n")
        assert read_history(f) == ["ls -la", "git status", "make"]

    def test_lines_kept_verbatim(self, tmp_path):
        f = tmp_path / "hist"
        f.write_text(": 1700000000:0;ls\n- cmd: git pull\n")
        assert read_history(f) == [": 1700000000:0;ls", "- cmd: git pull"]

    def test_duplicates_kept(self, tmp_path):
        f = tmp_path / "hist"
        f.write_text("ls\nls\n")
        assert read_history(f) == ["ls", "ls"]

    def test_invalid_utf8_lines_skipped(self, tmp_path):
        f = tmp_path / "hist"
        f.write_bytes(b"ls\n\xff\xfe broken\necho h\xc3\xa9\n")
        assert read_history(f) == ["ls", "echo hé"]

    def test_no_trailing_newline(self, tmp_path):
        f = tmp_path / "hist"
        f.write_text("ls\npwd")
        assert read_history(f) == ["ls", "pwd"]

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope"
        with pytest.raises(ConfigurationError, match="Failed to open history file"):
            read_history(missing)

    def test_directory_is_an_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            read_history(tmp_path)


class TestLoadHistory:
    def test_from_environment(self, tmp_path):
        (tmp_path / ".bash_history").write_text("ls\npwd\n")
        env = {"HOME": str(tmp_path), "SHELL": "/bin/bash"}
        path, commands = load_history(env)
        assert path == tmp_path / ".bash_history"
        assert commands == ["ls", "pwd"]

    def test_histfile_wins(self, tmp_path):
        f = tmp_path / "custom"
        f.write_text("echo hi\n")
        path, commands = load_history({}, histfile=str(f))
        assert path == f
        assert commands == ["echo hi"]

    def test_unsupported_shell_before_reading(self, tmp_path):
        env = {"HOME": str(tmp_path), "SHELL": "/bin/ksh"}
        with pytest.raises(ConfigurationError, match="Unsupported shell"):
            load_history(env)


class TestFrequencyIndex:
    def test_counts(self):
        index = build_frequency_index(["ls", "git status", "ls", "ls"])
        assert dict(index) == {"ls": 3, "git status": 1}

    def test_case_sensitive(self):
        index = build_frequency_index(["ls", "LS"])
        assert dict(index) == {"ls": 1, "LS": 1}

    def test_empty(self):
        assert len(build_frequency_index([])) == 0

    def test_no_zero_counts(self):
        index = build_frequency_index(["a", "b", "a"])
        assert all(count > 0 for count in index.values())

    def test_read_only(self):
        index = build_frequency_index(["ls"])
        with pytest.raises(TypeError):
            index["ls"] = 5
