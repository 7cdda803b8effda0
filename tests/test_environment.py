import subprocess
from unittest import mock

import pytest

from promptbits.environment import (
    format_kib,
    format_memory,
    get_env_value,
    get_uid,
    memory_percent_sign,
    nix_shell_label,
    parse_jobs,
    should_show_username,
    trim_hostname,
)


def test_env_value_present(monkeypatch):
    monkeypatch.setenv("PROMPTBITS_TEST_VAR", "some value")
    assert get_env_value("PROMPTBITS_TEST_VAR", "fallback") == "some value"


def test_env_value_default(monkeypatch):
    monkeypatch.delenv("PROMPTBITS_TEST_VAR", raising=False)
    assert get_env_value("PROMPTBITS_TEST_VAR", "fallback") == "fallback"
    assert get_env_value("PROMPTBITS_TEST_VAR", None) is None


def test_trim_hostname():
    assert trim_hostname("box.example.com", ".") == "box"
    assert trim_hostname("box.example.com", "") == "box.example.com"
    assert trim_hostname("box.example.com", "#") == "box.example.com"


def test_parse_jobs():
    assert parse_jobs(None) == parse_jobs("0")
    assert parse_jobs(" 3 \n") == 3
    assert parse_jobs("+7") == 7
    assert parse_jobs("-2") == -2


@pytest.mark.parametrize("value", ["abc", "", "1.5", "1_000", "99999999999999999999"])
def test_parse_jobs_invalid(value):
    assert parse_jobs(value) is None


def test_nix_shell_label_types():
    assert nix_shell_label("pure", False, None, "pure", "impure") == "pure"
    assert nix_shell_label("impure", False, None, "pure", "impure") == "impure"
    assert nix_shell_label("1", False, None, "pure", "impure") == "impure"
    assert nix_shell_label("other", False, None, "pure", "impure") is None


def test_nix_shell_label_with_name():
    assert nix_shell_label("pure", True, "devenv", "pure", "impure") == "devenv (pure)"
    assert nix_shell_label("pure", True, None, "pure", "impure") == "pure"
    assert nix_shell_label("1", False, "devenv", "pure", "impure") == "impure"


@pytest.mark.parametrize(
    "user, logname, ssh, uid, always, expected",
    [
        ("alice", "alice", None, 1000, False, False),
        ("alice", "bob", None, 1000, False, True),
        ("alice", "alice", "10.0.0.1 22 10.0.0.2 22", 1000, False, True),
        ("alice", "alice", None, 0, False, True),
        ("alice", "alice", None, 1000, True, True),
        ("alice", "alice", None, None, False, False),
    ],
)
def test_should_show_username(user, logname, ssh, uid, always, expected):
    assert should_show_username(user, logname, ssh, uid, always) is expected


def test_get_uid_parses_output():
    completed = subprocess.CompletedProcess(["id", "-u"], 0, b"1000\n", b"")
    with mock.patch("subprocess.run", return_value=completed):
        assert get_uid() == 1000


def test_get_uid_rejects_garbage():
    completed = subprocess.CompletedProcess(["id", "-u"], 0, b"nobody\n", b"")
    with mock.patch("subprocess.run", return_value=completed):
        assert get_uid() is None


def test_get_uid_command_failure():
    completed = subprocess.CompletedProcess(["id", "-u"], 1, b"", b"error")
    with mock.patch("subprocess.run", return_value=completed):
        assert get_uid() is None


def test_format_kib_values():
    assert format_kib(0) == "0B"
    assert format_kib(2048) == "2MiB"


def test_format_kib_has_no_spaces_and_binary_unit():
    for n in (5, 3000, 5_000_000, 7_000_000_000):
        text = format_kib(n)
        assert " " not in text
        assert text.endswith("iB")


def test_memory_percent_sign():
    assert memory_percent_sign("zsh") == "%%"
    assert memory_percent_sign("bash") == "%"
    assert memory_percent_sign("") == "%"


def test_format_memory_percentage():
    assert format_memory(50, 100, True, "%") == "50%"
    assert format_memory(50, 100, True, "%%").endswith("%%")


def test_format_memory_absolute():
    result = format_memory(2048, 8192, False, "%")
    assert result == f"{format_kib(2048)}/{format_kib(8192)}"


def test_format_memory_zero_total_does_not_raise_and_marks_invalid():
    assert format_memory(0, 0, True, "%") == "NaN%"