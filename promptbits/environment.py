"""Prompt values taken from the environment: variables, host, jobs, user, memory."""

from __future__ import annotations

import math
import os
import re

from promptbits.utils import exec_cmd

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U32_MAX = 2**32 - 1

_BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")

# Characters that a shell treats specially inside its prompt string.
_PROMPT_ESCAPES: dict[str, dict[str, str]] = {
    "zsh": {"%": "%%"},
}


def get_env_value(name: str, default: str | None = None) -> str | None:
    """Return the value of environment variable ``name``, or ``default`` if unset.

    A value that is not valid Unicode yields ``None``.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return value


def trim_hostname(host: str, trim_at: str) -> str:
    """Cut ``host`` at the first occurrence of ``trim_at``; an empty marker keeps it whole."""
    if not trim_at:
        return host
    index = host.find(trim_at)
    return host if index < 0 else host[:index]


def parse_jobs(value: str | None) -> int | None:
    """Parse the number of background jobs; an absent value means zero."""
    text = ("0" if value is None else value).strip()
    if not _SIGNED.fullmatch(text):
        return None
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return number


def nix_shell_label(
    shell_type: str,
    use_name: bool,
    name: str | None,
    pure_msg: str,
    impure_msg: str,
) -> str | None:
    """Describe a nix-shell from the value of ``IN_NIX_SHELL``.

    ``"1"`` counts as impure. With ``use_name`` and a shell name the result
    reads ``name (msg)``. Unknown shell types give ``None``.
    """
    if shell_type in ("1", "impure"):
        message = impure_msg
    elif shell_type == "pure":
        message = pure_msg
    else:
        return None
    if use_name and name is not None:
        return f"{name} ({message})"
    return message


def should_show_username(
    user: str | None,
    logname: str | None,
    ssh_connection: str | None,
    uid: int | None,
    show_always: bool,
) -> bool:
    """Decide whether the username belongs in the prompt.

    It is shown for a switched user, an SSH session, root, or when forced.
    """
    return user != logname or ssh_connection is not None or uid == 0 or show_always


def get_uid() -> int | None:
    """Return the current user's numeric id as reported by ``id -u``."""
    output = exec_cmd("id", ["-u"])
    if output is None:
        return None
    text = output.stdout.strip()
    if not _UNSIGNED.fullmatch(text):
        return None
    uid = int(text)
    return uid if uid <= _U32_MAX else None


def format_kib(n_kib: int) -> str:
    """Format a size in KiB with the largest fitting binary unit, e.g. ``2MiB``."""
    size = n_kib * 1024
    exponent = 0
    for index in range(len(_BINARY_UNITS) - 1, 0, -1):
        if size > 1024**index:
            exponent = index
            break
    value = size / 1024**exponent
    return f"{value:.0f}{_BINARY_UNITS[exponent]}"


def memory_percent_sign(shell: str) -> str:
    """Return the percent sign as it must be written in ``shell``'s prompt."""
    escapes = _PROMPT_ESCAPES.get(shell, {})
    sign = "%"
    return "".join(escapes.get(char, char) for char in sign)


def _percent(used: int, total: int) -> float:
    if total == 0:
        return math.nan if used == 0 else math.inf
    return used / total * 100.0


def _format_percent(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.0f}"


def format_memory(
    used_kib: int, total_kib: int, show_percentage: bool, percent_sign: str
) -> str:
    """Render memory use either as a percentage or as ``used/total``."""
    if show_percentage:
        return f"{_format_percent(_percent(used_kib, total_kib))}{percent_sign}"
    return f"{format_kib(used_kib)}/{format_kib(total_kib)}"