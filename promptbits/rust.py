"""Working out which Rust toolchain version applies to a directory."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from os import PathLike
from pathlib import Path, PurePath

_TOOLCHAIN_FILE = "rust-toolchain"
_NOT_INSTALLED_PREFIX = "error: toolchain '"
_NOT_INSTALLED_SUFFIX = "' is not installed\n"


class OutcomeKind(Enum):
    """What came of asking rustup for a toolchain's compiler version."""

    RUSTC_VERSION = auto()
    TOOLCHAIN_NAME = auto()
    RUSTUP_NOT_WORKING = auto()
    ERR = auto()


@dataclass(frozen=True)
class RustupOutcome:
    """The kind of outcome and, for versions and toolchain names, its text."""

    kind: OutcomeKind
    value: str | None = None


def extract_toolchain_from_rustup_override_list(
    stdout: str, cwd: str | PathLike[str]
) -> str | None:
    """Return the override toolchain whose directory contains ``cwd``.

    ``stdout`` is the output of ``rustup override list``: one
    ``<directory> <toolchain>`` pair per line.
    """
    if stdout == "no overrides\n":
        return None
    current = PurePath(cwd)
    for line in stdout.splitlines():
        words = line.split()
        if len(words) < 2:
            continue
        directory, toolchain = words[0], words[1]
        if current.is_relative_to(directory):
            return toolchain
    return None


def extract_toolchain_from_rustup_run_rustc_version(
    returncode: int, stdout: bytes, stderr: bytes
) -> RustupOutcome:
    """Interpret the result of ``rustup run <toolchain> rustc --version``."""
    if returncode == 0:
        try:
            return RustupOutcome(OutcomeKind.RUSTC_VERSION, stdout.decode("utf-8"))
        except UnicodeDecodeError:
            return RustupOutcome(OutcomeKind.ERR)

    try:
        message = stderr.decode("utf-8")
    except UnicodeDecodeError:
        return RustupOutcome(OutcomeKind.ERR)

    if (
        message.startswith(_NOT_INSTALLED_PREFIX)
        and message.endswith(_NOT_INSTALLED_SUFFIX)
        and len(message) >= len(_NOT_INSTALLED_PREFIX) + len(_NOT_INSTALLED_SUFFIX)
    ):
        name = message[len(_NOT_INSTALLED_PREFIX):len(message) - len(_NOT_INSTALLED_SUFFIX)]
        return RustupOutcome(OutcomeKind.TOOLCHAIN_NAME, name)
    return RustupOutcome(OutcomeKind.ERR)


def format_rustc_version(rustc_stdout: str) -> str:
    """Turn ``rustc 1.34.0 (91856ed52 2019-04-10)`` into ``v1.34.0``."""
    offset = rustc_stdout.find("(")
    head = rustc_stdout if offset < 0 else rustc_stdout[:offset]
    return f"v{head.replace('rustc', '').strip()}"


def env_rustup_toolchain() -> str | None:
    """Return the toolchain named by ``RUSTUP_TOOLCHAIN``, if set."""
    value = os.environ.get("RUSTUP_TOOLCHAIN")
    return None if value is None else value.strip()


def _execute_rustup_override_list(cwd: Path) -> str | None:
    try:
        completed = subprocess.run(
            ["rustup", "override", "list"], capture_output=True, check=False
        )
    except OSError:
        return None
    try:
        stdout = completed.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return extract_toolchain_from_rustup_override_list(stdout, cwd)


def _read_first_line(path: Path) -> str | None:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = content.splitlines()
    return lines[0].strip() if lines else None


def find_rust_toolchain_file(
    current_dir: str | PathLike[str], dir_files: Iterable[str | PathLike[str]]
) -> str | None:
    """Read the toolchain from a ``rust-toolchain`` file, as rustup does.

    A matching file among ``dir_files`` is tried first; then ``current_dir``
    and each of its ancestors in turn.
    """
    listed = next(
        (Path(p) for p in dir_files if Path(p).name == _TOOLCHAIN_FILE), None
    )
    if listed is not None:
        toolchain = _read_first_line(listed)
        if toolchain is not None:
            return toolchain

    directory = Path(current_dir)
    for candidate in (directory, *directory.parents):
        toolchain = _read_first_line(candidate / _TOOLCHAIN_FILE)
        if toolchain is not None:
            return toolchain
    return None


def _execute_rustup_run_rustc_version(toolchain: str) -> RustupOutcome:
    try:
        completed = subprocess.run(
            ["rustup", "run", toolchain, "rustc", "--version"],
            capture_output=True,
            check=False,
        )
    except OSError:
        return RustupOutcome(OutcomeKind.RUSTUP_NOT_WORKING)
    return extract_toolchain_from_rustup_run_rustc_version(
        completed.returncode, completed.stdout, completed.stderr
    )


def _execute_rustc_version() -> str | None:
    try:
        completed = subprocess.run(
            ["rustc", "--version"], capture_output=True, check=False
        )
    except OSError:
        return None
    return completed.stdout.decode("utf-8")


def _rustc_version() -> str | None:
    output = _execute_rustc_version()
    return None if output is None else format_rustc_version(output)


def detect_rust_version(
    current_dir: str | PathLike[str], dir_files: Iterable[str | PathLike[str]]
) -> str | None:
    """Return the compiler version that applies to ``current_dir``.

    Overrides are checked in order: ``RUSTUP_TOOLCHAIN``, then
    ``rustup override list``, then a ``rust-toolchain`` file, so that no
    toolchain gets installed as a side effect. With no override,
    ``rustc --version`` is asked directly.
    """
    toolchain = (
        env_rustup_toolchain()
        or _execute_rustup_override_list(Path(current_dir))
        or find_rust_toolchain_file(current_dir, dir_files)
    )
    if not toolchain:
        return _rustc_version()

    outcome = _execute_rustup_run_rustc_version(toolchain)
    match outcome.kind:
        case OutcomeKind.RUSTC_VERSION:
            return format_rustc_version(outcome.value or "")
        case OutcomeKind.TOOLCHAIN_NAME:
            return outcome.value
        case OutcomeKind.RUSTUP_NOT_WORKING:
            return _rustc_version()
        case _:
            return None