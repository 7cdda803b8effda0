"""Branch names, commit hashes and repository state for version control prompts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from itertools import islice
from os import PathLike
from pathlib import Path

import regex

from promptbits.utils import read_file

log = logging.getLogger(__name__)

_GRAPHEME = regex.compile(r"\X")
_UNSIGNED = re.compile(r"\+?[0-9]+")


def get_graphemes(text: str, length: int) -> str:
    """Return the first ``length`` grapheme clusters of ``text``."""
    return "".join(islice(_GRAPHEME.findall(text), length))


def graphemes_len(text: str) -> int:
    """Count the grapheme clusters in ``text``."""
    return len(_GRAPHEME.findall(text))


def truncate_branch(name: str, length: int, truncation_symbol: str) -> str:
    """Shorten a branch name to ``length`` graphemes.

    The first grapheme of ``truncation_symbol`` is appended only when the
    name was actually shortened. A length of zero or less disables
    truncation.
    """
    if length <= 0:
        log.warning('"truncation_length" should be a positive value, found %s', length)
        return name
    truncated = get_graphemes(name, length)
    if length < graphemes_len(name):
        return truncated + get_graphemes(truncation_symbol, 1)
    return truncated


def id_to_hex_abbrev(data: bytes, length: int) -> str:
    """Hex-encode ``data`` and keep the first ``length`` hex digits."""
    return data.hex()[:length]


class RepoState(Enum):
    """The operation a repository is in the middle of, if any."""

    CLEAN = auto()
    MERGE = auto()
    REVERT = auto()
    REVERT_SEQUENCE = auto()
    CHERRY_PICK = auto()
    CHERRY_PICK_SEQUENCE = auto()
    BISECT = auto()
    APPLY_MAILBOX = auto()
    APPLY_MAILBOX_OR_REBASE = auto()
    REBASE = auto()
    REBASE_INTERACTIVE = auto()
    REBASE_MERGE = auto()


@dataclass(frozen=True)
class StateProgress:
    """How far an operation has come, e.g. step 3 of 10 of a rebase."""

    current: int
    total: int


@dataclass(frozen=True)
class StateDescription:
    """The label of an ongoing operation and, when known, its progress."""

    label: str
    progress: StateProgress | None = None


_LABELS = {
    RepoState.MERGE: "merge",
    RepoState.REVERT: "revert",
    RepoState.REVERT_SEQUENCE: "revert",
    RepoState.CHERRY_PICK: "cherry_pick",
    RepoState.CHERRY_PICK_SEQUENCE: "cherry_pick",
    RepoState.BISECT: "bisect",
    RepoState.APPLY_MAILBOX: "am",
    RepoState.APPLY_MAILBOX_OR_REBASE: "am_or_rebase",
}

_REBASE_STATES = frozenset(
    {RepoState.REBASE, RepoState.REBASE_INTERACTIVE, RepoState.REBASE_MERGE}
)


def _file_to_int(path: Path) -> int | None:
    try:
        contents = read_file(path).strip()
    except (OSError, UnicodeDecodeError):
        return None
    if not _UNSIGNED.fullmatch(contents):
        return None
    return int(contents)


def _progress(current_path: Path, total_path: Path) -> StateProgress | None:
    current = _file_to_int(current_path)
    if current is None:
        return None
    total = _file_to_int(total_path)
    if total is None:
        return None
    return StateProgress(current, total)


def describe_rebase(root: str | PathLike[str]) -> StateDescription:
    """Describe a rebase, reading its progress from the ``.git`` directory."""
    dot_git = Path(root) / ".git"
    if (dot_git / "rebase-merge").exists():
        progress = _progress(
            dot_git / "rebase-merge" / "msgnum", dot_git / "rebase-merge" / "end"
        )
    elif (dot_git / "rebase-apply").exists():
        progress = _progress(
            dot_git / "rebase-apply" / "next", dot_git / "rebase-apply" / "last"
        )
    else:
        progress = None
    return StateDescription("rebase", progress)


def describe_state(
    state: RepoState, root: str | PathLike[str]
) -> StateDescription | None:
    """Describe the repository's state; ``None`` when it is clean."""
    if state is RepoState.CLEAN:
        return None
    if state in _REBASE_STATES:
        return describe_rebase(root)
    return StateDescription(_LABELS[state])


def get_hg_branch_name(current_dir: str | PathLike[str]) -> str:
    """Return the Mercurial branch of ``current_dir``, ``default`` if unknown."""
    try:
        return read_file(Path(current_dir) / ".hg" / "branch").strip()
    except (OSError, UnicodeDecodeError):
        return "default"


def get_hg_current_bookmark(current_dir: str | PathLike[str]) -> str | None:
    """Return the active Mercurial bookmark of ``current_dir``, if any."""
    try:
        return read_file(Path(current_dir) / ".hg" / "bookmarks.current").strip()
    except (OSError, UnicodeDecodeError):
        return None