"""Working out which .NET SDK version applies to a directory."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from os import PathLike
from pathlib import Path

from promptbits.utils import exec_cmd, read_file

log = logging.getLogger(__name__)

GLOBAL_JSON_FILE = "global.json"
PROJECT_JSON_FILE = "project.json"

_PROJECT_EXTENSIONS = frozenset({"csproj", "fsproj", "xproj"})


class FileType(Enum):
    """The kinds of file that mark a directory as a .NET project."""

    PROJECT_JSON = auto()
    PROJECT_FILE = auto()
    GLOBAL_JSON = auto()
    SOLUTION_FILE = auto()


@dataclass(frozen=True)
class DotNetFile:
    """A file relevant to .NET, with its kind."""

    path: Path
    file_type: FileType


def get_dotnet_file_type(path: str | PathLike[str]) -> FileType | None:
    """Classify a file by its name or extension, ignoring case."""
    path = Path(path)
    name = path.name.lower()
    if name == GLOBAL_JSON_FILE:
        return FileType.GLOBAL_JSON
    if name == PROJECT_JSON_FILE:
        return FileType.PROJECT_JSON

    extension = path.suffix.lower().lstrip(".")
    if extension == "sln":
        return FileType.SOLUTION_FILE
    if extension in _PROJECT_EXTENSIONS:
        return FileType.PROJECT_FILE
    return None


def find_dotnet_files(paths: Iterable[str | PathLike[str]]) -> list[DotNetFile]:
    """Return the .NET-related files among ``paths``, in their original order."""
    found = []
    for path in paths:
        file_type = get_dotnet_file_type(path)
        if file_type is not None:
            found.append(DotNetFile(Path(path), file_type))
    return found


def get_pinned_sdk_version(json_text: str) -> str | None:
    """Return the SDK version pinned in a ``global.json`` document, as ``v<version>``."""
    try:
        document = json.loads(json_text)
    except ValueError:
        return None
    if not isinstance(document, dict):
        return None
    sdk = document.get("sdk")
    if not isinstance(sdk, dict):
        return None
    version = sdk.get("version")
    if not isinstance(version, str):
        return None
    return f"v{version}"


def get_pinned_sdk_version_from_file(path: str | PathLike[str]) -> str | None:
    """Read a ``global.json`` file and return the pinned SDK version, if any."""
    try:
        json_text = read_file(path)
    except (OSError, UnicodeDecodeError):
        return None
    log.debug("Checking if .NET SDK version is pinned in: %s", path)
    return get_pinned_sdk_version(json_text)


def parse_list_sdks(stdout: str) -> str | None:
    """Return the newest SDK from ``dotnet --list-sdks`` output, as ``v<version>``.

    The newest SDK is on the last non-blank line, in the form
    ``<version> [<install path>]``.
    """
    lines = [line.strip() for line in stdout.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return None
    latest = lines[-1]
    bracket = latest.find("[")
    if bracket < 0:
        return None
    take_until = bracket - 1
    if take_until <= 1:
        return None
    return f"v{latest[:take_until]}"


def get_version_from_cli() -> str | None:
    """Ask ``dotnet --version`` for the SDK version."""
    output = exec_cmd("dotnet", ["--version"])
    if output is None:
        return None
    return f"v{output.stdout.strip()}"


def get_latest_sdk_from_cli() -> str | None:
    """Return the newest installed SDK, falling back to ``dotnet --version``.

    Older command-line tools do not know ``--list-sdks``; when it fails the
    plain version query is used instead.
    """
    output = exec_cmd("dotnet", ["--list-sdks"])
    if output is None:
        log.warning(
            "Received a non-success exit code from `dotnet --list-sdks`. "
            "Falling back to `dotnet --version`."
        )
        return get_version_from_cli()

    version = parse_list_sdks(output.stdout)
    if version is None:
        log.warning("Unable to parse the output from `dotnet --list-sdks`.")
    return version


def _check_directory_for_global_json(directory: Path) -> str | None:
    global_json = directory / GLOBAL_JSON_FILE
    log.debug("Checking if global.json exists at: %s", global_json)
    if global_json.exists():
        return get_pinned_sdk_version_from_file(global_json)
    return None


def try_find_nearby_global_json(
    current_dir: str | PathLike[str],
    repo_root: str | PathLike[str] | None,
) -> str | None:
    """Look for a pinned SDK in a ``global.json`` near ``current_dir``.

    The parent directory is checked, unless ``current_dir`` is the repository
    root, and then the repository root itself.
    """
    current = Path(current_dir)
    root = Path(repo_root) if repo_root is not None else None

    parent: Path | None = None
    if root != current and current.parent != current:
        parent = current.parent

    check_dirs: list[Path] = []
    for directory in (parent, root):
        if directory is not None and (not check_dirs or check_dirs[-1] != directory):
            check_dirs.append(directory)

    for directory in check_dirs:
        if directory == current:
            continue
        version = _check_directory_for_global_json(directory)
        if version is not None:
            return version
    return None


def estimate_dotnet_version(
    files: Sequence[DotNetFile],
    current_dir: str | PathLike[str],
    repo_root: str | PathLike[str] | None,
) -> str | None:
    """Work out the SDK version without always running the command-line tool.

    A ``global.json`` wins, then a solution file, then any other project file.
    """
    relevant = next(
        (f for f in files if f.file_type is FileType.GLOBAL_JSON),
        None,
    ) or next(
        (f for f in files if f.file_type is FileType.SOLUTION_FILE),
        None,
    ) or next(iter(files), None)

    if relevant is None:
        return None

    if relevant.file_type is FileType.GLOBAL_JSON:
        return get_pinned_sdk_version_from_file(relevant.path) or get_latest_sdk_from_cli()
    if relevant.file_type is FileType.SOLUTION_FILE:
        # A global.json above a solution file is assumed not to exist.
        return get_latest_sdk_from_cli()
    return try_find_nearby_global_json(current_dir, repo_root) or get_latest_sdk_from_cli()