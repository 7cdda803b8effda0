"""Version detection and formatting for language toolchains.

Covers Go, PHP, Python, Ruby, Terraform and Node.js.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path, PurePath

from promptbits.utils import exec_cmd, read_file

_GO_MARKER = "go version go"
_PYTHON_PREFIX = "Python "
_TERRAFORM_PREFIX = "Terraform "


def _strip_repeated_prefix(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix):]
    return text


def format_go_version(go_stdout: str) -> str | None:
    """Turn ``go version go1.13.3 linux/amd64`` into ``v1.13.3``."""
    _, marker, rest = go_stdout.partition(_GO_MARKER)
    if not marker:
        return None
    words = rest.split()
    if not words:
        return None
    return f"v{words[0]}"


def format_php_version(php_version: str) -> str:
    """Prefix a PHP version string with ``v``."""
    return f"v{php_version}"


def format_python_version(python_stdout: str) -> str:
    """Turn ``Python 3.7.2`` into ``v3.7.2``."""
    return f"v{_strip_repeated_prefix(python_stdout, _PYTHON_PREFIX).strip()}"


def format_ruby_version(ruby_version: str) -> str | None:
    """Turn ``ruby 2.6.0p0 (...)`` into ``v2.6.0``.

    The version is the first five bytes of the second word; ``None`` is
    returned when there is no such word or it is too short.
    """
    words = ruby_version.split()
    if len(words) < 2:
        return None
    raw = words[1].encode("utf-8")
    if len(raw) < 5:
        return None
    try:
        version = raw[:5].decode("utf-8")
    except UnicodeDecodeError:
        return None
    return f"v{version}"


def format_terraform_version(version: str) -> str | None:
    """Take the first line of ``terraform version`` output, e.g. ``v0.12.14 ``.

    The result keeps a trailing space to separate it from the workspace.
    """
    if not version:
        return None
    first_line = version.split("\n", 1)[0]
    return _strip_repeated_prefix(first_line, _TERRAFORM_PREFIX).strip() + " "


def format_node_version(node_stdout: str) -> str:
    """Return the output of ``node --version`` without surrounding whitespace."""
    return node_stdout.strip()


def get_python_version() -> str | None:
    """Run ``python --version`` and return whichever stream holds the answer.

    Older interpreters print their version on standard error.
    """
    output = exec_cmd("python", ["--version"])
    if output is None:
        return None
    return output.stdout if output.stdout else output.stderr


def get_python_virtual_env() -> str | None:
    """Return the directory name of the active virtual environment, if any."""
    venv = os.environ.get("VIRTUAL_ENV")
    if venv is None:
        return None
    name = PurePath(venv).name
    if not name or name == "..":
        return None
    return name


def get_terraform_workspace(cwd: str | PathLike[str]) -> str | None:
    """Return the selected Terraform workspace for ``cwd``.

    ``TF_WORKSPACE`` overrides everything. Otherwise the ``environment``
    file in the data directory (``TF_DATA_DIR`` or ``<cwd>/.terraform``)
    names it; a missing file means ``default``.
    """
    override = os.environ.get("TF_WORKSPACE")
    if override is not None:
        return override

    data_dir_env = os.environ.get("TF_DATA_DIR")
    data_dir = Path(data_dir_env) if data_dir_env is not None else Path(cwd) / ".terraform"
    try:
        return read_file(data_dir / "environment")
    except FileNotFoundError:
        return "default"
    except (OSError, UnicodeDecodeError):
        return None