"""Reading the version of the project in a directory from its manifest."""

from __future__ import annotations

import json
import tomllib
from os import PathLike
from pathlib import Path
from typing import Any

from promptbits.utils import read_file


def format_version(version: str) -> str:
    """Strip quotes and whitespace and make sure the version starts with ``v``."""
    cleaned = version.replace('"', "").strip()
    return cleaned if cleaned.startswith("v") else f"v{cleaned}"


def _lookup(document: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(document, dict):
            return None
        document = document.get(key)
    return document


def _load_toml(text: str) -> dict[str, Any] | None:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        return None


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _toml_version(text: str, *keys: str) -> str | None:
    raw = _lookup(_load_toml(text), *keys)
    return format_version(raw) if isinstance(raw, str) else None


def _json_version(text: str) -> str | None:
    raw = _lookup(_load_json(text), "version")
    if not isinstance(raw, str) or raw == "null":
        return None
    return format_version(raw)


def extract_cargo_version(text: str) -> str | None:
    """Return ``package.version`` from a ``Cargo.toml`` document."""
    return _toml_version(text, "package", "version")


def extract_package_version(text: str) -> str | None:
    """Return ``version`` from a ``package.json`` document."""
    return _json_version(text)


def extract_poetry_version(text: str) -> str | None:
    """Return ``tool.poetry.version`` from a ``pyproject.toml`` document."""
    return _toml_version(text, "tool", "poetry", "version")


def extract_composer_version(text: str) -> str | None:
    """Return ``version`` from a ``composer.json`` document."""
    return _json_version(text)


_MANIFESTS = (
    ("Cargo.toml", extract_cargo_version),
    ("package.json", extract_package_version),
    ("pyproject.toml", extract_poetry_version),
    ("composer.json", extract_composer_version),
)


def get_package_version(base_dir: str | PathLike[str]) -> str | None:
    """Return the version from the first readable manifest in ``base_dir``.

    Manifests are tried in the order Cargo, npm, Poetry, Composer; the first
    one that can be read decides the result, even if it holds no version.
    """
    base = Path(base_dir)
    for file_name, extract in _MANIFESTS:
        try:
            contents = read_file(base / file_name)
        except (OSError, UnicodeDecodeError):
            continue
        return extract(contents)
    return None