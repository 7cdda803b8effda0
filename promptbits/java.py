"""Detecting and formatting the installed Java runtime version."""

from __future__ import annotations

import os
import re

from promptbits.utils import exec_cmd

_VERSION = re.compile(r"[0-9.]+")


def _after(text: str, marker: str) -> str | None:
    index = text.find(marker)
    if index < 0:
        return None
    return text[index + len(marker):]


def parse_jre_version(text: str) -> str | None:
    """Pull the version number out of ``java -Xinternalversion`` output.

    Understands forms such as ``JRE (1.8.0_222-b10)``,
    ``JRE (Zulu 8.40.0.25-CA-linux64) (1.8.0_222-b10)`` and
    ``VM (1.8.0_222-b10)``. Returns ``None`` when none of them match.
    """
    rest = _after(text, "JRE (")
    if rest is None:
        rest = _after(text, "VM (")
    if rest is None:
        return None

    match = _VERSION.match(rest)
    if match:
        return match.group()

    # Vendor label first, the version follows in the next parenthesis.
    rest = _after(rest, "(")
    if rest is None:
        return None
    match = _VERSION.match(rest)
    return match.group() if match else None


def format_java_version(java_out: str) -> str | None:
    """Return the parsed version prefixed with ``v``, or ``None``."""
    version = parse_jre_version(java_out)
    return None if version is None else f"v{version}"


def get_java_version() -> str | None:
    """Run the Java runtime and return its combined version output.

    Uses ``$JAVA_HOME/bin/java`` when ``JAVA_HOME`` is set, otherwise
    ``java`` from the search path.
    """
    java_home = os.environ.get("JAVA_HOME")
    java_command = f"{java_home}/bin/java" if java_home is not None else "java"
    output = exec_cmd(java_command, ["-Xinternalversion"])
    if output is None:
        return None
    return output.stdout + output.stderr