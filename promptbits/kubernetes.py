"""Reading the current Kubernetes context and namespace from kubeconfig files."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

import yaml

from promptbits.utils import read_file


def get_kube_context(contents: str) -> tuple[str, str] | None:
    """Return ``(context, namespace)`` from a kubeconfig document.

    The namespace is an empty string when the current context sets none.
    Returns ``None`` when there is no usable current context.
    """
    try:
        documents = list(yaml.safe_load_all(contents))
    except yaml.YAMLError:
        return None
    if not documents:
        return None

    config = documents[0]
    if not isinstance(config, dict):
        return None
    current = config.get("current-context")
    if not isinstance(current, str) or not current:
        return None

    namespace = ""
    contexts = config.get("contexts")
    if isinstance(contexts, list):
        match = next(
            (
                ctx
                for ctx in contexts
                if isinstance(ctx, dict) and ctx.get("name") == current
            ),
            None,
        )
        if match is not None:
            details = match.get("context")
            if isinstance(details, dict) and isinstance(details.get("namespace"), str):
                namespace = details["namespace"]

    return current, namespace


def parse_kubectl_file(path: str | PathLike[str]) -> tuple[str, str] | None:
    """Read a kubeconfig file and return its current context, if any."""
    try:
        contents = read_file(path)
    except (OSError, UnicodeDecodeError):
        return None
    return get_kube_context(contents)


def current_kube_context(
    kubeconfig: str | None,
    home: str | PathLike[str] | None,
) -> tuple[str, str] | None:
    """Find the active context.

    ``kubeconfig`` is the value of ``KUBECONFIG`` (a search-path list of
    files), or ``None`` when unset, in which case ``~/.kube/config`` under
    ``home`` is read.
    """
    if kubeconfig is not None:
        for filename in kubeconfig.split(os.pathsep):
            result = parse_kubectl_file(filename)
            if result is not None:
                return result
        return None

    if home is None:
        return None
    return parse_kubectl_file(Path(home) / ".kube" / "config")