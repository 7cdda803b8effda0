"""Path shortening helpers."""


def truncate(dir_string: str, length: int) -> str:
    """Keep only the last ``length`` components of a ``/``-separated path.

    A length of 0 leaves the path untouched, as does a path that already has
    no more than ``length`` components.
    """
    if length == 0:
        return dir_string

    components = dir_string.split("/")
    # A leading "/" yields an empty first component that is not a real one.
    if components[0] == "":
        components = components[1:]

    if len(components) <= length:
        return dir_string

    return "/".join(components[-length:])