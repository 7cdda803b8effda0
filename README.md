# promptbits

A library of small, self-contained helpers for building a shell prompt. Each
helper works out one piece of context, such as a toolchain version, the state
of a repository or a detail of the environment, and returns it as a plain
Python value. You decide how to put these values together into a prompt.

## Installation

```
pip install promptbits
```

To run the test suite, install the `test` extra:

```
pip install "promptbits[test]"
pytest
```

## What is included

- `promptbits.segment`
  - `Style` holds a terminal text style: colours and attributes.
    `Style.paint` wraps text in the matching ANSI escape codes.
  - `Segment` holds a named piece of prompt text with an optional style.
  - `count_wide_chars` counts the characters in a string that take up two
    terminal columns. You need this count to line up columns.
- `promptbits.paths`: `truncate` keeps only the last N components of a
  `/`-separated path.
- `promptbits.utils`
  - `read_file` reads a UTF-8 file into a string.
  - `exec_cmd` runs a command and returns a `CommandOutput` holding `stdout`
    and `stderr`. It returns `None` if the command cannot be started or exits
    with a non-zero status.
- Toolchain versions:
  - `promptbits.java`: `parse_jre_version` and `format_java_version` read the
    output of `java -Xinternalversion`. `get_java_version` runs that command,
    using `$JAVA_HOME/bin/java` when `JAVA_HOME` is set.
  - `promptbits.dotnet`:
    - finds .NET project files among a list of paths;
    - reads the SDK version pinned in `global.json`;
    - parses `dotnet --list-sdks`;
    - `estimate_dotnet_version` combines these to pick the SDK that applies.
  - `promptbits.rust`: `detect_rust_version` checks the toolchain overrides in
    this order: `RUSTUP_TOOLCHAIN`, then `rustup override list`, then a
    `rust-toolchain` file. If none of them names a toolchain, it asks
    `rustc --version`.
  - `promptbits.languages`:
    - version formatters for Go, PHP, Python, Ruby, Terraform and Node.js;
    - `get_python_version` and `get_python_virtual_env`;
    - `get_terraform_workspace`, which honours `TF_WORKSPACE` and
      `TF_DATA_DIR`.
- `promptbits.package`: `get_package_version` reads the project version from
  the first readable file among `Cargo.toml`, `package.json`,
  `pyproject.toml` (Poetry) and `composer.json`.
- `promptbits.kubernetes`: `get_kube_context` and `current_kube_context`
  return the current context and namespace from kubeconfig files.
- `promptbits.time_format`:
  - `format_time` formats a time, and supports `%r` and `%T` on every
    platform.
  - `create_offset_time_string` formats a time at a fixed UTC offset given in
    hours, which may be fractional.
  - `current_time_string` formats the current time.
- `promptbits.vcs`:
  - `truncate_branch` shortens a branch name by whole graphemes;
  - `id_to_hex_abbrev` abbreviates a commit hash;
  - `describe_state` describes a `RepoState`, including rebase progress read
    from `.git`;
  - `get_hg_branch_name` and `get_hg_current_bookmark` read the Mercurial
    branch and bookmark.
- `promptbits.environment`:
  - `get_env_value` reads an environment variable;
  - `trim_hostname` cuts a hostname short;
  - `parse_jobs` reads a background job count;
  - `nix_shell_label` names the nix-shell;
  - `should_show_username` and `get_uid` decide when to show the username;
  - `format_kib`, `format_memory` and `memory_percent_sign` format memory
    usage.

## Examples

```python
from datetime import datetime, timezone

from promptbits.java import format_java_version
from promptbits.package import format_version
from promptbits.paths import truncate
from promptbits.time_format import create_offset_time_string

truncate("~/projects/app/src/lib", 3)        # "app/src/lib"
format_version(' "0.1.0" ')                  # "v0.1.0"
format_java_version(
    "OpenJDK 64-Bit Server VM (12.0.2+10) for linux-amd64 JRE (12.0.2+10)"
)                                            # "v12.0.2"

moment = datetime(2014, 7, 8, 15, 36, 47, tzinfo=timezone.utc)
create_offset_time_string(moment, "+5.75", "%r")   # "09:21:47 PM"
```

`create_offset_time_string` raises `InvalidOffsetError` in two cases: when
the offset is not a number, and when it is not strictly between -24 and 24
hours. `current_time_string` does not raise. When the offset is invalid, it
uses local time instead.

## What it does not do

promptbits is a library only. It has no command-line program. It does not
assemble a whole prompt, and it does not read a configuration file. Some
values it does not gather itself, and you must pass them in:

- the repository state, as a `RepoState` value;
- the memory figures, in KiB;
- the hostname.

It does not count staged, modified or untracked files. It does not report
how far a branch is ahead of or behind its upstream. It keeps no list of
prompt parts or descriptions of them.