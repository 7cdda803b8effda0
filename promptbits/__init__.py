"""Building blocks for a shell prompt: toolchain versions, VCS state, environment details and styled segments."""

__version__ = "0.1.0"