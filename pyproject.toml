[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "promptbits"
version = "0.1.0"
description = "Building blocks for a shell prompt: toolchain versions, VCS state, environment details and styled segments"
requires-python = ">=3.11"
keywords = ["prompt", "shell", "terminal", "git", "toolchain", "version"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Terminals",
]
dependencies = [
    "pyyaml",
    "regex",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["promptbits"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
