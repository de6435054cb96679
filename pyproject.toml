[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "larktool"
version = "0.1.0"
description = "Helpers for Lark tooling: OAuth scope groups, time parsing, event conflicts, a local mail header cache and Minutes summaries"
requires-python = ">=3.10"
keywords = ["lark", "imap", "email", "calendar", "sqlite", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Email",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["larktool"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
