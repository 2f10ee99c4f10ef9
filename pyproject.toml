[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diskmonitors"
version = "0.1.0"
description = "Disk-head scheduling with monitors: SCAN with a driver intermediary, and C-SCAN with separate and nested monitors"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitor", "concurrency", "disk scheduling", "scan", "c-scan", "threads", "condition variables"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-timeout",
]

[project.scripts]
diskmonitors-intermediary = "diskmonitors.intermediary:main"
diskmonitors-separate = "diskmonitors.separate:main"
diskmonitors-nested = "diskmonitors.nested:main"

[tool.hatch.build.targets.wheel]
packages = ["diskmonitors"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
