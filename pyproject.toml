[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerlab"
version = "0.1.0"
description = "An in-memory ledger host with example contracts for learning events, authorization, errors, value types, conversions and validation"
requires-python = ">=3.10"
dependencies = []
keywords = ["ledger", "smart-contracts", "education", "events", "validation", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ledgerlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
