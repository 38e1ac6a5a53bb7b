[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "irishub"
version = "0.1.0"
description = "Guardian, mint and EVM fee logic for a proof-of-stake ledger, with an in-memory store, bank and bech32 addresses"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "ledger", "inflation", "minting", "bech32", "guardian", "eip1559"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["irishub"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
