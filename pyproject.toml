[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowcli"
version = "0.1.0"
description = "Build, sign, send, decode and inspect Flow blockchain transactions"
requires-python = ">=3.10"
keywords = ["flow", "blockchain", "transactions", "rlp", "cadence"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
flowcli-version = "flowcli.version:main"

[tool.hatch.build.targets.wheel]
packages = ["flowcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
