[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "drtscenario"
version = "0.1.0"
description = "Building blocks for smart-contract scenario test files: ordered JSON, address expressions, file resolution, scenario running and benchmark export"
requires-python = ">=3.10"
keywords = [
    "scenario",
    "smart-contract",
    "testing",
    "json",
    "ordered-json",
    "bech32",
    "keccak",
]
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
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["drtscenario"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
