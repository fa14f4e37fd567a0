[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "armel"
version = "0.1.0"
description = "A linear (bump) arena allocator over a byte buffer, with alignment, rewind, reset and soft-fail modes."
requires-python = ">=3.10"
dependencies = []
keywords = ["arena", "allocator", "bump-allocator", "memory", "linear-allocator", "buffer"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
armel-bench = "armel.bench:main"
armel-demo = "armel.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["armel"]

[tool.hatch.build.targets.sdist]
include = ["armel", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
