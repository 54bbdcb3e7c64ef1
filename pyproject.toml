[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "htmlkit"
version = "0.1.0"
description = "A small, forgiving HTML tokenizer that reports byte spans for every token"
requires-python = ">=3.10"
dependencies = []
keywords = ["html", "tokenizer", "lexer", "markup", "spans"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["htmlkit"]

[tool.hatch.build.targets.sdist]
include = ["htmlkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
