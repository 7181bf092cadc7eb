[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "strictjson"
version = "0.1.0"
description = "A strict JSON reader with precise line and column error reporting and streaming of concatenated values."
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "deserializer", "streaming", "strict"]
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
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["strictjson"]

[tool.pytest.ini_options]
addopts = "-ra"
