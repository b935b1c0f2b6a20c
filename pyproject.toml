[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arclint"
version = "0.1.0"
description = "Lints for ARC proposal documents: preamble headers, section layout and cross-references"
requires-python = ">=3.10"
dependencies = [
    "markdown-it-py",
]
keywords = ["lint", "linter", "markdown", "proposals", "arc", "preamble"]
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
    "Topic :: Software Development :: Quality Assurance",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["arclint"]

[tool.pytest.ini_options]
addopts = "-ra"
