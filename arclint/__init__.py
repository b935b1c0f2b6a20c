"""Lints, preamble and Markdown parsing, and reporters for ARC proposal documents."""

__version__ = "0.1.0"