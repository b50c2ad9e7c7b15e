"""
mkdocs-libcatalog: function catalog for C libraries, built for MkDocs.

Walks a tree of category directories, pulls a prototype, tags and a
description out of every function's source file, falls back to header
declarations for functions with no source yet, and lets hand-written JSON
records override anything. The result is one ordered ``metadata.json``.
"""

__version__ = "1.0.0"
