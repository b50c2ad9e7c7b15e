"""
Source tree discovery: library root resolution, category directories and
the recursive file walk.
"""

from __future__ import annotations

import logging
import os
import re

from .model import DEFAULT_CATEGORY

log = logging.getLogger("mkdocs.plugins.libcatalog")

DEFAULT_LIBRARY_DIRS = ["libft", "lib", "src"]
SOURCE_EXTENSIONS = [".c", ".h"]
EXCLUDED_DIRS = frozenset(
    {
        "obj",
        "build",
        "bin",
        "dist",
        "out",
        "output",
        "target",
        "docs",
        "node_modules",
        "__pycache__",
        ".git",
    }
)
MAX_SCAN_DEPTH = 32


class CatalogError(RuntimeError):
    pass


class SourceRootError(CatalogError):
    pass


def _norm_exts(extensions):
    return {(e if e.startswith(".") else f".{e}").lower() for e in extensions}


def resolve_library_root(root, library_dirs=None):
    if not os.path.isdir(root):
        raise SourceRootError(f"source root missing: {root}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise SourceRootError(f"source root not readable: {root}")
    for d in DEFAULT_LIBRARY_DIRS if library_dirs is None else library_dirs:
        candidate = os.path.join(root, d)
        if os.path.isdir(candidate):
            return candidate
    return root


def _skip_unreadable(exc):
    log.warning("libcatalog: cannot read %s: %s", exc.filename, exc.strerror)


def walk_files(root, extensions, max_depth=None, exclude=None):
    """Yield matching files under ``root`` in sorted, depth-first order.

    Symlinks are followed; a directory already visited through another
    link is not entered twice. Directory names in ``exclude`` and dot
    directories are pruned when ``exclude`` is given.
    """
    exts = _norm_exts(extensions)
    seen = set()
    base_depth = root.rstrip(os.sep).count(os.sep)
    for dirpath, dirnames, fnames in os.walk(root, onerror=_skip_unreadable, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        if max_depth is not None and dirpath.rstrip(os.sep).count(os.sep) - base_depth >= max_depth:
            dirnames[:] = []
        if exclude is not None:
            dirnames[:] = [d for d in dirnames if not d.startswith(".") and d not in exclude]
        dirnames.sort()
        for fn in sorted(fnames):
            if os.path.splitext(fn)[1].lower() in exts:
                path = os.path.join(dirpath, fn)
                if os.path.isfile(path):
                    yield path


def _has_source(path, extensions):
    return next(walk_files(path, extensions, max_depth=MAX_SCAN_DEPTH), None) is not None


def discover_categories(lib_root, extensions=None, exclude=()):
    excluded = EXCLUDED_DIRS | set(exclude)
    exts = extensions or SOURCE_EXTENSIONS
    try:
        entries = sorted(os.listdir(lib_root))
    except OSError as exc:
        log.warning("libcatalog: cannot list %s: %s", lib_root, exc)
        return []

    categories = []
    for name in entries:
        if name.startswith(".") or name in excluded:
            continue
        path = os.path.join(lib_root, name)
        if os.path.isdir(path) and _has_source(path, exts):
            categories.append(name)
    return sorted(set(categories))


def category_of(path, lib_root):
    """Return ``(category, category_path)`` for a file below ``lib_root``."""
    rel = os.path.relpath(os.path.dirname(os.path.abspath(path)), os.path.abspath(lib_root))
    parts = [p for p in rel.split(os.sep) if p and p != os.curdir]
    if not parts or parts[0] == os.pardir:
        return DEFAULT_CATEGORY, ""
    return parts[0], "/".join(parts)


# Makefile "VERSION = 1.2", header "# define LIBFT_VERSION "1.2.3"", "version: 1.2"
_VERSION_RE = re.compile(
    r"""^\s*(?:#\s*define\s+)?['"]?\w*version\w*['"]?\s*(?::?=|:|\s)\s*['"]?v?(\d+\.\d+(?:\.\d+)?)""",
    re.IGNORECASE,
)


def read_version(filepath):
    """First version number declared in a Makefile, header or config file."""
    try:
        with open(filepath, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                m = _VERSION_RE.match(line)
                if m:
                    return m.group(1)
    except OSError as exc:
        log.warning("libcatalog: cannot read version file %s: %s", filepath, exc)
    return None
