"""
Catalog assembly.

Runs discovery, implementation parsing, header fallback and manual
overrides in that order. Later phases replace whole records, never single
fields, and a name keeps the position in ``order`` it got when first seen.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field

from .discover import (
    DEFAULT_LIBRARY_DIRS,
    EXCLUDED_DIRS,
    SOURCE_EXTENSIONS,
    CatalogError,
    SourceRootError,
    category_of,
    discover_categories,
    resolve_library_root,
    walk_files,
)
from .manual import DEFAULT_MANUAL_DIRS, load_overrides, manual_dirs
from .model import Catalog, FunctionRecord, placeholder_prototype
from .parser import (
    DEFAULT_FUNCTION_PATTERN,
    extract_description,
    extract_prototype,
    generate_tags,
    parse_declarations,
)

log = logging.getLogger("mkdocs.plugins.libcatalog")

__all__ = ["BuildOptions", "CatalogBuilder", "CatalogError", "SourceRootError", "build_catalog"]


@dataclass
class BuildOptions:
    source_root: str
    library_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_LIBRARY_DIRS))
    impl_extensions: list[str] = field(default_factory=lambda: [".c"])
    decl_extensions: list[str] = field(default_factory=lambda: [".h"])
    exclude_dirs: list[str] = field(default_factory=list)
    manual_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_MANUAL_DIRS))
    function_pattern: str = DEFAULT_FUNCTION_PATTERN
    entry_point: str = "main"
    name: str = "libft"
    version: str = "1.0.0"
    description: str = "42 School C Library - Extended standard library functions"
    author: str = ""


def _read_text(path):
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        log.warning("libcatalog: cannot read %s: %s", path, exc)
        return None


class CatalogBuilder:

    def __init__(self, options):
        self.options = options
        self._excluded = EXCLUDED_DIRS | set(options.exclude_dirs)
        self.lib_root = None
        self.catalog = None

    def build(self):
        opts = self.options
        try:
            re.compile(opts.function_pattern)
        except re.error as exc:
            raise CatalogError(f"bad function_pattern {opts.function_pattern!r}: {exc}") from exc

        self.lib_root = resolve_library_root(opts.source_root, opts.library_dirs)
        self.catalog = Catalog(
            name=opts.name,
            version=opts.version,
            description=opts.description,
            author=opts.author,
        )
        discovered = discover_categories(
            self.lib_root,
            (opts.impl_extensions + opts.decl_extensions) or SOURCE_EXTENSIONS,
            opts.exclude_dirs,
        )
        log.info("libcatalog: scanning %s, %d categories", self.lib_root, len(discovered))

        nimpl = self._parse_implementations()
        ndecl = self._parse_headers()
        nman = self._apply_overrides()

        cats = set(discovered)
        cats.update(r.category for r in self.catalog.functions.values())
        self.catalog.categories = sorted(cats)
        log.info(
            "libcatalog: %d functions (%d from sources, %d from headers, %d manual)",
            len(self.catalog),
            nimpl,
            ndecl,
            nman,
        )
        return self.catalog

    def _record(self, name, path, content, prototype):
        category, category_path = category_of(path, self.lib_root)
        return FunctionRecord(
            name=name,
            category=category,
            category_path=category_path,
            tags=generate_tags(name, content),
            prototype=prototype,
            description=extract_description(content),
        )

    def _parse_implementations(self):
        count = 0
        for path in walk_files(self.lib_root, self.options.impl_extensions, exclude=self._excluded):
            name = os.path.splitext(os.path.basename(path))[0]
            if name == self.options.entry_point or name in self.catalog:
                continue
            content = _read_text(path)
            if content is None:
                continue
            rec = self._record(name, path, content, extract_prototype(content, name))
            self.catalog.add(rec)
            count += 1
            log.debug("libcatalog: parsed %s (%s)", name, rec.category_path or rec.category)
        return count

    def _parse_headers(self):
        count = 0
        for path in walk_files(self.lib_root, self.options.decl_extensions, exclude=self._excluded):
            content = _read_text(path)
            if content is None:
                continue
            for name, _ in parse_declarations(content, self.options.function_pattern):
                if name in self.catalog:
                    continue
                rec = self._record(name, path, content, placeholder_prototype(name))
                self.catalog.add(rec)
                count += 1
                log.debug("libcatalog: declared only %s (%s)", name, path)
        return count

    def _apply_overrides(self):
        dirs = manual_dirs(self.lib_root, self.options.source_root, self.options.manual_dirs)
        overrides = load_overrides(dirs)
        for record in overrides.values():
            self.catalog.replace(record)
        return len(overrides)


def build_catalog(source_root, **kwargs):
    return CatalogBuilder(BuildOptions(source_root=source_root, **kwargs)).build()
