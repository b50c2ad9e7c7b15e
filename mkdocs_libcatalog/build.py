#!/usr/bin/env python3
"""
Build the function catalog without running MkDocs.

Usage:
    python -m mkdocs_libcatalog.build path/to/libft
    python -m mkdocs_libcatalog.build . -o dist --no-search-index
    python -m mkdocs_libcatalog.build . --library-dir libft --pattern 'ft_\\w+'
"""

import argparse
import logging
import os
import sys

from .catalog import BuildOptions, CatalogBuilder, CatalogError
from .discover import DEFAULT_LIBRARY_DIRS
from .manual import DEFAULT_MANUAL_DIRS
from .model import write_catalog
from .parser import DEFAULT_FUNCTION_PATTERN
from .search import write_search_index


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Generate a function catalog for a C library")
    p.add_argument("source", nargs="?", default=".", help="Source tree root (default: .)")
    p.add_argument("-o", "--output", default="dist", help="Output directory (default: dist)")
    p.add_argument(
        "--library-dir",
        nargs="+",
        default=list(DEFAULT_LIBRARY_DIRS),
        help="Subdirectories tried as the category root (default: libft lib src)",
    )
    p.add_argument(
        "--manual-dir",
        nargs="+",
        default=list(DEFAULT_MANUAL_DIRS),
        help="Folders scanned for manual override records",
    )
    p.add_argument("--exclude", nargs="+", default=[], help="Extra directory names to ignore")
    p.add_argument(
        "--pattern",
        default=DEFAULT_FUNCTION_PATTERN,
        help="Regex for function names in header declarations",
    )
    p.add_argument("--name", default="libft", help="Library name")
    p.add_argument("--version", dest="lib_version", default="1.0.0", help="Library version")
    p.add_argument("--author", default="", help="Library author")
    p.add_argument(
        "--no-search-index", action="store_true", help="Do not write search_index.json"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every parsed file")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s"
    )

    options = BuildOptions(
        source_root=args.source,
        library_dirs=args.library_dir,
        exclude_dirs=args.exclude,
        manual_dirs=args.manual_dir,
        function_pattern=args.pattern,
        name=args.name,
        version=args.lib_version,
        author=args.author,
    )
    try:
        catalog = CatalogBuilder(options).build()
    except CatalogError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    write_catalog(catalog, os.path.join(args.output, "metadata.json"))
    if not args.no_search_index:
        write_search_index(catalog, os.path.join(args.output, "search_index.json"))

    print(
        f"{len(catalog)} functions in {len(catalog.categories)} categories "
        f"written to {args.output}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
