"""
Hand-written override records.

Each ``*.json`` file under a documentation folder describes one function and
replaces whatever was extracted from the sources. A record may point at a
Markdown narrative (``manual_path``, relative to the record file) which is
rendered to HTML and attached.
"""

from __future__ import annotations

import json
import logging
import os

import markdown

from .discover import walk_files
from .model import DEFAULT_CATEGORY, FunctionRecord, normalize_category_path

log = logging.getLogger("mkdocs.plugins.libcatalog")

DEFAULT_MANUAL_DIRS = ["docs/manual", "docs/api", "docs"]
_MD_EXTENSIONS = ["fenced_code", "tables"]


def manual_dirs(lib_root, source_root, candidates=None):
    out = []
    seen = set()
    for base in (lib_root, source_root):
        for sub in DEFAULT_MANUAL_DIRS if candidates is None else candidates:
            path = os.path.normpath(os.path.join(base, sub))
            real = os.path.realpath(path)
            if real in seen or not os.path.isdir(path):
                continue
            seen.add(real)
            out.append(path)
    return out


def render_manual(path):
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return markdown.markdown(text, extensions=_MD_EXTENSIONS)


def _fill_categories(data, path, base_dir):
    category = data.get("category") or ""
    category_path = normalize_category_path(data.get("category_path") or "")
    if category and not category_path:
        category_path = normalize_category_path(category)
    elif category_path and not category:
        category = category_path.split("/", 1)[0]
    elif not category and not category_path and base_dir:
        rel = os.path.relpath(os.path.dirname(path), base_dir)
        if rel != os.curdir and not rel.startswith(os.pardir):
            category_path = normalize_category_path(rel.replace(os.sep, "/"))
            category = category_path.split("/", 1)[0]
    if category_path:
        category = category_path.split("/", 1)[0]
    data["category"] = category or DEFAULT_CATEGORY
    data["category_path"] = category_path


def _narrative_path(record_dir, manual_path, base_dir):
    """Resolve a relative narrative path; None if it leaves the docs tree."""
    if os.path.isabs(manual_path):
        log.warning("libcatalog: ignoring absolute manual_path %s", manual_path)
        return None
    narrative = os.path.normpath(os.path.join(record_dir, manual_path))
    top = os.path.realpath(base_dir or record_dir)
    if os.path.commonpath([top, os.path.realpath(narrative)]) != top:
        log.warning("libcatalog: manual_path %s is outside %s, ignored", manual_path, top)
        return None
    return narrative


def load_record(path, base_dir=None):
    """Read one override record. Raises ``ValueError`` if it is malformed."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if "functions" in data and "order" in data:
        raise ValueError("file is a generated catalog, not a function record")
    for key in ("category", "category_path"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValueError(f"field {key!r} must be a string")

    _fill_categories(data, path, base_dir)
    stem = os.path.splitext(os.path.basename(path))[0]
    record = FunctionRecord.from_dict(data, name=stem)

    record_dir = os.path.dirname(path)
    narrative = None
    if record.manual_path:
        narrative = _narrative_path(record_dir, record.manual_path, base_dir)
    else:
        sibling = os.path.join(record_dir, stem + ".md")
        if os.path.isfile(sibling):
            narrative = sibling
            record.manual_path = stem + ".md"
    if narrative:
        try:
            record.manual_html = render_manual(narrative)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("libcatalog: cannot read manual page %s: %s", narrative, exc)
    return record


def load_overrides(dirs):
    """Load every record under ``dirs``; later files win on name clashes."""
    overrides = {}
    seen = set()
    for base in dirs:
        for path in walk_files(base, [".json"]):
            real = os.path.realpath(path)
            if real in seen:
                continue
            seen.add(real)
            try:
                record = load_record(path, base)
            except (OSError, UnicodeDecodeError, ValueError) as exc:
                log.warning("libcatalog: skipping manual record %s: %s", path, exc)
                continue
            if record.name in overrides:
                log.debug("libcatalog: %s overrides earlier record for %s", path, record.name)
            overrides[record.name] = record
    log.info("libcatalog: %d manual records loaded", len(overrides))
    return overrides
