"""Flat search index derived from a catalog, for client-side lookup."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field

_NAME_PREFIXES = ("ft",)


@dataclass
class SearchableFunction:
    name: str
    category: str
    tags: list[str] = field(default_factory=list)
    description: str = ""
    keywords: list[str] = field(default_factory=list)


@dataclass
class SearchIndex:
    functions: list[SearchableFunction] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def keywords_for(record):
    words = [w for w in record.name.lower().split("_") if w and w not in _NAME_PREFIXES]
    words += record.tags
    words += (record.category_path or record.category).split("/")
    # unique, first occurrence wins
    return list(dict.fromkeys(w for w in words if w))


def build_search_index(catalog):
    records = catalog.records()
    tags = sorted({t for r in records for t in r.tags})
    return SearchIndex(
        functions=[
            SearchableFunction(
                name=r.name,
                category=r.category,
                tags=list(r.tags),
                description=r.description,
                keywords=keywords_for(r),
            )
            for r in records
        ],
        categories=sorted(set(catalog.categories)),
        tags=tags,
    )


def write_search_index(catalog, path):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(build_search_index(catalog).to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
