"""
Catalog data model.

Holds the per-function records, the ordered catalog that owns them, the JSON
round trip used by renderers, and the derived category tree.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field

NO_DESCRIPTION = "No description available."
NO_RETURN_VALUE = "Return value description not available."
DEFAULT_CATEGORY = "misc"


def placeholder_prototype(name):
    return f"/* Generated prototype for {name} */"


@dataclass
class Parameter:
    name: str
    type_name: str = ""
    description: str = ""


@dataclass
class Example:
    title: str
    code: str
    output: str | None = None


def default_examples(name):
    return [
        Example(
            title=f"Basic usage of {name}",
            code=f"// Example usage of {name}\n// TODO: Add real example",
        )
    ]


def normalize_category_path(path):
    """Join the non-empty segments of ``path`` with ``/``."""
    parts = [p for p in path.replace("\\", "/").split("/") if p.strip()]
    return "/".join(p.strip() for p in parts)


@dataclass
class FunctionRecord:
    name: str
    category: str = DEFAULT_CATEGORY
    # Nested directory path such as "data_structures/vector"; empty means
    # the same as ``category``
    category_path: str = ""
    tags: list[str] = field(default_factory=list)
    prototype: str = ""
    description: str = NO_DESCRIPTION
    parameters: list[Parameter] = field(default_factory=list)
    return_value: str = NO_RETURN_VALUE
    examples: list[Example] = field(default_factory=list)
    complexity: str | None = None
    notes: list[str] = field(default_factory=list)
    see_also: list[str] = field(default_factory=list)
    # Manual override fields
    updated_at: str | None = None
    author_role: str | None = None
    related: list[str] = field(default_factory=list)
    manual_path: str | None = None
    manual_html: str | None = None

    def __post_init__(self):
        if not self.prototype:
            self.prototype = placeholder_prototype(self.name)
        if not self.examples:
            self.examples = default_examples(self.name)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data, *, name=None):
        """Build a record from a JSON object, validating field types.

        Raises ``ValueError`` on anything that does not fit the schema.
        Missing fields fall back to the same placeholders extracted
        records use.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        rec_name = data.get("name") or name
        if not rec_name or not isinstance(rec_name, str):
            raise ValueError("record has no usable name")

        kwargs = {"name": rec_name}
        for key in ("category", "category_path", "prototype", "description", "return_value"):
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string")
            kwargs[key] = value
        for key in ("complexity", "updated_at", "author_role", "manual_path", "manual_html"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string or null")
            kwargs[key] = value
        for key in ("tags", "notes", "see_also", "related"):
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"field {key!r} must be a list of strings")
            kwargs[key] = list(value)

        try:
            kwargs["parameters"] = [Parameter(**p) for p in data.get("parameters") or []]
            kwargs["examples"] = [Example(**e) for e in data.get("examples") or []]
        except TypeError as exc:
            raise ValueError(f"bad parameters/examples entry: {exc}") from exc

        path = normalize_category_path(kwargs.get("category_path", ""))
        if not path and "/" in kwargs.get("category", ""):
            path = normalize_category_path(kwargs["category"])
        kwargs["category_path"] = path
        # category is always the first segment of a non-empty path
        if path:
            kwargs["category"] = path.split("/", 1)[0]
        elif not kwargs.get("category"):
            kwargs["category"] = DEFAULT_CATEGORY
        if not kwargs.get("description"):
            kwargs.pop("description", None)
        if not kwargs.get("return_value"):
            kwargs.pop("return_value", None)
        return cls(**kwargs)


@dataclass
class Catalog:
    name: str = "libft"
    version: str = "1.0.0"
    description: str = ""
    author: str = ""
    categories: list[str] = field(default_factory=list)
    functions: dict[str, FunctionRecord] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def __contains__(self, name):
        return name in self.functions

    def __len__(self):
        return len(self.functions)

    def add(self, record):
        """Insert ``record`` unless its name is already known."""
        if record.name in self.functions:
            return False
        self.functions[record.name] = record
        self.order.append(record.name)
        return True

    def replace(self, record):
        """Replace any existing record wholesale; position in order is kept."""
        if record.name not in self.functions:
            self.order.append(record.name)
        self.functions[record.name] = record

    def records(self):
        return [self.functions[n] for n in self.order]

    def to_dict(self):
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "categories": list(self.categories),
            "functions": {n: r.to_dict() for n, r in self.functions.items()},
            "order": list(self.order),
        }

    @classmethod
    def from_dict(cls, data):
        functions = {
            n: FunctionRecord.from_dict(r, name=n) for n, r in data.get("functions", {}).items()
        }
        order = [n for n in data.get("order", []) if n in functions]
        # Older catalogs carry no order; fall back to key order
        seen = set(order)
        order += [n for n in functions if n not in seen]
        return cls(
            name=data.get("name", ""),
            version=data.get("version", ""),
            description=data.get("description", ""),
            author=data.get("author", ""),
            categories=list(data.get("categories", [])),
            functions=functions,
            order=order,
        )


def write_catalog(catalog, path):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(catalog.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")


def read_catalog(path):
    with open(path, "r", encoding="utf-8") as f:
        return Catalog.from_dict(json.load(f))


# -- derived category tree --


@dataclass
class CategoryNode:
    name: str
    path: str
    children: dict[str, CategoryNode] = field(default_factory=dict)
    functions: list[str] = field(default_factory=list)


def category_nodes(paths):
    """Every path in ``paths`` plus all of its strict prefixes, sorted."""
    out = set()
    for p in paths:
        p = normalize_category_path(p)
        if not p:
            continue
        parts = p.split("/")
        for i in range(1, len(parts) + 1):
            out.add("/".join(parts[:i]))
    return sorted(out)


def build_category_tree(catalog):
    root = CategoryNode(name="", path="")
    for rec in catalog.records():
        path = rec.category_path or rec.category
        node = root
        walked = []
        for part in path.split("/"):
            walked.append(part)
            if part not in node.children:
                node.children[part] = CategoryNode(name=part, path="/".join(walked))
            node = node.children[part]
        node.functions.append(rec.name)
    return root
