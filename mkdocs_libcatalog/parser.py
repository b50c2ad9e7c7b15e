"""
Heuristic metadata extraction from C source text.

Nothing here parses C properly. Each field is recovered by an ordered list
of regex matchers where the first useful match wins, and every miss falls
back to a fixed placeholder so a record is always complete.
"""

from __future__ import annotations

import re

from .model import NO_DESCRIPTION, placeholder_prototype

# -- prototype extraction --

# A line that opens a comment or a preprocessor directive cannot start a prototype
_NOT_COMMENT = r"^(?![ \t]*(?:/[/*]|\*|#))[^\n/]*?"


def _definition_matcher(name):
    return re.compile(_NOT_COMMENT + r"\b" + re.escape(name) + r"\b[^{;]*\{", re.MULTILINE)


def _declaration_matcher(name):
    return re.compile(_NOT_COMMENT + r"\b" + re.escape(name) + r"\b[^{;]*;", re.MULTILINE)


def _loose_matcher(name):
    return re.compile(r"\b" + re.escape(name) + r"\s*\([^(){};]*\)\s*[{;]")


_PROTOTYPE_MATCHERS = (_definition_matcher, _declaration_matcher, _loose_matcher)


def extract_prototype(content, name):
    for make in _PROTOTYPE_MATCHERS:
        m = make(name).search(content)
        if not m:
            continue
        proto = m.group(0).rstrip().rstrip("{;").strip()
        if len(proto) > len(name):
            return proto
    return placeholder_prototype(name)


# -- tags --

_NAME_RULES = (
    (lambda n: n.startswith("ft_str"), "string"),
    (lambda n: n.startswith("ft_mem"), "memory"),
    (lambda n: n.startswith("ft_is"), "validation"),
    (lambda n: n.startswith("ft_to"), "conversion"),
    (lambda n: "printf" in n, "output"),
    (lambda n: "scanf" in n, "input"),
    (lambda n: "list" in n, "linked_list"),
    (lambda n: "queue" in n, "queue"),
    (lambda n: "vector" in n, "vector"),
    (lambda n: "matrix" in n, "matrix"),
    (lambda n: "sort" in n, "sorting"),
    (lambda n: "search" in n, "searching"),
    (lambda n: "map" in n, "data_structure"),
    (lambda n: "window" in n, "graphics"),
    (lambda n: "render" in n, "rendering"),
    (lambda n: "pool" in n or "arena" in n or "slab" in n, "memory_management"),
)

_CONTENT_RULES = (
    (("malloc",), "allocation"),
    (("free",), "cleanup"),
    (("while", "for"), "iteration"),
    (("recursive", "recursion"), "recursion"),
    (("mlx_",), "minilibx"),
    (("pthread",), "threading"),
)

ADVANCED_MARKERS = frozenset({"recursion", "threading"})
INTERMEDIATE_MARKERS = frozenset({"allocation", "data_structure"})
DIFFICULTY_TAGS = ("basic", "intermediate", "advanced")


def difficulty(tags):
    if any(t in ADVANCED_MARKERS for t in tags):
        return "advanced"
    if any(t in INTERMEDIATE_MARKERS for t in tags):
        return "intermediate"
    return "basic"


def generate_tags(name, content):
    tags = [tag for rule, tag in _NAME_RULES if rule(name)]
    tags += [tag for needles, tag in _CONTENT_RULES if any(s in content for s in needles)]
    tags.append(difficulty(tags))
    return tags


# -- description --

_DESCRIPTION_PATTERNS = (
    re.compile(r"/\*\*\s*(.*?)\s*\*/", re.DOTALL),
    re.compile(r"/\*\s*(.*?)\s*\*/", re.DOTALL),
    re.compile(r"//\s*(.*)"),
)

# Banner lines of the 42 school file header
_DECORATION = ("*" * 16, ":::      ::::::::")
MIN_DESCRIPTION_LEN = 10


def clean_comment_text(text):
    """Flatten a comment body into one line of prose."""
    lines = []
    for line in text.split("\n"):
        s = line.strip().lstrip("*").strip()
        if not s or any(d in s for d in _DECORATION):
            continue
        lines.append(s)
    return " ".join(lines)


def extract_description(content):
    for pat in _DESCRIPTION_PATTERNS:
        m = pat.search(content)
        if not m:
            continue
        desc = clean_comment_text(m.group(1))
        if len(desc) > MIN_DESCRIPTION_LEN:
            return desc
    return NO_DESCRIPTION


# -- header declarations --

DEFAULT_FUNCTION_PATTERN = r"ft_\w+"


def _declaration_line_re(function_pattern):
    return re.compile(
        r"^[ \t]*(?!return\b|typedef\b)"
        r"(?P<rtype>[A-Za-z_][\w \t]*?[\w*][ \t*]*?)"
        r"[ \t*]*\b(?P<name>" + function_pattern + r")[ \t]*"
        r"\((?P<args>[^;{}()]*(?:\([^;{}()]*\)[^;{}()]*)*)\)[ \t]*;",
        re.MULTILINE,
    )


def parse_declarations(content, function_pattern=DEFAULT_FUNCTION_PATTERN):
    """Yield ``(name, declaration)`` for each prototype line in a header."""
    for m in _declaration_line_re(function_pattern).finditer(content):
        yield m.group("name"), " ".join(m.group(0).split()).rstrip(";")
