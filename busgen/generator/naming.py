"""Name conversion between D-Bus member names and Rust identifiers."""

import re

RUST_KEYWORDS = frozenset(
    [
        "Self",
        "abstract",
        "as",
        "async",
        "await",
        "become",
        "box",
        "break",
        "const",
        "continue",
        "crate",
        "do",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "final",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "macro",
        "match",
        "mod",
        "move",
        "mut",
        "override",
        "priv",
        "pub",
        "ref",
        "return",
        "self",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "try",
        "type",
        "typeof",
        "union",
        "unsafe",
        "unsized",
        "use",
        "virtual",
        "where",
        "while",
        "yield",
    ]
)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def to_snake_case(name: str) -> str:
    """Convert `SomeName`, `someName` or `Some-Name` to `some_name`."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _CASE_BOUNDARY.sub(r"\1_\2", name)
    return _SEPARATORS.sub("_", name).strip("_").lower()


def pascal_case(name: str) -> str:
    """Convert `some_name` to `SomeName`, the way zbus derives member names."""
    result = []
    capitalize = True
    for ch in name:
        if ch == "_":
            capitalize = True
        elif capitalize:
            result.append(ch.upper())
            capitalize = False
        else:
            result.append(ch)
    return "".join(result)


def to_identifier(name: str) -> str:
    """Make `name` usable as a Rust identifier."""
    if name in RUST_KEYWORDS:
        return f"{name}_"
    return name.replace("-", "_")


def member_identifier(name: str) -> str:
    """Rust function name for a method, signal or property."""
    return to_identifier(to_snake_case(name))


def needs_rename(wire_name: str, identifier: str) -> bool:
    """Whether zbus would derive a different wire name from `identifier`."""
    return pascal_case(identifier) != wire_name
