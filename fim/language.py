"""
Language configuration registry.

Each language bundles its language-specific tables into a single
LanguageConfig dataclass: comment syntax and construct patterns for the
quality gate, identifier rules and mutation tables for the degradation
engine, and an optional tree-sitter grammar for AST cursor selection.
A module-level registry maps language names to configs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# LanguageConfig dataclass
# ---------------------------------------------------------------------------


@dataclass
class LanguageConfig:
    name: str  # "python"
    extensions: list[str]  # [".py"]

    # Comment syntax
    line_comment_markers: tuple[str, ...] = ()
    block_comment_delimiters: list[tuple[str, str]] = field(default_factory=list)

    # Quality gate: any match counts as a recognizable construct
    syntax_patterns: list[str] = field(default_factory=list)

    # Degradation
    identifier_pattern: str = r"(?<![\w$])[A-Za-z_$][\w$]*(?![\w$])"
    keywords: frozenset[str] = field(default_factory=frozenset)
    subtle_bug_swaps: list[tuple[str, str]] = field(default_factory=list)
    type_error_swaps: list[tuple[str, str]] = field(default_factory=list)

    # Tree-sitter (None if grammar not installed)
    ts_language: object | None = None
    cursor_node_types: frozenset[str] = field(default_factory=frozenset)
    cursor_field_names: tuple[str, ...] = ("body", "consequence", "arguments", "right")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_REGISTRY: dict[str, LanguageConfig] = {}


def register(config: LanguageConfig) -> None:
    _REGISTRY[config.name] = config


def get_language(name: str) -> LanguageConfig:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown language: {name!r}. Registered: {list(_REGISTRY.keys())}")
    return _REGISTRY[name]


def find_language(name: str | None) -> LanguageConfig | None:
    """Like get_language, but returns None for unknown or empty names."""
    if not name:
        return None
    return _REGISTRY.get(name.lower())


def registered_languages() -> list[str]:
    return list(_REGISTRY.keys())


def language_for_path(path: str) -> str:
    """Map a file path to a registered language name by extension, or "unknown"."""
    ext = os.path.splitext(path)[1].lower()
    for config in _REGISTRY.values():
        if ext in config.extensions:
            return config.name
    return "unknown"


# Importing the package registers every bundled language.
import fim.languages  # noqa: E402,F401
