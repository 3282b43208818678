"""Rust language configuration."""

from __future__ import annotations

from fim.language import LanguageConfig, register
from fim.languages._shared import (
    C_FAMILY_BLOCK_COMMENTS,
    C_FAMILY_CONTROL_PATTERNS,
    C_FAMILY_LINE_COMMENTS,
    GENERIC_SUBTLE_BUG_SWAPS,
)

_ts_language = None
try:
    import tree_sitter_rust as tsrust
    from tree_sitter import Language

    _ts_language = Language(tsrust.language())
except ImportError:
    pass


RUST = LanguageConfig(
    name='rust',
    extensions=['.rs'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=[
        r'^\s*(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?fn\s+\w+',
        r'^\s*(?:pub\s+)?(?:struct|enum|trait|impl|mod)\b',
        r'^\s*use\s+[\w:]+',
        r'\blet\s+(?:mut\s+)?\w+',
    ] + C_FAMILY_CONTROL_PATTERNS,
    keywords=frozenset({
        'as', 'async', 'await', 'break', 'const', 'continue', 'crate', 'else',
        'enum', 'extern', 'false', 'fn', 'for', 'if', 'impl', 'in', 'let',
        'loop', 'match', 'mod', 'move', 'mut', 'pub', 'ref', 'return', 'self',
        'Self', 'static', 'struct', 'super', 'trait', 'true', 'type', 'unsafe',
        'use', 'where', 'while',
    }),
    subtle_bug_swaps=GENERIC_SUBTLE_BUG_SWAPS + [('..=', '..'), ('.unwrap_or(', '.unwrap_or_default(')],
    type_error_swaps=[
        ('i32', 'u32'),
        ('&str', 'String'),
        ('Vec::new()', 'HashMap::new()'),
    ],
    ts_language=_ts_language,
    cursor_node_types=frozenset({
        'if_expression', 'function_item', 'call_expression',
        'assignment_expression', 'let_declaration', 'for_expression',
    }),
    cursor_field_names=('body', 'consequence', 'arguments', 'right', 'value'),
)

register(RUST)
