"""Go language configuration."""

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
    import tree_sitter_go as tsgo
    from tree_sitter import Language

    _ts_language = Language(tsgo.language())
except ImportError:
    pass


GO = LanguageConfig(
    name='go',
    extensions=['.go'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=[
        r'^\s*func\s+(?:\([^)]*\)\s*)?\w+\s*\(',
        r'^\s*(?:package|import)\b',
        r'^\s*type\s+\w+\s+(?:struct|interface)\b',
        r'\b\w+\s*:=',
    ] + C_FAMILY_CONTROL_PATTERNS,
    keywords=frozenset({
        'break', 'case', 'chan', 'const', 'continue', 'default', 'defer',
        'else', 'fallthrough', 'for', 'func', 'go', 'goto', 'if', 'import',
        'interface', 'map', 'package', 'range', 'return', 'select', 'struct',
        'switch', 'type', 'var', 'nil', 'true', 'false',
    }),
    subtle_bug_swaps=GENERIC_SUBTLE_BUG_SWAPS + [('!= nil', '== nil')],
    type_error_swaps=[
        ('int', 'float64'),
        ('string(', '[]byte('),
        ('[]', 'map[string]'),
    ],
    ts_language=_ts_language,
    cursor_node_types=frozenset({
        'if_statement', 'function_declaration', 'call_expression',
        'assignment_statement', 'short_var_declaration', 'for_statement',
    }),
)

register(GO)
