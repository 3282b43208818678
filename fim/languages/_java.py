"""Java language configuration."""

from __future__ import annotations

from fim.language import LanguageConfig, register
from fim.languages._shared import (
    C_FAMILY_BLOCK_COMMENTS,
    C_FAMILY_CONTROL_PATTERNS,
    C_FAMILY_KEYWORDS,
    C_FAMILY_LINE_COMMENTS,
    GENERIC_SUBTLE_BUG_SWAPS,
    GENERIC_TYPE_ERROR_SWAPS,
)

_ts_language = None
try:
    import tree_sitter_java as tsjava
    from tree_sitter import Language

    _ts_language = Language(tsjava.language())
except ImportError:
    pass


JAVA = LanguageConfig(
    name='java',
    extensions=['.java'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=[
        r'\b(?:public|private|protected|static|final|abstract)\b',
        r'\b(?:class|interface|enum|record)\s+\w+',
        r'^\s*(?:import|package)\s+[\w.]+',
    ] + C_FAMILY_CONTROL_PATTERNS,
    keywords=C_FAMILY_KEYWORDS | {
        'public', 'private', 'protected', 'class', 'interface', 'extends',
        'implements', 'import', 'package', 'throws', 'throw', 'try', 'catch',
        'finally', 'final', 'abstract', 'boolean', 'byte', 'super',
        'instanceof', 'synchronized', 'var',
    },
    subtle_bug_swaps=GENERIC_SUBTLE_BUG_SWAPS,
    type_error_swaps=GENERIC_TYPE_ERROR_SWAPS,
    ts_language=_ts_language,
    cursor_node_types=frozenset({
        'if_statement', 'method_declaration', 'method_invocation',
        'assignment_expression', 'for_statement',
    }),
)

register(JAVA)
