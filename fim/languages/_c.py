"""C and C++ language configurations."""

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

_ts_c = None
try:
    import tree_sitter_c as tsc
    from tree_sitter import Language

    _ts_c = Language(tsc.language())
except ImportError:
    pass

_ts_cpp = None
try:
    import tree_sitter_cpp as tscpp
    from tree_sitter import Language

    _ts_cpp = Language(tscpp.language())
except ImportError:
    pass


C = LanguageConfig(
    name='c',
    extensions=['.c', '.h'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=[
        r'^\s*#\s*(?:include|define|ifn?def)\b',
        r'\b(?:struct|typedef|enum|union)\b',
        r'\b(?:int|char|void|float|double|long|unsigned)\s+\**\w+',
    ] + C_FAMILY_CONTROL_PATTERNS,
    keywords=C_FAMILY_KEYWORDS,
    subtle_bug_swaps=GENERIC_SUBTLE_BUG_SWAPS,
    type_error_swaps=GENERIC_TYPE_ERROR_SWAPS,
    ts_language=_ts_c,
    cursor_node_types=frozenset({
        'if_statement', 'function_definition', 'call_expression',
        'assignment_expression', 'for_statement',
    }),
)

register(C)

CPP = LanguageConfig(
    name='cpp',
    extensions=['.cpp', '.cc', '.cxx', '.hpp', '.hxx'],
    line_comment_markers=C.line_comment_markers,
    block_comment_delimiters=C.block_comment_delimiters,
    syntax_patterns=C.syntax_patterns + [
        r'\b(?:class|namespace|template|using)\b',
        r'\bstd::',
    ],
    keywords=C_FAMILY_KEYWORDS | {
        'class', 'namespace', 'template', 'typename', 'using', 'public',
        'private', 'protected', 'virtual', 'override', 'auto', 'bool',
        'nullptr', 'try', 'catch', 'throw', 'std',
    },
    subtle_bug_swaps=C.subtle_bug_swaps,
    type_error_swaps=C.type_error_swaps,
    ts_language=_ts_cpp,
    cursor_node_types=C.cursor_node_types,
)

register(CPP)
