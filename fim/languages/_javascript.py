"""JavaScript and TypeScript language configurations."""

from __future__ import annotations

from fim.language import LanguageConfig, register
from fim.languages._shared import C_FAMILY_BLOCK_COMMENTS, C_FAMILY_LINE_COMMENTS

_ts_js = None
try:
    import tree_sitter_javascript as tsjs
    from tree_sitter import Language

    _ts_js = Language(tsjs.language())
except ImportError:
    pass

_ts_ts = None
try:
    import tree_sitter_typescript as tsts
    from tree_sitter import Language

    _ts_ts = Language(tsts.language_typescript())
except ImportError:
    pass


_JS_SYNTAX_PATTERNS = [
    r'\bfunction\b\s*\w*\s*\(',
    r'\b(?:const|let|var)\s+[\w$\[{]',
    r'\bclass\s+\w+',
    r'\b(?:import|export)\b',
    r'=>',
    r'\b(?:if|for|while|switch|return)\b',
]

_JS_KEYWORDS = frozenset({
    'async', 'await', 'break', 'case', 'catch', 'class', 'const', 'continue',
    'debugger', 'default', 'delete', 'do', 'else', 'export', 'extends',
    'false', 'finally', 'for', 'from', 'function', 'if', 'import', 'in',
    'instanceof', 'let', 'new', 'null', 'of', 'return', 'super', 'switch',
    'this', 'throw', 'true', 'try', 'typeof', 'undefined', 'var', 'void',
    'while', 'yield',
})

_JS_SUBTLE_BUG_SWAPS = [
    ('===', '=='),
    ('!==', '!='),
    ('let ', 'var '),
    ('.push(', '.concat('),
    ('&&', '||'),
]

_JS_TYPE_ERROR_SWAPS = [
    ('toString()', 'toNumber()'),
    ('parseInt(', 'parseFloat('),
    ('[]', '{}'),
    ("'", '`'),
]

_JS_CURSOR_NODE_TYPES = frozenset({
    'if_statement', 'function_declaration', 'call_expression',
    'assignment_expression', 'for_statement',
})


JAVASCRIPT = LanguageConfig(
    name='javascript',
    extensions=['.js', '.jsx', '.mjs', '.cjs'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=_JS_SYNTAX_PATTERNS,
    keywords=_JS_KEYWORDS,
    subtle_bug_swaps=_JS_SUBTLE_BUG_SWAPS,
    type_error_swaps=_JS_TYPE_ERROR_SWAPS,
    ts_language=_ts_js,
    cursor_node_types=_JS_CURSOR_NODE_TYPES,
)

register(JAVASCRIPT)

TYPESCRIPT = LanguageConfig(
    name='typescript',
    extensions=['.ts', '.tsx', '.mts', '.cts'],
    line_comment_markers=C_FAMILY_LINE_COMMENTS,
    block_comment_delimiters=C_FAMILY_BLOCK_COMMENTS,
    syntax_patterns=_JS_SYNTAX_PATTERNS + [r'\b(?:interface|type|enum)\s+\w+'],
    keywords=_JS_KEYWORDS | {'interface', 'type', 'enum', 'implements', 'private', 'public', 'readonly'},
    subtle_bug_swaps=_JS_SUBTLE_BUG_SWAPS,
    type_error_swaps=_JS_TYPE_ERROR_SWAPS,
    ts_language=_ts_ts,
    cursor_node_types=_JS_CURSOR_NODE_TYPES,
)

register(TYPESCRIPT)
