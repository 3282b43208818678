"""Python language configuration."""

from __future__ import annotations

from fim.language import LanguageConfig, register

_ts_language = None
try:
    import tree_sitter_python as tspython
    from tree_sitter import Language

    _ts_language = Language(tspython.language())
except ImportError:
    pass


PYTHON = LanguageConfig(
    name='python',
    extensions=['.py', '.pyi'],
    line_comment_markers=('#',),
    block_comment_delimiters=[('"""', '"""'), ("'''", "'''")],
    syntax_patterns=[
        r'^\s*(?:async\s+)?def\s+\w+\s*\(',
        r'^\s*class\s+\w+',
        r'^\s*(?:from\s+[\w.]+\s+)?import\s+\w+',
        r'^\s*[A-Za-z_][\w.]*\s*(?:\[[^\]]*\])?\s*[-+*/%|&]?=(?!=)',
        r'^\s*(?:if|elif|for|while|with|try|return|yield)\b',
    ],
    # Lowercase names only (locals and functions).
    identifier_pattern=r'\b[a-z_][a-z0-9_]*\b',
    keywords=frozenset({
        'and', 'as', 'assert', 'async', 'await', 'break', 'class', 'continue',
        'def', 'del', 'elif', 'else', 'except', 'finally', 'for', 'from',
        'global', 'if', 'import', 'in', 'is', 'lambda', 'nonlocal', 'not',
        'or', 'pass', 'raise', 'return', 'try', 'while', 'with', 'yield',
        'self', 'cls',
    }),
    subtle_bug_swaps=[
        ('==', '='),
        (' is ', ' == '),
        (' and ', ' or '),
        ('range(len(', 'range(1, len('),
        ('.append(', '.extend('),
    ],
    type_error_swaps=[
        ("'", '"'),
        ('str(', 'int('),
        ('int(', 'str('),
        ('.split()', '.strip()'),
        ('[]', '{}'),
    ],
    ts_language=_ts_language,
    cursor_node_types=frozenset({
        'if_statement', 'function_definition', 'call', 'assignment',
        'for_statement', 'while_statement',
    }),
)

register(PYTHON)
