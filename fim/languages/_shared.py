"""Shared tables for language configurations."""

from __future__ import annotations

C_FAMILY_LINE_COMMENTS = ("//",)
C_FAMILY_BLOCK_COMMENTS = [("/*", "*/")]

# Used for brace languages without a dedicated mutation table.
GENERIC_SUBTLE_BUG_SWAPS = [
    ("++", "--"),
    ("&&", "||"),
    ("<=", "<"),
    (">=", ">"),
]

GENERIC_TYPE_ERROR_SWAPS = [
    ("int", "float"),
    ("float", "int"),
    ("[]", "{}"),
]

C_FAMILY_CONTROL_PATTERNS = [
    r"\b(?:if|for|while|switch|return)\b",
    r"\w+\s*\([^)]*\)\s*\{",
    r"\w+\s*=[^=]",
]

C_FAMILY_KEYWORDS = frozenset({
    "if", "else", "for", "while", "do", "switch", "case", "default", "break",
    "continue", "return", "goto", "sizeof", "struct", "union", "enum",
    "typedef", "const", "static", "void", "int", "char", "float", "double",
    "long", "short", "unsigned", "signed", "true", "false", "null", "new",
    "delete", "this",
})
