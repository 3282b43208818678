# Tree-sitter for AST-aware cursor selection (grammars load per language in fim.languages)
try:
    from tree_sitter import Parser
    HAS_TREE_SITTER = True
except ImportError:
    HAS_TREE_SITTER = False
    Parser = None
