import random

from fim.deps import HAS_TREE_SITTER, Parser
from fim.language import find_language

_COMMENT_PREFIXES = ("#", "//")
_RANDOM_TOPUP_ATTEMPTS = 100


class CursorPositionSelector:
    """
    Chooses candidate edit points inside a code string.

    Implementations return at most ``count`` offsets, sorted ascending and
    de-duplicated, each satisfying ``0 <= pos < len(code)``. Empty code
    always yields ``[0]``.
    """

    def select(self, code: str, language: str = "", count: int = 3) -> list[int]:
        raise NotImplementedError


class HeuristicCursorSelector(CursorPositionSelector):
    """Line/punctuation heuristics; the language tag is advisory only."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random

    def select(self, code: str, language: str = "", count: int = 3) -> list[int]:
        if not code:
            return [0]
        return _finalize_positions(_punctuation_candidates(code), code, count, self._rng)


class AstCursorSelector(CursorPositionSelector):
    """
    Places cursors at the body/argument/right-hand-side child of "priority"
    nodes (conditionals, loops, definitions, calls, assignments).

    Falls back to the heuristic selector when tree-sitter or the language's
    grammar is unavailable, and tops up from it when the tree offers fewer
    than ``count`` candidates.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random
        self._fallback = HeuristicCursorSelector(self._rng)

    def select(self, code: str, language: str = "", count: int = 3) -> list[int]:
        if not code:
            return [0]

        lc = find_language(language)
        if not HAS_TREE_SITTER or lc is None or lc.ts_language is None:
            return self._fallback.select(code, language, count)

        parser = Parser(lc.ts_language)
        source_bytes = code.encode("utf-8")
        tree = parser.parse(source_bytes)

        candidates = [
            _byte_to_char_offset(source_bytes, b)
            for b in _collect_node_cursors(tree.root_node, lc.cursor_node_types, lc.cursor_field_names, source_bytes)
        ]
        if len(set(candidates)) < count:
            candidates.extend(_punctuation_candidates(code))

        return _finalize_positions(candidates, code, count, self._rng)


def _punctuation_candidates(code: str) -> list[int]:
    """One candidate per non-blank, non-comment line: after the first ':', ';' or '{', else at line end."""
    last = len(code) - 1
    positions = []
    current = 0

    for line in code.split("\n"):
        line_end = current + len(line)
        stripped = line.strip()

        if stripped and not stripped.startswith(_COMMENT_PREFIXES):
            for marker in (":", ";", "{"):
                idx = line.find(marker)
                if idx != -1:
                    positions.append(min(current + idx + 1, last))
                    break
            else:
                positions.append(min(line_end, last))

        current = line_end + 1

    return positions


def _finalize_positions(candidates: list[int], code: str, count: int, rng) -> list[int]:
    """De-duplicate, top up to ``count`` (evenly spaced, then random), sample down, sort."""
    if count < 1:
        return []
    length = len(code)
    unique = list(dict.fromkeys(p for p in candidates if 0 <= p < length))
    step = max(1, length // (count + 1))

    if not unique:
        unique = list(dict.fromkeys(min(i * step, length - 1) for i in range(1, count + 1)))

    if len(unique) < count:
        chosen = dict.fromkeys(unique)
        for i in range(1, count + 1):
            if len(chosen) >= count:
                break
            chosen[min(i * step, length - 1)] = None

        attempts = 0
        while len(chosen) < count and attempts < _RANDOM_TOPUP_ATTEMPTS:
            chosen[rng.randrange(length)] = None
            attempts += 1

        unique = list(chosen)

    if len(unique) > count:
        rng.shuffle(unique)
        unique = unique[:count]

    return sorted(unique)


def _collect_node_cursors(node, node_types: frozenset[str], field_names: tuple[str, ...], source_bytes: bytes) -> list[int]:
    """Walk the tree and return a byte offset inside each priority node's key child."""
    results = []
    if node.type in node_types:
        for name in field_names:
            child = node.child_by_field_name(name)
            if child is None:
                continue
            offset = child.start_byte
            # Step inside an opening bracket so the cursor sits in the body.
            if source_bytes[offset:offset + 1] in (b"(", b"{", b"["):
                offset += 1
            results.append(offset)
            break
    for child in node.children:
        results.extend(_collect_node_cursors(child, node_types, field_names, source_bytes))
    return results


def _byte_to_char_offset(source_bytes: bytes, byte_offset: int) -> int:
    return len(source_bytes[:byte_offset].decode("utf-8", errors="ignore"))
