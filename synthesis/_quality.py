import logging
import re
from collections import Counter

from fim.language import LanguageConfig, find_language, language_for_path
from fim.types import EditRecord

log = logging.getLogger(__name__)

# Merge-conflict markers left in a committed file.
_CONFLICT_MARKER_RE = re.compile(r"^(?:<{7}|>{7})(?:\s|$)|^={7}$", re.MULTILINE)

# Signatures of machine-written files.
_GENERATED_PATTERNS = [
    r"auto-?generated",
    r"\bDO NOT EDIT\b",
    r"@generated\b",
    r"^\s*(?://|#|/?\*)\s*Code generated .*\.",
    r"this file (?:is|was|has been) (?:automatically |auto )?generated",
    r"generated by the protocol buffer compiler",
]

_BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}


class QualityGate:
    """
    Accepts or rejects code snapshots and diffs before synthesis.

    Never raises: anything that cannot be judged counts as a rejection.
    Languages missing from the registry skip the comment-ratio and syntax
    checks once the length and marker checks pass.
    """

    def __init__(
        self,
        min_code_length: int = 10,
        max_code_length: int = 100_000,
        max_comment_ratio: float = 0.5,
        min_diff_changes: int = 1,
        max_bracket_imbalance: int = 5,
        generic_bracket_tolerance: int = 2,
    ):
        self.MIN_CODE_LENGTH = min_code_length
        self.MAX_CODE_LENGTH = max_code_length
        self.MAX_COMMENT_RATIO = max_comment_ratio
        self.MIN_DIFF_CHANGES = min_diff_changes
        # Unclosed brackets at or above this count are pathological.
        self.MAX_BRACKET_IMBALANCE = max_bracket_imbalance
        # Code with no recognizable construct is still accepted this close to balanced.
        self.GENERIC_BRACKET_TOLERANCE = generic_bracket_tolerance
        self.generated_patterns = [re.compile(p, re.IGNORECASE | re.MULTILINE) for p in _GENERATED_PATTERNS]

    def accepts(self, record: EditRecord) -> bool:
        """Gate a whole edit record: both snapshots pass and the diff is substantive."""
        language = record.language or language_for_path(record.file_path)
        if not self.passes_quality_checks(record.after_text, language):
            return False
        if not self.passes_quality_checks(record.before_text, language):
            return False
        return self.is_semantic_change(record.diff_text)

    def passes_quality_checks(self, code: str | None, language: str | None) -> bool:
        if not code or not code.strip():
            return False

        if len(code.strip()) < self.MIN_CODE_LENGTH:
            log.debug("rejected: shorter than %d chars", self.MIN_CODE_LENGTH)
            return False
        if len(code) > self.MAX_CODE_LENGTH:
            log.debug("rejected: longer than %d chars", self.MAX_CODE_LENGTH)
            return False
        if _CONFLICT_MARKER_RE.search(code):
            log.debug("rejected: merge conflict markers")
            return False
        if any(p.search(code) for p in self.generated_patterns):
            log.debug("rejected: generated-code signature")
            return False

        lc = find_language(language)
        if lc is None:
            return True

        if not self._check_comment_ratio(code, language):
            log.debug("rejected: comment ratio above %.2f", self.MAX_COMMENT_RATIO)
            return False
        if not self._has_valid_syntax_patterns(code, language):
            log.debug("rejected: no plausible %s syntax", lc.name)
            return False
        return True

    def is_semantic_change(self, diff_text: str | None) -> bool:
        """
        True when the diff adds or removes at least MIN_DIFF_CHANGES lines whose
        stripped content is not merely re-indented on the other side.
        """
        if not diff_text:
            return False

        added: Counter[str] = Counter()
        removed: Counter[str] = Counter()
        for line in diff_text.split("\n"):
            if line.startswith(("+++ ", "--- ")):
                continue
            if line.startswith("+"):
                content = line[1:].strip()
                if content:
                    added[content] += 1
            elif line.startswith("-"):
                content = line[1:].strip()
                if content:
                    removed[content] += 1

        changes = sum((added - removed).values()) + sum((removed - added).values())
        return changes >= self.MIN_DIFF_CHANGES

    def _check_comment_ratio(self, code: str, language: str | None) -> bool:
        """Reject when comment-only lines exceed MAX_COMMENT_RATIO of all lines."""
        if not code:
            return False
        lc = find_language(language)
        if lc is None:
            return True

        lines = code.split("\n")
        comment_lines = _count_comment_lines(lines, lc)
        return comment_lines / len(lines) <= self.MAX_COMMENT_RATIO

    def _has_valid_syntax_patterns(self, code: str, language: str | None) -> bool:
        imbalance = _unclosed_brackets(code)
        if imbalance >= self.MAX_BRACKET_IMBALANCE:
            return False

        lc = find_language(language)
        if lc is not None and any(re.search(p, code, re.MULTILINE) for p in lc.syntax_patterns):
            return True
        return imbalance <= self.GENERIC_BRACKET_TOLERANCE


def _count_comment_lines(lines: list[str], lc: LanguageConfig) -> int:
    count = 0
    closer: str | None = None  # set while inside a block comment / docstring

    for line in lines:
        stripped = line.strip()
        if closer is not None:
            count += 1
            if closer in stripped:
                closer = None
            continue
        if not stripped:
            continue
        if stripped.startswith(lc.line_comment_markers):
            count += 1
            continue
        for opener, close in lc.block_comment_delimiters:
            if stripped.startswith(opener):
                count += 1
                if close not in stripped[len(opener):]:
                    closer = close
                break
    return count


def _unclosed_brackets(code: str) -> int:
    opened = Counter(ch for ch in code if ch in _BRACKET_PAIRS)
    closed = Counter(ch for ch in code if ch in _BRACKET_PAIRS.values())
    return sum(max(0, n - closed[_BRACKET_PAIRS[ch]]) for ch, n in opened.items())
