import logging
import random
import re

from fim.language import find_language
from fim.languages._shared import GENERIC_SUBTLE_BUG_SWAPS, GENERIC_TYPE_ERROR_SWAPS
from fim.types import LabeledExample

log = logging.getLogger(__name__)

# Relative frequency of each mutation strategy (sums to 1.0)
DEFAULT_WEIGHTS = {
    "subtle_bugs": 0.30,
    "incomplete": 0.25,
    "wrong_variable": 0.20,
    "off_by_one": 0.15,
    "type_errors": 0.10,
}

DEFAULT_IDENTIFIER_PATTERN = r"(?<![\w$])[A-Za-z_$][\w$]*(?![\w$])"

FALLBACK_TOKEN = "undefined"
SHORT_COMPLETION_CHARS = 5
FALLBACK_KEEP_RATIO = 0.7

# Tried in order; the first that matches is applied once.
_OFF_BY_ONE_RULES = [
    (re.compile(r"<="), lambda m: "<"),
    (re.compile(r">="), lambda m: ">"),
    (re.compile(r"\b(\d+)\b"), lambda m: str(int(m.group(1)) + 1)),
    (re.compile(r"range\((\d+)\)"), lambda m: f"range({int(m.group(1)) + 1})"),
]


class DegradationEngine:
    """
    Turns a correct completion into a plausible wrong one.

    Each strategy is a pure text mutation and may leave its input unchanged
    when nothing applies. ``degrade`` walks the strategies until one changes
    the text and falls back to a forced corruption otherwise.
    """

    def __init__(self, weights: dict[str, float] | None = None, rng: random.Random | None = None):
        self.weights = dict(weights or DEFAULT_WEIGHTS)
        self._rng = rng or random
        self._methods = {
            "subtle_bugs": self._introduce_subtle_bugs,
            "incomplete": self._make_incomplete,
            "wrong_variable": self._use_wrong_variable,
            "off_by_one": self._introduce_off_by_one,
            "type_errors": self._introduce_type_errors,
        }

    @property
    def methods(self) -> list[str]:
        return list(self.weights)

    def choose_method(self) -> str:
        """Weighted random pick over the strategy table."""
        total = sum(self.weights.values())
        draw = self._rng.random() * total
        cumulative = 0.0
        for method, weight in self.weights.items():
            cumulative += weight
            if draw < cumulative:
                return method
        return self.methods[-1]

    def apply_degradation(self, code: str, method: str, language: str | None = None) -> str:
        if not code:
            return code
        mutate = self._methods.get(method)
        if mutate is None:
            log.debug("unknown degradation method %r", method)
            return code
        try:
            return mutate(code, language)
        except (ValueError, IndexError, re.error) as e:
            log.debug("degradation %s failed: %s", method, e)
            return code

    def degrade(self, completion: str, language: str | None = None, method: str | None = None) -> tuple[str, str] | None:
        """
        Return ``(degraded, method)`` with ``degraded != completion``, or None.

        ``method`` is tried first when given, then the remaining strategies in
        table order, then the forced fallback. A strategy that empties the
        completion does not count as a result.
        """
        order = self.methods
        if method in self._methods:
            order = [method] + [m for m in order if m != method]

        for name in order:
            degraded = self.apply_degradation(completion, name, language)
            if degraded and degraded != completion:
                return degraded, name

        fallback = _forced_fallback(completion)
        if fallback is not None and fallback[0] != completion:
            log.debug("no strategy changed the completion; forced %s", fallback[1])
            return fallback
        return None

    def generate_negative_examples(self, positives: list[LabeledExample]) -> list[LabeledExample]:
        negatives = []
        for example in positives:
            language = example.metadata.get("language")
            result = self.degrade(example.completion, language)
            if result is None:
                continue
            degraded, method = result
            negatives.append(LabeledExample(
                prompt=example.prompt,
                completion=degraded,
                label=False,
                metadata={**example.metadata, "degradation_method": method},
            ))
        return negatives

    def _introduce_subtle_bugs(self, code: str, language: str | None) -> str:
        lc = find_language(language)
        swaps = (lc.subtle_bug_swaps if lc else None) or GENERIC_SUBTLE_BUG_SWAPS
        return self._swap_first(code, swaps)

    def _make_incomplete(self, code: str, language: str | None) -> str:
        percent = 60 + self._rng.random() * 20
        cut = int(percent * len(code) / 100)
        last_nl = code.rfind("\n", 0, cut)
        if last_nl != -1 and last_nl > cut - 20:
            cut = last_nl
        return code[:cut]

    def _use_wrong_variable(self, code: str, language: str | None) -> str:
        lc = find_language(language)
        pattern = lc.identifier_pattern if lc else DEFAULT_IDENTIFIER_PATTERN
        keywords = lc.keywords if lc else frozenset()

        identifiers = list(dict.fromkeys(
            name for name in re.findall(pattern, code) if name not in keywords
        ))
        if len(identifiers) < 2:
            return code

        original, replacement = self._rng.sample(identifiers, 2)
        whole_word = r"(?<![\w$])" + re.escape(original) + r"(?![\w$])"
        return re.sub(whole_word, lambda m: replacement, code)

    def _introduce_off_by_one(self, code: str, language: str | None) -> str:
        for pattern, replace in _OFF_BY_ONE_RULES:
            if pattern.search(code):
                return pattern.sub(replace, code, count=1)
        return code

    def _introduce_type_errors(self, code: str, language: str | None) -> str:
        lc = find_language(language)
        swaps = (lc.type_error_swaps if lc else None) or GENERIC_TYPE_ERROR_SWAPS
        return self._swap_first(code, swaps)

    def _swap_first(self, code: str, swaps: list[tuple[str, str]]) -> str:
        """Replace the first occurrence of one randomly chosen applicable swap."""
        applicable = [(old, new) for old, new in swaps if old in code]
        if not applicable:
            return code
        old, new = self._rng.choice(applicable)
        return code.replace(old, new, 1)


def _forced_fallback(completion: str) -> tuple[str, str] | None:
    if not completion:
        return None
    if len(completion) <= SHORT_COMPLETION_CHARS:
        if not completion.strip():
            return None
        return FALLBACK_TOKEN, "corruption"
    return completion[:int(len(completion) * FALLBACK_KEEP_RATIO)], "incomplete"
