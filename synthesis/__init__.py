"""
synthesis: turn edit records into FIM training examples for code-completion
fine-tuning, plus degraded negatives for preference training.

PIPELINE
========

    EditRecord
      -> QualityGate.accepts()          reject degenerate snapshots and
                                        whitespace-only diffs early
      -> CursorPositionSelector         pick candidate edit points
      -> resolve_editable_region()      grow each cursor into its
                                        indentation block
      -> FIMExampleBuilder              assemble prompt/completion/context
                                        in ZED, PSM, SPM or MIXED layout
      -> DegradationEngine              mutate each completion into a
                                        plausible wrong one

FORMATS
=======

    ZED   <|editable_region_start|> ... <|user_cursor_is_here|>
          The completion is the rest of the editable region after the cursor.
    PSM   <|fim_prefix|>prefix<|fim_suffix|>suffix<|fim_middle|>
    SPM   <|fim_suffix|>suffix<|fim_prefix|>prefix<|fim_middle|>
          For both, the completion is at most 50 characters from the cursor.
    MIXED PSM or SPM, chosen per example.

USAGE
=====

    from synthesis import build_kto_examples, build_dpo_examples

    kto = [ex.to_record() for ex in build_kto_examples(records)]
    dpo = [pair.to_record() for pair in build_dpo_examples(records)]

Every stochastic step takes an optional ``rng`` (a ``random.Random``); pass a
seeded instance for reproducible output.
"""
from ._builder import (
    BuilderError,
    FIMExampleBuilder,
    InvalidFormat,
    InvalidInput,
    InvalidState,
    MissingField,
)
from ._cursor import AstCursorSelector, CursorPositionSelector, HeuristicCursorSelector
from ._degrade import DEFAULT_WEIGHTS, DegradationEngine
from ._fim import create_fim_examples
from ._pairing import build_dpo_examples, build_kto_examples
from ._quality import QualityGate
from ._region import resolve_editable_region
