import logging
import random
from collections import Counter

from tqdm import tqdm

from fim.types import EditRecord, FIMFormat, LabeledExample, PreferencePair
from ._cursor import CursorPositionSelector
from ._degrade import DegradationEngine
from ._fim import create_fim_examples, record_language
from ._quality import QualityGate

log = logging.getLogger(__name__)


def build_kto_examples(
    records: list[EditRecord],
    fim_format: FIMFormat | str = FIMFormat.ZED,
    num_examples: int = 3,
    gate: QualityGate | None = None,
    engine: DegradationEngine | None = None,
    selector: CursorPositionSelector | None = None,
    rng: random.Random | None = None,
    balance: bool = True,
    progress: bool = True,
) -> list[LabeledExample]:
    """Gate, synthesize and label: positives plus one degraded negative each.

    With ``balance``, negatives are downsampled to the positive count when
    they outnumber it. The combined list is shuffled.
    """
    rng = rng or random
    gate = gate or QualityGate()
    engine = engine or DegradationEngine(rng=rng)

    positives: list[LabeledExample] = []
    rejected = 0
    for record in tqdm(records, desc="KTO", disable=not progress):
        if not gate.accepts(record):
            rejected += 1
            continue
        for example in create_fim_examples(record, fim_format, num_examples, selector, rng):
            positives.append(LabeledExample.from_positive(example))

    negatives = engine.generate_negative_examples(positives)
    if balance and len(negatives) > len(positives):
        negatives = rng.sample(negatives, len(positives))

    combined = positives + negatives
    rng.shuffle(combined)

    methods = Counter(n.metadata["degradation_method"] for n in negatives)
    log.info(
        "KTO: %d records (%d rejected), %d positive, %d negative",
        len(records), rejected, len(positives), len(negatives),
    )
    log.debug("KTO degradation methods: %s", dict(methods))
    return combined


def build_dpo_examples(
    records: list[EditRecord],
    fim_format: FIMFormat | str = FIMFormat.ZED,
    gate: QualityGate | None = None,
    engine: DegradationEngine | None = None,
    selector: CursorPositionSelector | None = None,
    rng: random.Random | None = None,
    progress: bool = True,
) -> list[PreferencePair]:
    """One chosen/rejected pair per accepted record.

    The rejected side starts from a weighted-random degradation method.
    Records whose completion cannot be made to differ are skipped.
    """
    rng = rng or random
    gate = gate or QualityGate()
    engine = engine or DegradationEngine(rng=rng)

    pairs: list[PreferencePair] = []
    rejected = 0
    for record in tqdm(records, desc="DPO", disable=not progress):
        if not gate.accepts(record):
            rejected += 1
            continue
        examples = create_fim_examples(record, fim_format, 1, selector, rng)
        if not examples:
            continue
        example = examples[0]

        result = engine.degrade(example.completion, record_language(record), method=engine.choose_method())
        if result is None:
            log.debug("No rejected completion for %s", record.file_path)
            continue
        degraded, method = result
        pairs.append(PreferencePair(
            prompt=example.prompt,
            chosen=example.completion,
            rejected=degraded,
            metadata={**example.metadata, "degradation_method": method},
        ))

    log.info("DPO: %d records (%d rejected), %d pairs", len(records), rejected, len(pairs))
    return pairs
