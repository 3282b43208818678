import logging
import random

from fim.language import language_for_path
from fim.types import EditRecord, FIMExample, FIMFormat
from ._builder import BuilderError, FIMExampleBuilder
from ._cursor import CursorPositionSelector, HeuristicCursorSelector
from ._region import resolve_editable_region

log = logging.getLogger(__name__)


def record_language(record: EditRecord) -> str:
    return record.language or language_for_path(record.file_path)


def create_fim_examples(
    record: EditRecord,
    fim_format: FIMFormat | str = FIMFormat.ZED,
    num_examples: int = 3,
    selector: CursorPositionSelector | None = None,
    rng: random.Random | None = None,
) -> list[FIMExample]:
    """Synthesize up to num_examples positive examples from one record's after_text.

    One base builder holds code, format and metadata; it is cloned per cursor
    candidate. A candidate that violates the builder contract is logged and
    skipped, so a record may yield fewer examples than requested.
    """
    code = record.after_text
    if not code:
        return []

    language = record_language(record)
    if selector is None:
        selector = HeuristicCursorSelector(rng)

    try:
        base = (
            FIMExampleBuilder(rng)
            .with_code(code)
            .with_format(fim_format)
            .with_metadata(record)
        )
    except BuilderError as e:
        log.warning("Skipping %s@%s: %s", record.file_path, record.commit_id, e)
        return []
    base.metadata["language"] = language

    examples = []
    last = len(code) - 1
    for cursor in selector.select(code, language, num_examples):
        cursor = max(0, min(cursor, last))
        region = resolve_editable_region(code, cursor)
        try:
            example = (
                base.clone()
                .with_cursor(cursor)
                .with_editable_region(region.start, region.end)
                .build()
            )
        except BuilderError as e:
            log.warning("Skipping cursor %d in %s: %s", cursor, record.file_path, e)
            continue
        examples.append(example)

    if not examples:
        log.warning("No examples produced for %s@%s", record.file_path, record.commit_id)
    return examples
