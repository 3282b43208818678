import random

from fim.region import TextRegion, TextSlice
from fim.types import (
    EDITABLE_REGION_END,
    EDITABLE_REGION_START,
    FIM_MIDDLE,
    FIM_PREFIX,
    FIM_SUFFIX,
    MIDDLE_WINDOW_CHARS,
    USER_CURSOR,
    EditRecord,
    FIMExample,
    FIMFormat,
    RegionBounds,
)


class BuilderError(ValueError):
    """Contract violation while assembling a FIM example."""


class InvalidState(BuilderError):
    """A builder step was called out of sequence."""


class InvalidInput(InvalidState):
    """Empty or blank code was passed to with_code()."""


class InvalidFormat(BuilderError):
    """Unrecognized format identifier."""


class MissingField(BuilderError):
    """build() was called before every required field was set."""


class FIMExampleBuilder:
    """
    Sequential constructor for a single FIMExample.

    Order: with_code() first, then with_cursor() and with_editable_region()
    in either order, with_format(), optionally with_metadata(), then build().
    Each step mutates and returns this builder; use clone() to fan out one
    configured base (code, format, metadata) across many cursors.

    The editable region uses an inclusive end. The cursor may sit one past
    that end, meaning "at the end of the region".
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random
        self.reset()

    def reset(self) -> "FIMExampleBuilder":
        self.code: str = ""
        self.cursor_position: int | None = None
        self.editable_region: RegionBounds | None = None
        self.format: FIMFormat | None = None
        self.metadata: dict = {}
        self._region: TextRegion | None = None
        return self

    def with_code(self, code: str) -> "FIMExampleBuilder":
        if not code or not code.strip():
            raise InvalidInput("Code cannot be empty")
        self.code = code
        self._region = TextRegion(code)
        self.cursor_position = None
        self.editable_region = None
        return self

    def with_cursor(self, position: int) -> "FIMExampleBuilder":
        if self._region is None:
            raise InvalidState("Must call with_code() before with_cursor()")
        position = self._region.clamp_position(position)
        if self.editable_region is not None:
            position = self._fit_cursor(position, self.editable_region)
        self.cursor_position = position
        return self

    def with_editable_region(self, start: int, end: int) -> "FIMExampleBuilder":
        if self._region is None:
            raise InvalidState("Must call with_code() before with_editable_region()")
        last = len(self.code) - 1
        valid_start = max(0, min(start, last))
        valid_end = max(valid_start, min(end, last))
        region = RegionBounds(valid_start, valid_end)

        if self.cursor_position is not None:
            self.cursor_position = self._fit_cursor(self.cursor_position, region)

        self.editable_region = region
        return self

    def with_format(self, fim_format: FIMFormat | str) -> "FIMExampleBuilder":
        try:
            self.format = FIMFormat(fim_format)
        except ValueError:
            valid = ", ".join(f.value for f in FIMFormat)
            raise InvalidFormat(f"Invalid format {fim_format!r}. Must be one of: {valid}") from None
        return self

    def with_metadata(self, record: EditRecord) -> "FIMExampleBuilder":
        self.metadata = {
            "file_path": record.file_path,
            "commit": record.commit_id,
            "language": record.language,
            "commit_message": record.commit_message,
        }
        return self

    def build(self) -> FIMExample:
        self._validate()

        builders = {
            FIMFormat.ZED: self._build_zed,
            FIMFormat.PSM: self._build_psm,
            FIMFormat.SPM: self._build_spm,
            FIMFormat.MIXED: self._build_mixed,
        }
        return builders[self.format]()

    def clone(self) -> "FIMExampleBuilder":
        """Copy all fields; the read-only TextRegion is shared."""
        other = FIMExampleBuilder(self._rng)
        other.code = self.code
        other.cursor_position = self.cursor_position
        other.editable_region = self.editable_region
        other.format = self.format
        other.metadata = dict(self.metadata)
        other._region = self._region
        return other

    def _build_zed(self) -> FIMExample:
        start, end = self.editable_region
        cursor = self.cursor_position
        region = self._region

        head = [
            TextSlice(0, start),
            EDITABLE_REGION_START,
            TextSlice(start, cursor),
            USER_CURSOR,
        ]
        prompt = region.build_with_tokens(head)
        # Inclusive end: the slice runs to end + 1.
        completion = "" if cursor > end else region.extract_region(cursor, end + 1)
        context = region.build_with_tokens(head + [
            TextSlice(cursor, end + 1),
            EDITABLE_REGION_END,
            TextSlice(end + 1, region.length),
        ])
        return self._make_example(prompt, completion, context, FIMFormat.ZED)

    def _build_psm(self) -> FIMExample:
        cursor, middle_end = self._middle_window()
        prompt = self._region.build_with_tokens([
            FIM_PREFIX,
            TextSlice(0, cursor),
            FIM_SUFFIX,
            TextSlice(middle_end, self._region.length),
            FIM_MIDDLE,
        ])
        completion = self._region.extract_region(cursor, middle_end)
        return self._make_example(prompt, completion, self.code, FIMFormat.PSM)

    def _build_spm(self) -> FIMExample:
        cursor, middle_end = self._middle_window()
        prompt = self._region.build_with_tokens([
            FIM_SUFFIX,
            TextSlice(middle_end, self._region.length),
            FIM_PREFIX,
            TextSlice(0, cursor),
            FIM_MIDDLE,
        ])
        completion = self._region.extract_region(cursor, middle_end)
        return self._make_example(prompt, completion, self.code, FIMFormat.SPM)

    def _build_mixed(self) -> FIMExample:
        if self._rng.random() < 0.5:
            return self._build_psm()
        return self._build_spm()

    def _middle_window(self) -> tuple[int, int]:
        cursor = self.cursor_position
        middle_len = min(MIDDLE_WINDOW_CHARS, len(self.code) - cursor)
        return cursor, cursor + middle_len

    def _make_example(self, prompt: str, completion: str, context: str, fim_format: FIMFormat) -> FIMExample:
        return FIMExample(
            prompt=prompt,
            completion=completion,
            context=context,
            format=fim_format,
            cursor_position=self.cursor_position,
            editable_region=self.editable_region,
            metadata=dict(self.metadata),
        )

    def _validate(self) -> None:
        if not self.code:
            raise MissingField("Code is required. Call with_code() first.")
        if self.format is None:
            raise MissingField("Format is required. Call with_format() first.")
        if self.editable_region is None:
            raise MissingField("Editable region is required. Call with_editable_region() first.")
        if self.cursor_position is None:
            raise MissingField("Cursor position is required. Call with_cursor() first.")

    @staticmethod
    def _fit_cursor(position: int, region: RegionBounds) -> int:
        return max(region.start, min(position, region.end + 1))
