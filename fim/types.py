from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

# Editable-region layout tokens
EDITABLE_REGION_START = "<|editable_region_start|>"
EDITABLE_REGION_END = "<|editable_region_end|>"
USER_CURSOR = "<|user_cursor_is_here|>"

# Prefix/suffix/middle layout tokens
FIM_PREFIX = "<|fim_prefix|>"
FIM_SUFFIX = "<|fim_suffix|>"
FIM_MIDDLE = "<|fim_middle|>"

MIDDLE_WINDOW_CHARS = 50  # PSM/SPM completion length cap
REGION_PADDING_CHARS = 50  # how far the resolver widens a region to reach the cursor


class FIMFormat(Enum):
    """Prompt layouts. MIXED resolves to PSM or SPM per built example."""
    PSM = "prefix_suffix_middle"
    SPM = "suffix_prefix_middle"
    ZED = "zed_format"
    MIXED = "mixed"


class RegionBounds(NamedTuple):
    """Editable region with an inclusive end (index of the last included char)."""
    start: int
    end: int


@dataclass(frozen=True)
class EditRecord:
    """A before/after file snapshot from one commit."""
    before_text: str
    after_text: str
    diff_text: str
    file_path: str
    commit_id: str
    commit_message: str = ""
    language: str = ""
    context_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class FIMExample:
    """A single positive FIM example."""
    prompt: str
    completion: str
    context: str
    format: FIMFormat
    cursor_position: int
    editable_region: RegionBounds
    metadata: dict = field(default_factory=dict)

    def to_record(self) -> dict:
        """Convert to the JSON-serializable shape consumed downstream."""
        return {
            "prompt": self.prompt,
            "completion": self.completion,
            "context": self.context,
            "format": self.format.value,
            "cursor_position": self.cursor_position,
            "editable_region": list(self.editable_region),
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class LabeledExample:
    """A KTO-style example: one completion with a desirability label."""
    prompt: str
    completion: str
    label: bool
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_positive(cls, example: FIMExample) -> "LabeledExample":
        return cls(
            prompt=example.prompt,
            completion=example.completion or "",
            label=True,
            metadata=dict(example.metadata),
        )

    def to_record(self) -> dict:
        return {
            "prompt": self.prompt,
            "completion": self.completion,
            "label": self.label,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class PreferencePair:
    """A DPO-style example: chosen and rejected completions for one prompt."""
    prompt: str
    chosen: str
    rejected: str
    metadata: dict = field(default_factory=dict)

    def to_record(self) -> dict:
        return {
            "prompt": self.prompt,
            "chosen": self.chosen,
            "rejected": self.rejected,
            "metadata": dict(self.metadata),
        }
