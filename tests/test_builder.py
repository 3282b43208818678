"""Tests for FIMExampleBuilder: state machine, error taxonomy and the token
layouts of each format."""

import random

import pytest

from fim.types import (
    EDITABLE_REGION_END,
    EDITABLE_REGION_START,
    FIM_MIDDLE,
    FIM_PREFIX,
    FIM_SUFFIX,
    USER_CURSOR,
    FIMFormat,
    RegionBounds,
)
from synthesis._builder import (
    BuilderError,
    FIMExampleBuilder,
    InvalidFormat,
    InvalidInput,
    InvalidState,
    MissingField,
)
from tests.conftest import make_record


def _builder(code, cursor, region, fim_format, rng=None):
    return (
        FIMExampleBuilder(rng)
        .with_code(code)
        .with_cursor(cursor)
        .with_editable_region(*region)
        .with_format(fim_format)
    )


class TestErrors:
    def test_taxonomy(self):
        assert issubclass(InvalidState, BuilderError)
        assert issubclass(InvalidInput, InvalidState)
        assert issubclass(InvalidFormat, BuilderError)
        assert issubclass(MissingField, BuilderError)
        assert issubclass(BuilderError, ValueError)

    def test_empty_code(self):
        with pytest.raises(InvalidInput):
            FIMExampleBuilder().with_code("")

    def test_blank_code_caught_as_invalid_state(self):
        with pytest.raises(InvalidState):
            FIMExampleBuilder().with_code("   \n\t")

    def test_cursor_before_code(self):
        with pytest.raises(InvalidState, match="with_code"):
            FIMExampleBuilder().with_cursor(1)

    def test_region_before_code(self):
        with pytest.raises(InvalidState):
            FIMExampleBuilder().with_editable_region(0, 1)

    def test_unknown_format(self):
        with pytest.raises(InvalidFormat, match="zed_format"):
            FIMExampleBuilder().with_format("middle_out")

    def test_build_without_code(self):
        with pytest.raises(MissingField, match="Code"):
            FIMExampleBuilder().build()

    def test_build_without_format(self):
        builder = FIMExampleBuilder().with_code("abc").with_cursor(1).with_editable_region(0, 2)
        with pytest.raises(MissingField, match="Format"):
            builder.build()

    def test_build_without_region(self):
        builder = FIMExampleBuilder().with_code("abc").with_cursor(1).with_format(FIMFormat.ZED)
        with pytest.raises(MissingField, match="Editable region"):
            builder.build()

    def test_build_without_cursor(self):
        builder = FIMExampleBuilder().with_code("abc").with_editable_region(0, 2).with_format(FIMFormat.ZED)
        with pytest.raises(MissingField, match="Cursor"):
            builder.build()


class TestStateTransitions:
    def test_methods_return_builder(self):
        builder = FIMExampleBuilder()
        assert builder.with_code("abc") is builder
        assert builder.with_cursor(1) is builder
        assert builder.with_editable_region(0, 2) is builder
        assert builder.with_format("zed_format") is builder
        assert builder.with_metadata(make_record()) is builder

    def test_format_from_string(self):
        builder = FIMExampleBuilder().with_format("suffix_prefix_middle")
        assert builder.format is FIMFormat.SPM

    def test_cursor_clamped(self):
        builder = FIMExampleBuilder().with_code("abc").with_cursor(99)
        assert builder.cursor_position == 3

    def test_region_clamped(self):
        builder = FIMExampleBuilder().with_code("abcdef").with_editable_region(-4, 100)
        assert builder.editable_region == RegionBounds(0, 5)

    def test_region_end_not_before_start(self):
        builder = FIMExampleBuilder().with_code("abcdef").with_editable_region(4, 1)
        assert builder.editable_region == RegionBounds(4, 4)

    def test_region_pulls_cursor_inside(self):
        builder = FIMExampleBuilder().with_code("abcdefghij").with_cursor(1).with_editable_region(4, 6)
        assert builder.cursor_position == 4

    def test_cursor_may_sit_one_past_region_end(self):
        builder = FIMExampleBuilder().with_code("abcdefghij").with_cursor(9).with_editable_region(2, 5)
        assert builder.cursor_position == 6

    def test_cursor_after_region_is_fitted(self):
        builder = FIMExampleBuilder().with_code("abcdefghij").with_editable_region(2, 5).with_cursor(0)
        assert builder.cursor_position == 2

    def test_with_code_clears_positions(self):
        builder = FIMExampleBuilder().with_code("abc").with_cursor(1).with_editable_region(0, 2)
        builder.with_code("xyz")
        assert builder.cursor_position is None
        assert builder.editable_region is None

    def test_metadata(self):
        builder = FIMExampleBuilder().with_metadata(make_record(file_path="a/b.py", commit_id="c0ffee"))
        assert builder.metadata == {
            "file_path": "a/b.py",
            "commit": "c0ffee",
            "language": "python",
            "commit_message": "Fix add",
        }

    def test_reset(self):
        builder = _builder("abc", 1, (0, 2), FIMFormat.ZED)
        builder.reset()
        assert builder.code == ""
        assert builder.format is None
        with pytest.raises(InvalidState):
            builder.with_cursor(0)

    def test_clone_is_independent(self):
        base = FIMExampleBuilder().with_code("abcdefghij").with_format(FIMFormat.ZED).with_metadata(make_record())
        a = base.clone().with_cursor(2).with_editable_region(0, 5)
        b = base.clone().with_cursor(7).with_editable_region(6, 9)
        assert base.cursor_position is None
        assert a.cursor_position == 2
        assert b.cursor_position == 7
        a.metadata["language"] = "go"
        assert base.metadata["language"] == "python"

    def test_clone_builds_same_layout(self):
        base = _builder("hello world", 3, (0, 10), FIMFormat.PSM)
        assert base.clone().build() == base.build()


class TestZedFormat:
    def test_abc_example(self):
        ex = _builder("ABC", 1, (0, 2), FIMFormat.ZED).build()
        assert f"{EDITABLE_REGION_START}A{USER_CURSOR}" in ex.prompt
        assert ex.completion == "BC"
        assert ex.format is FIMFormat.ZED
        assert ex.editable_region == RegionBounds(0, 2)
        assert ex.cursor_position == 1

    def test_context_layout(self):
        ex = _builder("ABCDE", 2, (1, 3), FIMFormat.ZED).build()
        assert ex.prompt == f"A{EDITABLE_REGION_START}B{USER_CURSOR}"
        assert ex.completion == "CD"
        assert ex.context == f"A{EDITABLE_REGION_START}B{USER_CURSOR}CD{EDITABLE_REGION_END}E"

    def test_cursor_at_region_end(self):
        ex = _builder("ABCDE", 4, (1, 3), FIMFormat.ZED).build()
        assert ex.completion == ""
        assert ex.prompt.endswith(USER_CURSOR)

    def test_prompt_plus_completion_reconstructs_region(self, simple_function_py):
        code = simple_function_py
        for cursor, region in [(10, (0, 40)), (55, (30, 120)), (0, (0, len(code) - 1))]:
            ex = _builder(code, cursor, region, FIMFormat.ZED).build()
            rebuilt = (ex.prompt + ex.completion)
            assert rebuilt.index(EDITABLE_REGION_START) < rebuilt.index(USER_CURSOR)
            stripped = rebuilt.replace(EDITABLE_REGION_START, "").replace(USER_CURSOR, "")
            assert stripped == code[:ex.editable_region.end + 1]


class TestPsmFormat:
    def test_completion_capped_at_50(self):
        ex = _builder("x" * 200, 10, (0, 200), FIMFormat.PSM).build()
        assert len(ex.completion) == 50

    def test_layout(self):
        code = "0123456789"
        ex = _builder(code, 3, (0, 9), FIMFormat.PSM).build()
        assert ex.prompt == f"{FIM_PREFIX}012{FIM_SUFFIX}{FIM_MIDDLE}"
        assert ex.completion == "3456789"
        assert ex.context == code

    def test_token_order(self):
        code = "y" * 120
        ex = _builder(code, 30, (0, 119), FIMFormat.PSM).build()
        assert ex.prompt.index(FIM_PREFIX) < ex.prompt.index(FIM_SUFFIX) < ex.prompt.index(FIM_MIDDLE)
        assert ex.prompt == FIM_PREFIX + code[:30] + FIM_SUFFIX + code[80:] + FIM_MIDDLE


class TestSpmFormat:
    def test_token_order(self):
        code = "z" * 120
        ex = _builder(code, 30, (0, 119), FIMFormat.SPM).build()
        assert ex.prompt.index(FIM_SUFFIX) < ex.prompt.index(FIM_PREFIX) < ex.prompt.index(FIM_MIDDLE)
        assert ex.prompt == FIM_SUFFIX + code[80:] + FIM_PREFIX + code[:30] + FIM_MIDDLE
        assert len(ex.completion) == 50
        assert ex.format is FIMFormat.SPM


class TestMixedFormat:
    def test_resolves_to_psm_or_spm(self):
        rng = random.Random(3)
        seen = set()
        for _ in range(40):
            ex = _builder("q" * 80, 5, (0, 79), FIMFormat.MIXED, rng).build()
            assert ex.format in (FIMFormat.PSM, FIMFormat.SPM)
            seen.add(ex.format)
        assert seen == {FIMFormat.PSM, FIMFormat.SPM}

    def test_never_reports_mixed(self, seed_rng):
        ex = _builder("abcdef", 1, (0, 5), FIMFormat.MIXED).build()
        assert ex.format is not FIMFormat.MIXED
        assert ex.to_record()["format"] != "mixed"
