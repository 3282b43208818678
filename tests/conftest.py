import random

import pytest

from fim.types import EditRecord, FIMExample, FIMFormat, RegionBounds


@pytest.fixture
def seed_rng():
    random.seed(42)


@pytest.fixture
def simple_function_py():
    return """\
import os


def load_config(path):
    if not os.path.exists(path):
        return {}
    with open(path) as fh:
        data = fh.read()
    return parse(data)


def parse(text):
    result = {}
    for line in text.splitlines():
        key, value = line.split("=", 1)
        result[key] = value
    return result
"""


@pytest.fixture
def simple_function_js():
    return """\
function total(items) {
    let sum = 0;
    for (let i = 0; i <= items.length; i++) {
        sum += items[i].price;
    }
    return sum;
}

const label = total([]) === 0 ? 'empty' : 'full';
"""


@pytest.fixture
def semantic_diff():
    return """\
--- a/src/app.js
+++ b/src/app.js
@@ -1,3 +1,4 @@
 function main() {
+    console.log("test");
     return 0;
 }
"""


def make_record(
    after_text="def add(a, b):\n    return a + b\n",
    before_text="def add(a, b):\n    return a - b\n",
    diff_text="--- a/math.py\n+++ b/math.py\n-    return a - b\n+    return a + b\n",
    file_path="src/math.py",
    commit_id="abc123",
    commit_message="Fix add",
    language="python",
) -> EditRecord:
    """Quick EditRecord builder with sensible defaults."""
    return EditRecord(
        before_text=before_text,
        after_text=after_text,
        diff_text=diff_text,
        file_path=file_path,
        commit_id=commit_id,
        commit_message=commit_message,
        language=language,
    )


def make_example(
    prompt="<|editable_region_start|>x = <|user_cursor_is_here|>",
    completion="compute(1, 2)\n",
    fim_format=FIMFormat.ZED,
    cursor_position=4,
    editable_region=RegionBounds(0, 17),
    language="python",
) -> FIMExample:
    """Quick FIMExample builder with sensible defaults."""
    return FIMExample(
        prompt=prompt,
        completion=completion,
        context=prompt + completion,
        format=fim_format,
        cursor_position=cursor_position,
        editable_region=editable_region,
        metadata={
            "file_path": "src/calc.py",
            "commit": "abc123",
            "language": language,
            "commit_message": "Add compute",
        },
    )
