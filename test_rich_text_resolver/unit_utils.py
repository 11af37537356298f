"""Utilities that ease unit-testing."""

from __future__ import annotations

import difflib
import itertools
import pathlib
from typing import Any, Callable
from unittest.mock import Mock, patch

from pytest import FixtureRequest, LogCaptureFixture, MonkeyPatch  # noqa: PT013

__all__ = (
    "FixtureRequest",
    "LogCaptureFixture",
    "Mock",
    "MonkeyPatch",
    "function_mock",
)


def counting_keys(prefix: str = "key") -> Callable[[], str]:
    """A key generator producing "key-1", "key-2", ... in call order."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def without_keys(value: Any) -> Any:
    """`value` with every `_key` removed and every mark key replaced by "<key>", recursively.

    Makes Portable Text produced with random keys comparable. Decorator marks are kept as-is.
    """
    if isinstance(value, list):
        return [without_keys(item) for item in value]
    if not isinstance(value, dict):
        return value

    mark_def_keys = {d.get("_key") for d in value.get("markDefs", [])}
    result = {k: without_keys(v) for k, v in value.items() if k != "_key"}
    for child in result.get("children", []):
        if isinstance(child, dict) and "marks" in child:
            child["marks"] = ["<key>" if m in mark_def_keys else m for m in child["marks"]]
    return result


def assert_text_equal(actual: str, expected: str) -> None:
    """Raises AssertionError with a line diff when `actual` differs from `expected`."""
    assert actual == expected, _diff("text differs:", actual, expected)


def _diff(heading: str, actual: str, expected: str):
    """Diff of actual compared to expected.

    "+" indicates unexpected lines actual, "-" indicates lines missing from actual.
    """
    expected_lines = expected.splitlines(keepends=True)
    actual_lines = actual.splitlines(keepends=True)
    heading = "diff: '+': unexpected lines in actual, '-': lines missing from actual\n"
    return heading + "".join(difflib.Differ().compare(actual_lines, expected_lines))


def example_doc_path(file_name: str) -> str:
    """Resolve the absolute-path to `file_name` in the example-docs directory."""
    example_docs_dir = pathlib.Path(__file__).parent.parent / "example-docs"
    file_path = example_docs_dir / file_name
    return str(file_path.resolve())


def example_doc_text(file_name: str) -> str:
    """Contents of example-doc `file_name` as text (decoded as utf-8)."""
    with open(example_doc_path(file_name), encoding="utf-8") as f:
        return f.read()


# ------------------------------------------------------------------------------------------------
# MOCKING FIXTURES
# ------------------------------------------------------------------------------------------------
# These allow full-featured and type-safe mocks to be created simply by adding a unit-test
# fixture.
# ------------------------------------------------------------------------------------------------


def function_mock(
    request: FixtureRequest, q_function_name: str, autospec: bool = True, **kwargs: Any
) -> Mock:
    """Return mock patching function with qualified name `q_function_name`.

    Patch is reversed after calling test returns.
    """
    _patch = patch(q_function_name, autospec=autospec, **kwargs)
    request.addfinalizer(_patch.stop)
    return _patch.start()

