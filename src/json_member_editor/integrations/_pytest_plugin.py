"""pytest plugin for json-member-editor.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_member_editor import classify, to_canonical, to_editable


@pytest.fixture(scope="session")
def assert_round_trip() -> Any:
    """Fixture that returns a callable round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_entry_survives_editing(assert_round_trip):
            assert_round_trip({"coins": 10, "items": ["sword"]})

    Returns:
        A callable ``_assert(value) -> None`` that converts ``value`` to an
        editable document and back, and raises ``AssertionError`` when the
        result differs from ``value`` (object key order is ignored, the
        Python type of every scalar is not).
    """

    def _assert(value: Any) -> None:
        """Assert ``to_canonical(to_editable(value), classify(value)) == value``.

        Raises:
            AssertionError: With the original value, the editable document
                and the converted value in the message.
        """
        document = to_editable(value)
        result = to_canonical(document, classify(value))
        if not _same(result, value):
            raise AssertionError(
                f"round trip changed the value:\n"
                f"  original:  {value!r}\n"
                f"  editable:  {document!r}\n"
                f"  canonical: {result!r}"
            )

    return _assert


def _same(left: Any, right: Any) -> bool:
    # Plain == treats True == 1 == 1.0; a round trip must keep the tag.
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            _same(left[key], right[key]) for key in left
        )
    if isinstance(left, list) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            _same(a, b) for a, b in zip(left, right, strict=True)
        )
    return type(left) is type(right) and left == right
