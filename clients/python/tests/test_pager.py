from __future__ import annotations

import pytest

from tablekit_client_sdk.pager import ELLIPSIS, make_page_buttons


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 3, [1, 2, 3]),
        (5, 10, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
        (1, 1, [1]),
        (1, 10, [1, 2, ELLIPSIS, 10]),
        (10, 10, [1, ELLIPSIS, 9, 10]),
        (2, 10, [1, 2, 3, ELLIPSIS, 10]),
        (9, 10, [1, ELLIPSIS, 8, 9, 10]),
        (3, 10, [1, 2, 3, 4, ELLIPSIS, 10]),
    ],
)
def test_page_buttons(current: int, total: int, expected: list) -> None:
    assert make_page_buttons(current, total, 7) == expected


def test_all_pages_when_total_fits() -> None:
    assert make_page_buttons(4, 7, 7) == [1, 2, 3, 4, 5, 6, 7]


def test_never_repeats_consecutive_entries() -> None:
    for total in range(1, 30):
        for current in range(1, total + 1):
            buttons = make_page_buttons(current, total, 5)
            assert all(left != right for left, right in zip(buttons, buttons[1:]))
            assert buttons[0] == 1
            assert buttons[-1] == total
            assert current in buttons
