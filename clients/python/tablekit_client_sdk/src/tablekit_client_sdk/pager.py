from __future__ import annotations

from typing import Union

ELLIPSIS = "…"
PageButton = Union[int, str]


def make_page_buttons(current: int, total_pages: int, max_buttons: int = 7) -> list[PageButton]:
    """Compact pager: first, last, the current page and its direct neighbors.

    ``make_page_buttons(5, 10)`` gives ``[1, "…", 4, 5, 6, "…", 10]``.
    """
    if total_pages <= max_buttons:
        return list(range(1, total_pages + 1))

    buttons: list[PageButton] = []

    def add(item: PageButton) -> None:
        if not buttons or buttons[-1] != item:
            buttons.append(item)

    left = max(1, current - 1)
    right = min(total_pages, current + 1)
    add(1)
    if left > 2:
        add(ELLIPSIS)
    for page in range(left, right + 1):
        add(page)
    if right < total_pages - 1:
        add(ELLIPSIS)
    add(total_pages)
    return buttons
