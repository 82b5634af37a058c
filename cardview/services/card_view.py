from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from cardview.utils.constants import EMPTY_STATE_MESSAGE


@dataclass(frozen=True)
class CardEntry:
    label: str
    value: str


@dataclass(frozen=True)
class Card:
    index: int
    entries: tuple[CardEntry, ...]
    striped: bool


@dataclass(frozen=True)
class CardView:
    title: str | None
    headers: tuple[str, ...]
    cards: tuple[Card, ...]
    caption: str | None
    empty_message: str | None

    @property
    def is_empty(self) -> bool:
        return not self.cards


def display_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_count_caption(count: int) -> str:
    return f"Showing {count} rows"


def build_card_view(
    rows: Sequence[Mapping[str, Any]],
    *,
    title: str | None = None,
    show_header: bool = True,
) -> CardView:
    """Lay projected rows out as cards; labels come from the first row's keys."""
    heading = title if show_header and title else None
    if not rows:
        return CardView(
            title=heading,
            headers=(),
            cards=(),
            caption=None,
            empty_message=EMPTY_STATE_MESSAGE,
        )

    headers = tuple(rows[0].keys())
    cards = tuple(
        Card(
            index=index,
            entries=tuple(CardEntry(label=header, value=display_text(row.get(header))) for header in headers),
            striped=index % 2 == 0,
        )
        for index, row in enumerate(rows)
    )
    return CardView(
        title=heading,
        headers=headers,
        cards=cards,
        caption=row_count_caption(len(rows)) if heading else None,
        empty_message=None,
    )


def summarize_selection(column_names: Sequence[str], *, limit: int) -> tuple[str, list[str], int]:
    """Caption, listed names and overflow count for the selected-columns box."""
    count = len(column_names)
    caption = f"Currently displaying {count} column{'s' if count != 1 else ''}:"
    return caption, list(column_names[:limit]), max(count - limit, 0)
