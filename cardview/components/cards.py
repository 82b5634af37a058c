from __future__ import annotations

from html import escape

import streamlit as st

from cardview.models.settings import CardSettings
from cardview.services.card_view import Card, CardView


def _pixels(value: str, default: int) -> int:
    digits = value.removesuffix("px")
    return int(digits) if digits.isdigit() else default


def card_html(card: Card) -> str:
    entries = "".join(
        '<div class="data-card-entry">'
        f'<span class="data-card-label">{escape(entry.label)}:</span>'
        f'<span class="data-card-value">{escape(entry.value)}</span>'
        "</div>"
        for entry in card.entries
    )
    striped = " striped" if card.striped else ""
    return f'<div class="data-card{striped}">{entries}</div>'


def render_card_list(view: CardView, settings: CardSettings) -> None:
    if view.title:
        st.markdown(f'<h2 class="card-list-title">{escape(view.title)}</h2>', unsafe_allow_html=True)
        if view.caption:
            st.markdown(f'<p class="card-list-caption">{escape(view.caption)}</p>', unsafe_allow_html=True)

    if view.is_empty:
        st.write(view.empty_message)
        return

    with st.container(height=_pixels(settings.card_height, 400), border=True):
        layout = (
            f"padding: {escape(settings.container_padding)}; "
            f"min-width: {escape(settings.min_card_width)};"
        )
        body = "".join(card_html(card) for card in view.cards)
        st.markdown(f'<div class="data-card-list" style="{layout}">{body}</div>', unsafe_allow_html=True)
