from __future__ import annotations

import streamlit as st

from cardview.services.theme_colors import render_root_css

_CARD_STYLES = """
<style>
.card-list-title {
  color: hsl(var(--foreground));
  margin-bottom: 0;
}
.card-list-caption {
  color: hsl(var(--muted-foreground));
  font-size: 0.875rem;
}
.data-card {
  padding: 1rem;
  border-bottom: 1px solid hsl(var(--border));
  color: hsl(var(--card-foreground));
  background: hsl(var(--card));
}
.data-card.striped {
  background: hsl(var(--muted));
}
.data-card:hover {
  background: hsl(var(--accent));
}
.data-card-entry {
  display: flex;
  justify-content: space-between;
  gap: 1rem;
  padding: 0.25rem 0;
}
.data-card-label {
  color: hsl(var(--muted-foreground));
  font-weight: 500;
  text-transform: capitalize;
}
.data-card-value {
  text-align: right;
}
</style>
"""


class StreamlitStyleSink:
    """Injects the theme as a ``:root`` block of custom properties on the current page."""

    def __init__(self) -> None:
        self.properties: dict[str, str] = {}

    def set_property(self, name: str, value: str) -> None:
        self.properties[name] = value

    def commit(self) -> None:
        st.markdown(f"<style>\n{render_root_css(self.properties)}\n</style>", unsafe_allow_html=True)


def apply_card_styles() -> None:
    """Card rules reference the theme variables, so they are written once per run."""
    st.markdown(_CARD_STYLES, unsafe_allow_html=True)
