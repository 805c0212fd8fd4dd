"""Settings screen renderer."""

from __future__ import annotations

import streamlit as st

from catalog import SETTINGS
from services.navigation import Navigator


def render_tab(navigator: Navigator, balance: int | None) -> None:
    st.markdown("### Settings")
    st.markdown(f"**👤 Guest User**  \n💎 {balance if balance is not None else '–'} Diamonds")
    for key, (label, value, _) in SETTINGS.items():
        if st.button(f"{label}: {value}", key=f"setting_{key}"):
            navigator.select_setting(key)
    st.caption("Version: RedVelvet Mobile v1.0")
