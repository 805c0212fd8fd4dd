"""Home screen renderer."""

from __future__ import annotations

import streamlit as st

from catalog import COMPANIONS
from services.navigation import Navigator


def render_tab(navigator: Navigator) -> None:
    """List the available companions with a chat button each."""

    st.markdown("#### Available Companions:")
    for companion in COMPANIONS:
        info, action = st.columns([4, 1])
        info.markdown(f"**{companion.display_name}**  \n{companion.description}")
        if action.button("Chat", key=f"chat_{companion.id}"):
            navigator.open_chat(companion.id)
            st.rerun()
