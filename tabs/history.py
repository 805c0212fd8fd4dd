"""Chat history screen renderer."""

from __future__ import annotations

import streamlit as st

from catalog import COMPANIONS
from services.navigation import Navigator

_PREVIEWS = (
    ("Hey there! How was your day?", "2 hours ago"),
    ("I missed talking with you!", "Yesterday"),
    ("You always make me smile 😊", "2 days ago"),
    ("Looking forward to our next chat", "3 days ago"),
    ("Ready for some fun? 😉", "1 week ago"),
)


def render_tab(navigator: Navigator) -> None:
    st.markdown("### Chat History")
    for companion, (preview, when) in zip(COMPANIONS, _PREVIEWS):
        st.markdown(f"**💖 {companion.short_name}**  \n{preview}  \n_{when}_")
    if st.button("Clear All History", key="clear_history"):
        navigator.clear_history()
