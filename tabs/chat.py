"""Chat screen renderer."""

from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

from services.navigation import Navigator


def transcript_html(transcript: Sequence[tuple[str, bool]], *, typing_label: str | None = None) -> str:
    """Return the chat stream markup, oldest message first."""

    entries = [
        f"<div class='chat-entry {'from-user' if from_user else 'from-companion'}'>{html.escape(text)}</div>"
        for text, from_user in transcript
    ]
    if typing_label:
        entries.append(f"<div class='chat-entry typing'>{html.escape(typing_label)}</div>")
    if not entries:
        entries.append("<div class='chat-entry'>No messages yet.</div>")
    return f"<div class='chat-stream'>{''.join(entries)}</div>"


def render_tab(navigator: Navigator, transcript: Sequence[tuple[str, bool]], typing: bool) -> None:
    """Render the open conversation and its input box."""

    chat = navigator.chat
    if chat is None:
        st.info("Pick a companion on the home screen to start chatting.")
        return

    header_left, header_right = st.columns([4, 1])
    header_left.markdown(f"### 💖 {html.escape(chat.companion.display_name)}")
    if header_right.button("← Back", key="chat_back"):
        navigator.close_chat()
        st.rerun()

    typing_label = f"💖 {chat.companion.display_name} is typing..." if typing else None
    st.markdown(transcript_html(transcript, typing_label=typing_label), unsafe_allow_html=True)

    prompt = st.chat_input("Type your message...", key="chat_input")
    if prompt:
        chat.send(prompt)
        st.rerun()
