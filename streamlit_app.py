"""Streamlit entry point for the companion chat client."""

from __future__ import annotations

import logging

import streamlit as st

from app_settings import load_settings
from client_app import CompanionClient
from renderer import StateRenderer
from services.navigation import CHAT, CHATS, HOME, PREMIUM, SETTINGS_SCREEN
from tabs import chat as chat_tab
from tabs import history as history_tab
from tabs import home as home_tab
from tabs import premium as premium_tab
from tabs import settings as settings_tab

_CLIENT_KEY = "rv_client"
# Seconds between background polls for finished network results.
_POLL_INTERVAL = 0.5

_NAV_BUTTONS = (
    ("🏠 Home", HOME),
    ("💬 Chats", CHATS),
    ("⚙️ Settings", SETTINGS_SCREEN),
    ("👑 Premium", PREMIUM),
)


def _client(renderer: StateRenderer) -> CompanionClient:
    client = st.session_state.get(_CLIENT_KEY)
    if client is None:
        client = CompanionClient(renderer, settings=load_settings())
        st.session_state[_CLIENT_KEY] = client
        client.start()
    return client


def _render_sidebar(client: CompanionClient) -> None:
    for label, screen in _NAV_BUTTONS:
        if st.sidebar.button(label, key=f"nav_{screen}"):
            client.navigator.show(screen)
    if st.sidebar.button("💎 Refresh diamonds", key="nav_refresh"):
        client.sync.refresh()


def deliver_completions(client: CompanionClient) -> bool:
    """Drain finished results and rerun the app when any were delivered."""

    if client.pump() == 0:
        return False
    st.rerun()
    return True


@st.fragment(run_every=_POLL_INTERVAL)
def _poll_completions(client: CompanionClient) -> None:
    deliver_completions(client)


def main() -> None:
    """Render the current screen after delivering finished network results."""

    settings = load_settings()
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    st.set_page_config(page_title="RedVelvet", layout="centered")

    renderer = StateRenderer(st.session_state)
    client = _client(renderer)
    _render_sidebar(client)
    client.pump()
    _poll_completions(client)

    brand, counter = st.columns([4, 1])
    brand.markdown("## RedVelvet")
    counter.metric("💎", renderer.balance if renderer.balance is not None else client.balance.current())
    if renderer.status:
        st.caption(renderer.status)

    screen = client.navigator.screen
    if screen == CHAT:
        chat_tab.render_tab(client.navigator, renderer.transcript, renderer.typing)
    elif screen == CHATS:
        history_tab.render_tab(client.navigator)
    elif screen == SETTINGS_SCREEN:
        settings_tab.render_tab(client.navigator, renderer.balance)
    elif screen == PREMIUM:
        premium_tab.render_tab(client.navigator, renderer.balance)
    else:
        home_tab.render_tab(client.navigator)


if __name__ == "__main__":  # pragma: no cover
    main()
