"""Premium screen renderer; purchase buttons only report a status."""

from __future__ import annotations

import streamlit as st

from catalog import DIAMOND_PACKAGES, SUBSCRIPTION_PLAN
from services.navigation import Navigator


def render_tab(navigator: Navigator, balance: int | None) -> None:
    st.markdown("### 👑 Premium Features")
    st.markdown(f"Current: Guest User  \n💎 {balance if balance is not None else '–'} Diamonds Remaining")

    st.markdown("#### 💎 Buy Diamonds")
    for package in DIAMOND_PACKAGES:
        info, action = st.columns([4, 1])
        info.markdown(f"**{package.title} - {package.diamonds} Diamonds** ({package.price})  \n{package.description}")
        if action.button("Purchase", key=f"buy_{package.title}"):
            navigator.purchase(package.title)

    st.markdown("#### 🔄 Monthly Subscription")
    perks = "  \n".join(f"✅ {perk}" for perk in SUBSCRIPTION_PLAN.perks)
    st.markdown(f"**{SUBSCRIPTION_PLAN.title}** ({SUBSCRIPTION_PLAN.price})  \n{perks}")
    if st.button("Subscribe", key="subscribe"):
        navigator.purchase(SUBSCRIPTION_PLAN.title)
