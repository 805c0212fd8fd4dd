"""Static reference data shown on the home, premium and settings screens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Companion:
    id: int
    display_name: str
    description: str

    @property
    def short_name(self) -> str:
        """Display name without the tagline, e.g. ``"👩 Sophia"``."""

        return self.display_name.split(" - ", 1)[0]

    def greeting(self) -> str:
        return f"Hello! I'm {self.display_name}. How can I make your day better?"


@dataclass(frozen=True)
class DiamondPackage:
    title: str
    diamonds: int
    price: str
    description: str


@dataclass(frozen=True)
class SubscriptionPlan:
    title: str
    price: str
    perks: Tuple[str, ...]


COMPANIONS: Tuple[Companion, ...] = (
    Companion(1, "👩 Sophia - The Passionate", "A caring soul with deep brown eyes"),
    Companion(2, "👩 Emma - The Caring", "Sweet and nurturing with a bright smile"),
    Companion(3, "👩 Isabella - The Confident", "Strong and independent with piercing green eyes"),
    Companion(4, "👨 James - The Romantic", "Charming gentleman with a warm heart"),
    Companion(5, "👩 Alexa - The Playful", "Fun-loving spirit with infectious laughter"),
)

DIAMOND_PACKAGES: Tuple[DiamondPackage, ...] = (
    DiamondPackage("Starter Pack", 100, "$2.99", "Perfect for trying out premium features"),
    DiamondPackage("Popular Pack", 500, "$9.99", "Great value for regular users"),
    DiamondPackage("Premium Pack", 1200, "$19.99", "Best value for power users"),
)

SUBSCRIPTION_PLAN = SubscriptionPlan(
    "Premium Monthly",
    "$14.99/month",
    ("Unlimited messages", "All companions", "Priority support", "No ads"),
)

# Settings key -> (label, current value, status message when tapped).
SETTINGS: Dict[str, Tuple[str, str, str]] = {
    "gender": ("Companion Gender", "Both Male & Female", "Gender preference: Currently set to 'Both'"),
    "style": ("Conversation Style", "Romantic & Caring", "Conversation style: Currently set to 'Romantic & Caring'"),
    "language": ("Language", "English", "Language: Currently set to 'English'"),
    "notifications": ("Notifications", "Enabled", "Notifications: Currently enabled"),
    "darkmode": ("Dark Mode", "Disabled", "Dark mode: Currently disabled"),
    "backup": ("Chat Backup", "Auto-save conversations", "Chat backup: Auto-save enabled"),
    "privacy": ("Privacy Policy", "View our privacy commitment", "Privacy Policy: View at redvelvet.com/privacy"),
    "terms": ("Terms of Service", "Read terms and conditions", "Terms of Service: View at redvelvet.com/terms"),
}


def find_companion(companion_id: int) -> Companion | None:
    for companion in COMPANIONS:
        if companion.id == companion_id:
            return companion
    return None


__all__ = [
    "COMPANIONS",
    "Companion",
    "DIAMOND_PACKAGES",
    "DiamondPackage",
    "SETTINGS",
    "SUBSCRIPTION_PLAN",
    "SubscriptionPlan",
    "find_companion",
]
