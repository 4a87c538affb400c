"""Card defaults and social platform URL templates."""

# ---------------------------------------------------------------------------
# Store tables
# ---------------------------------------------------------------------------
CARDS_TABLE: str = "business_cards"
SOCIAL_LINKS_TABLE: str = "social_links"
PROFILES_TABLE: str = "profiles"

# ---------------------------------------------------------------------------
# Card defaults (applied on first save)
# ---------------------------------------------------------------------------
DEFAULT_THEME: dict[str, str] = {
    "name": "default",
    "primary": "#3B82F6",
    "secondary": "#1E40AF",
    "background": "#FFFFFF",
    "text": "#1F2937",
}

DEFAULT_FONT: str = "Inter"

# Used when a title slugifies to nothing (e.g. "!!!" or an all-emoji title)
FALLBACK_SLUG: str = "card"

SLUG_PATTERN: str = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

# ---------------------------------------------------------------------------
# Social platforms
# Platforms listed here get their URL derived from the username; the rest
# (website, custom) need an explicit URL.
# ---------------------------------------------------------------------------
PLATFORM_URL_TEMPLATES: dict[str, str] = {
    "linkedin": "https://www.linkedin.com/in/{username}",
    "twitter": "https://x.com/{username}",
    "instagram": "https://www.instagram.com/{username}",
    "facebook": "https://www.facebook.com/{username}",
    "github": "https://github.com/{username}",
    "youtube": "https://www.youtube.com/@{username}",
    "tiktok": "https://www.tiktok.com/@{username}",
    "telegram": "https://t.me/{username}",
}

# ---------------------------------------------------------------------------
# User-facing failure messages (store errors never leak details)
# ---------------------------------------------------------------------------
MSG_LOAD_FAILED: str = "Failed to load card"
MSG_SAVE_FAILED: str = "Failed to save card"
MSG_DELETE_FAILED: str = "Failed to delete card"
MSG_PUBLISH_FAILED: str = "Failed to update publish status"
MSG_LINKS_LOAD_FAILED: str = "Failed to load social links"
MSG_LINKS_SAVE_FAILED: str = "Failed to save social links"
MSG_PROFILE_FAILED: str = "Failed to load profile"
