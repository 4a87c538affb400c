"""Enum types mirroring the text-check constraints on the card tables."""

from enum import Enum


class CardShape(str, Enum):
    """Outline of the rendered card."""
    rectangle = "rectangle"
    rounded = "rounded"
    circle = "circle"


class LayoutStyle(str, Enum):
    """Overall card layout preset."""
    classic = "classic"
    modern = "modern"
    minimal = "minimal"
    creative = "creative"


class LayoutAlignment(str, Enum):
    """Content alignment within the card."""
    left = "left"
    center = "center"
    right = "right"


class SocialPlatform(str, Enum):
    """Supported social link platforms."""
    linkedin = "linkedin"
    twitter = "twitter"
    instagram = "instagram"
    facebook = "facebook"
    github = "github"
    youtube = "youtube"
    tiktok = "tiktok"
    telegram = "telegram"
    website = "website"
    custom = "custom"


class FetchStatus(str, Enum):
    """Outcome of a single-row fetch."""
    found = "found"
    not_found = "not_found"
    failed = "failed"
