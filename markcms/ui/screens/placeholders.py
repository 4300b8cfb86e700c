"""Screens that only show a heading."""

from __future__ import annotations

from markcms.models.screens import PlaceholderScreen

PLACEHOLDERS = {
    "templates": ("Templates", "Browse and use pre-built templates"),
    "analytics": ("Analytics", "Track your website performance"),
    "settings": ("Settings", "Configure your CMS preferences"),
}


def placeholder(view: str) -> PlaceholderScreen:
    title, subtitle = PLACEHOLDERS[view]
    return PlaceholderScreen(screen=view, title=title, subtitle=subtitle)
