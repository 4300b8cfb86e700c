"""View router: maps the current view tag to the screen that renders it."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping

from markcms.models.navigation import NavigationState
from markcms.models.screens import Screen

ScreenBuilder = Callable[[NavigationState], Awaitable[Screen]]


def render_view(state: NavigationState, screens: Mapping[str, ScreenBuilder]) -> ScreenBuilder:
    """
    Pick the screen builder for state.current_view.

    Total over any mapping that has a "dashboard" entry: an unknown view
    tag falls back to the dashboard.
    """
    return screens.get(state.current_view) or screens["dashboard"]
