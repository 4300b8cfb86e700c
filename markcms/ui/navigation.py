"""
Navigation store.

The one authoritative record of which screen is shown and what project /
page is selected. Screens never assign to it; they call navigate_to_view().
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID

from markcms.models.navigation import VIEWS, NavigationState, View

logger = logging.getLogger(__name__)

NavigationListener = Callable[[NavigationState], None]


class NavigationStore:
    """Observable container for NavigationState with a single mutation entry point."""

    def __init__(self, initial: NavigationState | None = None):
        self._state = initial or NavigationState()
        self._listeners: list[NavigationListener] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    def navigate_to_view(
        self,
        view: View,
        project_id: UUID | None = None,
        page_id: UUID | None = None,
    ) -> NavigationState:
        """
        Switch to `view`, merging the selection.

        A selection argument that is omitted (or None) keeps the previous
        value; there is no reset. Navigating to the dashboard therefore
        leaves the last project selected, and a later plain
        navigate_to_view("editor") resumes it.
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view!r}")

        previous = self._state
        self._state = NavigationState(
            current_view=view,
            selected_project_id=project_id if project_id is not None else previous.selected_project_id,
            selected_page_id=page_id if page_id is not None else previous.selected_page_id,
        )
        logger.debug("navigate %s -> %s", previous.current_view, view)

        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every navigation.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
