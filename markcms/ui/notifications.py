"""One-shot user-facing notifications (toasts)."""

from __future__ import annotations

from markcms.models.screens import Notification


class Notifier:
    """Queue of toasts, drained when the app shell is rendered."""

    def __init__(self):
        self._pending: list[Notification] = []

    def success(self, message: str) -> None:
        self._pending.append(Notification(level="success", message=message))

    def error(self, message: str) -> None:
        self._pending.append(Notification(level="error", message=message))

    def drain(self) -> list[Notification]:
        pending, self._pending = self._pending, []
        return pending
