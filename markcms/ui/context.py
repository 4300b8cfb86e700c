"""Everything a screen needs to talk to the backend and to the shell."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from markcms.repos.base import Gateways
from markcms.ui.navigation import NavigationStore
from markcms.ui.notifications import Notifier


@dataclass
class ScreenContext:
    user_id: UUID
    gateways: Gateways
    navigation: NavigationStore
    notifier: Notifier
