"""Dashboard screen: recent projects, headline stats, quick actions."""

from __future__ import annotations

import logging
import math
from uuid import UUID

from markcms import config
from markcms.errors import BackendError
from markcms.models.analytics import AnalyticsEvent
from markcms.models.project import Project, ProjectResponse
from markcms.models.screens import DashboardScreen, DashboardStats, ScreenAction
from markcms.ui.context import ScreenContext

logger = logging.getLogger(__name__)

QUICK_ACTIONS = [
    ScreenAction(label="Create New Project", view="projects"),
    ScreenAction(label="Browse Templates", view="templates"),
    ScreenAction(label="View Analytics", view="analytics"),
]


def compute_stats(projects: list[Project], events: list[AnalyticsEvent]) -> DashboardStats:
    """
    Headline numbers for the dashboard cards.

    active_users is an estimate (a fixed share of views), not a measurement.
    """
    total_views = len(events)
    return DashboardStats(
        total_projects=len(projects),
        published_sites=sum(1 for p in projects if p.is_published),
        total_views=total_views,
        active_users=math.floor(total_views * config.settings.ACTIVE_USER_RATIO),
    )


class Dashboard:
    def __init__(self, ctx: ScreenContext):
        self._ctx = ctx

    async def render(self) -> DashboardScreen:
        gateways = self._ctx.gateways
        try:
            projects = await gateways.projects.list_recent(
                self._ctx.user_id, limit=config.settings.DASHBOARD_RECENT_LIMIT
            )
            events = await gateways.analytics.list_for_user(self._ctx.user_id)
        except BackendError as e:
            logger.error("Error loading dashboard data: %s", e)
            self._ctx.notifier.error("Failed to load dashboard")
            return DashboardScreen(quick_actions=QUICK_ACTIONS)

        return DashboardScreen(
            stats=compute_stats(projects, events),
            recent_projects=[ProjectResponse.from_model(p) for p in projects],
            quick_actions=QUICK_ACTIONS,
        )

    def open_project(self, project_id: UUID) -> None:
        self._ctx.navigation.navigate_to_view("editor", project_id)
