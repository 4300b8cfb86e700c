"""
Repository layer for markcms.

All SQL lives here and ONLY here. No database access outside this module.
"""

from markcms.repos.analytics_repo import AnalyticsRepo
from markcms.repos.base import Gateways
from markcms.repos.page_repo import PageRepo
from markcms.repos.project_repo import ProjectRepo
from markcms.repos.template_repo import TemplateRepo
from markcms.repos.user_repo import UserRepo


def postgres_gateways() -> Gateways:
    """Gateway set backed by the asyncpg pool."""
    return Gateways(
        users=UserRepo(),
        projects=ProjectRepo(),
        pages=PageRepo(),
        templates=TemplateRepo(),
        analytics=AnalyticsRepo(),
    )


__all__ = [
    "Gateways",
    "UserRepo",
    "ProjectRepo",
    "PageRepo",
    "TemplateRepo",
    "AnalyticsRepo",
    "postgres_gateways",
]
