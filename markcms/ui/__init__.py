"""
Application state for the dashboard: session gate, navigation store,
view router and the screen controllers that hang off them.
"""

from markcms.ui.app_session import AppSession, AppSessionRegistry
from markcms.ui.navigation import NavigationStore
from markcms.ui.router import render_view
from markcms.ui.session import SessionGate

__all__ = ["AppSession", "AppSessionRegistry", "NavigationStore", "SessionGate", "render_view"]
