"""Screen controllers. Each one fetches its own data and navigates only via the store."""

from markcms.ui.screens.dashboard import Dashboard
from markcms.ui.screens.page_editor import PageEditor
from markcms.ui.screens.placeholders import placeholder
from markcms.ui.screens.project_manager import ProjectManager
from markcms.ui.screens.sidebar import Sidebar

__all__ = ["Dashboard", "PageEditor", "ProjectManager", "Sidebar", "placeholder"]
