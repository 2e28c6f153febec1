from themesmith.ui.widgets.sidebar import SidebarNav
from themesmith.ui.widgets.status_strip import StatusStrip

__all__ = [
    "SidebarNav",
    "StatusStrip",
]
