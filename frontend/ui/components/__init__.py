"""Reusable UI components for Pizzeria."""
from frontend.ui.components.sidebar import (
    render_sidebar,
    render_backend_status,
)
from frontend.ui.components.order_form import (
    render_order_form,
    render_order_banner,
    render_order_banner_polling,
)

__all__ = [
    # Sidebar
    "render_sidebar",
    "render_backend_status",
    # Order form
    "render_order_form",
    "render_order_banner",
    "render_order_banner_polling",
]
