"""Page components for Pizzeria."""
from frontend.ui.pages.order import render_order_page

__all__ = [
    "render_order_page",
]
