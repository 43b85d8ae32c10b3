"""Pizzeria Frontend Application.

Streamlit app rendering the pizza order form.
"""

import logging
import sys
from pathlib import Path

# Load environment variables from .env file BEFORE any other imports
# so that the frozen config picks them up
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.config.settings import config
from frontend.utils import SessionState
from frontend.ui.components import render_sidebar
from frontend.ui.pages import render_order_page
from frontend.services import set_session_id

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=config.APP_NAME,
        page_icon=config.APP_ICON,
        layout="centered",
        initial_sidebar_state="collapsed",
    )

    # Initialize session state with defaults
    SessionState.init_defaults()

    if config.uses_backend:
        set_session_id(SessionState.get_session_id())

    render_sidebar()
    render_order_page()


if __name__ == "__main__":
    main()
