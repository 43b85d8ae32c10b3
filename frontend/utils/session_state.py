"""Session state management for the Pizzeria frontend.

This module provides centralized session state management for Streamlit,
with features like:
- Default value initialization
- Type-safe access
- One OrderForm per browser session
- User session isolation (via session_id)
"""

import logging
import uuid
from typing import Any, Callable, Dict

import streamlit as st

from frontend.utils.order_form import OrderForm

logger = logging.getLogger(__name__)

ORDER_FORM_KEY = 'order_form'
TOPPING_CATALOG_KEY = 'topping_catalog'


class SessionState:
    """Centralized session state management for Pizzeria.

    This class provides a clean interface for managing Streamlit session state.
    It handles initialization, access, and cleanup of session state values.

    Example:
        >>> from frontend.utils import SessionState
        >>> SessionState.init_defaults()
        >>> form = SessionState.get_order_form(lambda: OrderForm(service))
    """

    # Default value factories for session state keys
    # Using factories prevents mutable defaults from being shared across sessions
    _DEFAULT_FACTORIES: Dict[str, Callable[[], Any]] = {
        # Session isolation - unique ID per browser session
        'session_id': lambda: str(uuid.uuid4()),

        # Error state
        'last_error': lambda: None,
    }

    @classmethod
    def _get_session_state(cls):
        """Get Streamlit session state."""
        return st.session_state

    @classmethod
    def init_defaults(cls) -> None:
        """Initialize default session state values.

        Call this at the start of your Streamlit app to ensure
        all expected keys exist with sensible defaults.
        """
        session_state = cls._get_session_state()

        for key, factory in cls._DEFAULT_FACTORIES.items():
            if key not in session_state:
                session_state[key] = factory()
                logger.debug(f"Initialized session state key: {key}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a value from session state."""
        session_state = cls._get_session_state()
        return session_state.get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a value in session state."""
        session_state = cls._get_session_state()
        session_state[key] = value
        logger.debug(f"Set session state: {key} = {type(value).__name__}")

    @classmethod
    def clear(cls, key: str) -> None:
        """Clear a session state key."""
        session_state = cls._get_session_state()
        if key in session_state:
            del session_state[key]
            logger.debug(f"Cleared session state key: {key}")

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if a key exists in session state."""
        session_state = cls._get_session_state()
        return key in session_state

    @classmethod
    def get_or_set(cls, key: str, default: Any) -> Any:
        """Get value if exists, otherwise set and return default."""
        if not cls.has(key):
            cls.set(key, default)
        return cls.get(key)

    # Order form helpers
    @classmethod
    def get_order_form(cls, factory: Callable[[], OrderForm]) -> OrderForm:
        """Get this session's order form, creating it on first use.

        Args:
            factory: Builds a new OrderForm

        Returns:
            The session's OrderForm
        """
        form = cls.get(ORDER_FORM_KEY)
        if form is None:
            form = factory()
            cls.set(ORDER_FORM_KEY, form)
            logger.info("Created order form for session")
        return form

    @classmethod
    def get_topping_catalog(cls, loader: Callable[[], Any]) -> Any:
        """Get the topping catalog, loading it once per session."""
        catalog = cls.get(TOPPING_CATALOG_KEY)
        if catalog is None:
            catalog = loader()
            cls.set(TOPPING_CATALOG_KEY, catalog)
        return catalog

    @classmethod
    def reset_order_form(cls) -> None:
        """Tear down this session's order form."""
        form = cls.get(ORDER_FORM_KEY)
        if form is not None:
            form.close()
        cls.clear(ORDER_FORM_KEY)

    # Session ID helpers
    @classmethod
    def get_session_id(cls) -> str:
        """Get the unique session ID for this browser session.

        It's generated once per browser session and persists across reruns.

        Returns:
            Unique session ID string (UUID format)
        """
        session_id = cls.get('session_id')
        if not session_id:
            session_id = str(uuid.uuid4())
            cls.set('session_id', session_id)
            logger.info(f"Generated new session ID: {session_id[:8]}...")
        return session_id
