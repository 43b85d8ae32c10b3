"""Pizzeria Frontend Package.

Streamlit pizza order form with:
- Frozen dataclass configuration
- Order form state machine with declarative validation
- Simulated or backend order submission
- Session state management
"""

__version__ = "1.0.0"
