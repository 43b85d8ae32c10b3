"""
Pizzeria Frontend Configuration.

Frozen dataclass for immutable configuration with environment overrides.
All magic numbers and configuration values should be defined here.

Environment variables can override defaults (read at module import time):
- API_BASE_URL: Backend API URL
- API_TIMEOUT_SECONDS: Override API timeout
- APP_VERSION: Override version string
- SUBMISSION_MODE: 'simulated' (default) or 'backend'
- SIMULATED_FAILURE_RATE: Probability (0.0-1.0) that a simulated order is rejected
- SIMULATED_LATENCY_MS: Artificial delay of the simulated order service
- ORDER_MESSAGE_TIMEOUT_MS: How long the success/failure banner stays visible
- BANNER_REFRESH_MS: Refresh interval of the banner fragment
- REQUIRE_TOPPING: Require at least one topping per order
"""

import os
from dataclasses import dataclass, field


def _get_int_env(name: str, default: int) -> int:
    """Get integer environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def _get_float_env(name: str, default: float) -> float:
    """Get float environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def _get_str_env(name: str, default: str) -> str:
    """Get string environment variable or return default."""
    return os.getenv(name, default)


def _get_bool_env(name: str, default: bool) -> bool:
    """Get boolean environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        return val.lower() in ('true', '1', 'yes')
    return default


SUBMISSION_MODE_SIMULATED = "simulated"
SUBMISSION_MODE_BACKEND = "backend"


@dataclass(frozen=True)
class PizzeriaConfig:
    """Immutable Pizzeria configuration.

    frozen=True ensures config values cannot be accidentally modified.
    Environment variables are read at module import time.
    """

    # Application
    APP_NAME: str = "Pizzeria"
    APP_ICON: str = "🍕"
    APP_VERSION: str = field(
        default_factory=lambda: _get_str_env('APP_VERSION', "1.0.0")
    )

    # Backend API
    API_BASE_URL: str = field(
        default_factory=lambda: _get_str_env('API_BASE_URL', 'http://localhost:8000')
    )
    API_TIMEOUT_SECONDS: int = field(
        default_factory=lambda: _get_int_env('API_TIMEOUT_SECONDS', 10)
    )
    MAX_RETRY_ATTEMPTS: int = 3

    # Order submission
    SUBMISSION_MODE: str = field(
        default_factory=lambda: _get_str_env('SUBMISSION_MODE', SUBMISSION_MODE_SIMULATED)
    )
    SIMULATED_FAILURE_RATE: float = field(
        default_factory=lambda: _get_float_env('SIMULATED_FAILURE_RATE', 0.0)
    )
    SIMULATED_LATENCY_MS: int = field(
        default_factory=lambda: _get_int_env('SIMULATED_LATENCY_MS', 0)
    )

    # Success/failure banner (30 sec)
    ORDER_MESSAGE_TIMEOUT_MS: int = field(
        default_factory=lambda: _get_int_env('ORDER_MESSAGE_TIMEOUT_MS', 30000)
    )
    BANNER_REFRESH_MS: int = field(
        default_factory=lambda: _get_int_env('BANNER_REFRESH_MS', 1000)
    )

    # Validation
    FULL_NAME_MIN_LENGTH: int = 3
    FULL_NAME_MAX_LENGTH: int = 20
    REQUIRE_TOPPING: bool = field(
        default_factory=lambda: _get_bool_env('REQUIRE_TOPPING', False)
    )

    @property
    def ORDER_MESSAGE_TIMEOUT_SECONDS(self) -> float:
        """Get banner display timeout in seconds."""
        return self.ORDER_MESSAGE_TIMEOUT_MS / 1000.0

    @property
    def BANNER_REFRESH_SECONDS(self) -> float:
        """Get banner refresh interval in seconds."""
        return self.BANNER_REFRESH_MS / 1000.0

    @property
    def SIMULATED_LATENCY_SECONDS(self) -> float:
        """Get simulated service latency in seconds."""
        return self.SIMULATED_LATENCY_MS / 1000.0

    @property
    def uses_backend(self) -> bool:
        """Check whether orders are sent to the backend API."""
        return self.SUBMISSION_MODE == SUBMISSION_MODE_BACKEND


# Global immutable config instance
config = PizzeriaConfig()

# Size codes and their display labels, in menu order
SIZE_CHOICES = {
    'S': 'Small',
    'M': 'Medium',
    'L': 'Large',
}

SIZE_PLACEHOLDER = "----Choose Size----"

# Default topping catalog as {id, label} records
DEFAULT_TOPPINGS = (
    {'id': '1', 'label': 'Pepperoni'},
    {'id': '2', 'label': 'Green Peppers'},
    {'id': '3', 'label': 'Pineapple'},
    {'id': '4', 'label': 'Mushrooms'},
    {'id': '5', 'label': 'Ham'},
)
