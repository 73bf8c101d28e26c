"""
Helpers for building a function compute client from process configuration.
"""

from .fc_config import FCConfig, get_fc_config
from .fc import get_fc_client

__all__ = [
    "FCConfig",
    "get_fc_config",
    "get_fc_client",
]
