"""
Utility functions for particle value parsing
"""

from .logger import (
    get_logger,
    get_category_logger,
    configure_logger,
)
from .serialization import Serializer, format_number

__all__ = [
    'get_logger',
    'get_category_logger',
    'configure_logger',
    'Serializer',
    'format_number',
]
