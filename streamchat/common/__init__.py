"""
Common utilities and protocol definitions for StreamChat.
"""

from .protocol import *
from .utils import format_u64, format_prime, parse_address
from .exceptions import *

__all__ = [
    'format_u64',
    'format_prime',
    'parse_address',
]
