"""
Byte-stream transport helpers for StreamChat.
"""

from .framing import (
    send_exact, recv_exact, send_frame, recv_frame,
    send_public_value, recv_public_value,
)

__all__ = [
    'send_exact',
    'recv_exact',
    'send_frame',
    'recv_frame',
    'send_public_value',
    'recv_public_value',
]
