"""
Exact-length I/O and message framing over a connected socket.

Wire formats (all integers big-endian):
- Handshake value: 8 raw bytes, no header
- Chat frame: u32 length + length bytes of ciphertext (length 0 is a no-op)

OSError from the socket is re-raised as TransportError so callers only deal
with StreamChat exceptions.
"""

import socket

from streamchat.common.exceptions import ConnectionClosedError, TransportError
from streamchat.common.protocol import FRAME_HEADER, MAX_FRAME_PAYLOAD, PUBLIC_VALUE


def send_exact(sock: socket.socket, data: bytes) -> None:
    """
    Write the whole buffer.

    sendall() keeps writing through short writes until every byte is out.

    Raises:
        TransportError: If the underlying write fails
    """
    try:
        sock.sendall(data)
    except OSError as e:
        raise TransportError(f"Write failed: {e}") from e


def recv_exact(sock: socket.socket, length: int) -> bytes:
    """
    Read exactly `length` bytes.

    Args:
        sock: Connected socket
        length: Number of bytes to read

    Returns:
        Exactly `length` bytes

    Raises:
        ConnectionClosedError: If the peer closes before `length` bytes arrive
        TransportError: If the underlying read fails
    """
    buf = bytearray()

    while len(buf) < length:
        try:
            chunk = sock.recv(length - len(buf))
        except OSError as e:
            raise TransportError(f"Read failed: {e}") from e

        if not chunk:
            raise ConnectionClosedError(
                f"Connection closed before receiving enough data "
                f"({len(buf)} of {length} bytes)"
            )
        buf.extend(chunk)

    return bytes(buf)


def send_frame(sock: socket.socket, payload: bytes) -> None:
    """
    Send one length-prefixed frame.

    Raises:
        ValueError: If the payload does not fit a u32 length
        TransportError: If the write fails
    """
    if len(payload) > MAX_FRAME_PAYLOAD:
        raise ValueError(
            f"Frame payload too large: {len(payload)} bytes (max {MAX_FRAME_PAYLOAD})"
        )

    send_exact(sock, FRAME_HEADER.pack(len(payload)) + payload)


def recv_frame(sock: socket.socket) -> bytes:
    """
    Receive one length-prefixed frame.

    Returns:
        Frame payload; b"" for a zero-length frame
    """
    (length,) = FRAME_HEADER.unpack(recv_exact(sock, FRAME_HEADER.size))
    if length == 0:
        return b""
    return recv_exact(sock, length)


def send_public_value(sock: socket.socket, value: int) -> None:
    """Send a DH public value as 8 raw big-endian bytes."""
    send_exact(sock, PUBLIC_VALUE.pack(value))


def recv_public_value(sock: socket.socket) -> int:
    """Receive a DH public value sent by send_public_value()."""
    (value,) = PUBLIC_VALUE.unpack(recv_exact(sock, PUBLIC_VALUE.size))
    return value
