"""Tests for exact-length I/O and message framing."""
import socket
import struct
import threading

import pytest

from streamchat.common.exceptions import ConnectionClosedError, TransportError
from streamchat.transport.framing import (
    recv_exact, recv_frame, recv_public_value, send_exact, send_frame, send_public_value,
)


def test_send_exact_and_recv_exact(sock_pair):
    a, b = sock_pair
    send_exact(a, b"hello")
    assert recv_exact(b, 5) == b"hello"


def test_recv_exact_accumulates_partial_writes(sock_pair):
    """Bytes arriving in pieces are reassembled into one read."""
    a, b = sock_pair

    def trickle():
        for piece in (b"he", b"l", b"lo wor", b"ld"):
            a.sendall(piece)

    writer = threading.Thread(target=trickle)
    writer.start()
    assert recv_exact(b, 11) == b"hello world"
    writer.join(5)


def test_recv_exact_zero_length(sock_pair):
    _, b = sock_pair
    assert recv_exact(b, 0) == b""


def test_recv_exact_fails_on_short_read_at_eof(sock_pair):
    """3 of 5 bytes then close is an error, not a short read."""
    a, b = sock_pair
    a.sendall(b"abc")
    a.close()

    with pytest.raises(ConnectionClosedError):
        recv_exact(b, 5)


def test_connection_closed_is_a_transport_error():
    assert issubclass(ConnectionClosedError, TransportError)


def test_send_exact_on_closed_socket_raises_transport_error(sock_pair):
    a, _ = sock_pair
    a.close()
    with pytest.raises(TransportError):
        send_exact(a, b"data")


def test_send_exact_to_closed_peer_raises_transport_error(sock_pair):
    a, b = sock_pair
    b.close()
    with pytest.raises(TransportError):
        # The first writes may be buffered; keep writing until the error surfaces
        for _ in range(1000):
            send_exact(a, b"x" * 65536)


def test_frame_layout_is_big_endian_length_prefix(sock_pair):
    a, b = sock_pair
    send_frame(a, b"\x01\x02\x03")
    assert recv_exact(b, 7) == b"\x00\x00\x00\x03\x01\x02\x03"


def test_frames_keep_order_and_sizes(sock_pair):
    """Frames of sizes [0, 3, 0, 5] arrive in the same order."""
    a, b = sock_pair
    payloads = [b"", b"abc", b"", b"12345"]
    for payload in payloads:
        send_frame(a, payload)

    received = [recv_frame(b) for _ in payloads]
    assert [len(p) for p in received] == [0, 3, 0, 5]
    assert received == payloads


def test_recv_frame_truncated_payload(sock_pair):
    a, b = sock_pair
    a.sendall(struct.pack("!I", 10) + b"short")
    a.close()

    with pytest.raises(ConnectionClosedError):
        recv_frame(b)


def test_recv_frame_truncated_header(sock_pair):
    a, b = sock_pair
    a.sendall(b"\x00\x00")
    a.close()

    with pytest.raises(ConnectionClosedError):
        recv_frame(b)


def test_public_value_is_eight_raw_bytes(sock_pair):
    a, b = sock_pair
    send_public_value(a, 0x0102030405060708)
    assert recv_exact(b, 8) == bytes([1, 2, 3, 4, 5, 6, 7, 8])


def test_public_value_round_trip_max(sock_pair):
    a, b = sock_pair
    send_public_value(a, 2**64 - 1)
    assert recv_public_value(b) == 2**64 - 1


def test_framing_over_tcp():
    """Works over a real loopback TCP connection too."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]

    result = {}

    def serve():
        conn, _ = listener.accept()
        with conn:
            result["frame"] = recv_frame(conn)

    server = threading.Thread(target=serve)
    server.start()
    with socket.create_connection(("127.0.0.1", port)) as client:
        send_frame(client, b"hello")
    server.join(5)
    listener.close()

    assert result["frame"] == b"hello"
