"""
Unauthenticated Diffie-Hellman handshake.

Each side sends its 8-byte public value and reads the peer's. The server
sends first; the client reads first. There is no authentication, so an
active man-in-the-middle is not detected.
"""

import socket

from streamchat.common.exceptions import HandshakeError, TransportError
from streamchat.common.protocol import DEFAULT_PROTOCOL, ProtocolConfig
from streamchat.common.utils import format_u64
from streamchat.crypto.dh import compute_shared_secret, generate_keypair
from streamchat.transport.framing import recv_public_value, send_public_value


def responder_handshake(sock: socket.socket, config: ProtocolConfig = DEFAULT_PROTOCOL) -> int:
    """
    Server side of the key exchange.

    Args:
        sock: Accepted connection
        config: Protocol parameters

    Returns:
        Shared secret

    Raises:
        HandshakeError: If the exchange fails for any I/O reason
    """
    print("[DH][SERVER] Starting key exchange...")
    keypair = generate_keypair(config)

    try:
        print(f"[DH][SERVER] Sending public key: {format_u64(keypair.public)}")
        send_public_value(sock, keypair.public)

        peer_public = recv_public_value(sock)
        print(f"[DH][SERVER] Received client public key: {format_u64(peer_public)}")
    except TransportError as e:
        raise HandshakeError(f"Key exchange failed: {e}") from e

    secret = compute_shared_secret(keypair.private, peer_public, config)
    print(f"[DH][SERVER] Shared secret = {format_u64(secret)}")
    return secret


def initiator_handshake(sock: socket.socket, config: ProtocolConfig = DEFAULT_PROTOCOL) -> int:
    """
    Client side of the key exchange.

    Args:
        sock: Connected socket
        config: Protocol parameters

    Returns:
        Shared secret

    Raises:
        HandshakeError: If the exchange fails for any I/O reason
    """
    print("[DH][CLIENT] Starting key exchange...")
    keypair = generate_keypair(config)

    try:
        peer_public = recv_public_value(sock)
        print(f"[DH][CLIENT] Received server public key: {format_u64(peer_public)}")

        print(f"[DH][CLIENT] Sending public key: {format_u64(keypair.public)}")
        send_public_value(sock, keypair.public)
    except TransportError as e:
        raise HandshakeError(f"Key exchange failed: {e}") from e

    secret = compute_shared_secret(keypair.private, peer_public, config)
    print(f"[DH][CLIENT] Shared secret = {format_u64(secret)}")
    return secret
