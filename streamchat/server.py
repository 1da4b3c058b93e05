"""
StreamChat Server

Implements the server side:
1. Bind and wait for exactly one client
2. DH key exchange (server sends its public value first)
3. Duplex encrypted chat until both loops exit
"""

import os
import socket
from typing import Optional
from dotenv import load_dotenv

from streamchat.chat import ConsoleIO, DuplexSession
from streamchat.common.exceptions import ConnectionSetupError
from streamchat.common.protocol import DEFAULT_PROTOCOL, ProtocolConfig, Role
from streamchat.common.utils import format_prime
from streamchat.handshake import responder_handshake

# Load environment
load_dotenv()


class StreamChatServer:
    def __init__(
        self,
        port: int,
        host: Optional[str] = None,
        config: ProtocolConfig = DEFAULT_PROTOCOL,
        console: Optional[ConsoleIO] = None
    ):
        self.host = host or os.getenv('STREAMCHAT_BIND_HOST', '0.0.0.0')
        self.port = port
        self.config = config
        self.console = console
        self.listener = None

    @property
    def address(self):
        """Actual (host, port) once bound; useful when port 0 was requested."""
        return self.listener.getsockname()[:2] if self.listener else (self.host, self.port)

    def bind(self):
        """Create the listening socket."""
        try:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.host, self.port))
            listener.listen(1)
        except OSError as e:
            raise ConnectionSetupError(f"Cannot listen on {self.host}:{self.port}: {e}") from e

        self.listener = listener
        host, port = self.address
        print(f"[SERVER] Listening on {host}:{port}")

    def show_parameters(self):
        print("[DH] Using hardcoded DH parameters:")
        print(f"  p = {format_prime(self.config.prime)} (64-bit prime - public)")
        print(f"  g = {self.config.generator} (generator - public)")

    def accept(self):
        """Wait for one client connection."""
        print("[SERVER] Waiting for client...")
        try:
            conn, address = self.listener.accept()
        except OSError as e:
            raise ConnectionSetupError(f"Accept failed: {e}") from e

        print(f"[SERVER] Client connected from {address[0]}:{address[1]}")
        return conn

    def establish(self):
        """
        Accept one client and run the key exchange.

        Returns:
            Tuple of (connection, shared secret)
        """
        conn = self.accept()
        try:
            secret = responder_handshake(conn, self.config)
        except Exception:
            conn.close()
            raise
        return conn, secret

    def start(self):
        """Serve a single chat session."""
        self.bind()
        try:
            self.show_parameters()
            conn, secret = self.establish()
        finally:
            # Only one client per run
            self.close()

        print("[SERVER] Shared secret established, starting chat...")
        DuplexSession(conn, secret, Role.RESPONDER, self.console, self.config).run()

    def close(self):
        if self.listener:
            self.listener.close()
            self.listener = None
