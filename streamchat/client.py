"""
StreamChat Client

Connects to a server, runs the DH key exchange (reading the server's public
value first) and starts the duplex chat.
"""

import socket
from typing import Optional
from dotenv import load_dotenv

from streamchat.chat import ConsoleIO, DuplexSession
from streamchat.common.exceptions import ConnectionSetupError
from streamchat.common.protocol import DEFAULT_PROTOCOL, ProtocolConfig, Role
from streamchat.common.utils import parse_address
from streamchat.handshake import initiator_handshake

load_dotenv()


class StreamChatClient:
    def __init__(
        self,
        address: str,
        config: ProtocolConfig = DEFAULT_PROTOCOL,
        console: Optional[ConsoleIO] = None
    ):
        self.address = address
        self.host, self.port = parse_address(address)
        self.config = config
        self.console = console
        self.sock = None

    def connect(self):
        """Open the TCP connection."""
        try:
            self.sock = socket.create_connection((self.host, self.port))
        except OSError as e:
            raise ConnectionSetupError(f"Cannot connect to {self.address}: {e}") from e

        print(f"[CLIENT] Connected to {self.address}")
        return self.sock

    def establish(self):
        """
        Connect and run the key exchange.

        Returns:
            Tuple of (socket, shared secret)
        """
        sock = self.connect()
        try:
            secret = initiator_handshake(sock, self.config)
        except Exception:
            self.disconnect()
            raise
        return sock, secret

    def start(self):
        """Run a single chat session."""
        sock, secret = self.establish()
        print("[CLIENT] Shared secret established, starting chat...")
        DuplexSession(sock, secret, Role.INITIATOR, self.console, self.config).run()

    def disconnect(self):
        if self.sock:
            self.sock.close()
            self.sock = None
