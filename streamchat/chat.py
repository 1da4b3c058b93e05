"""
Duplex chat session.

After the handshake the connection is split in two: a receive thread owns the
original socket for reading, a send thread owns a duplicate of it for writing.
Each thread also owns its own keystream generator, so nothing mutable is
shared between them and no lock is needed.
"""

import sys
import threading
from typing import Iterator, List, Optional

from streamchat.common.exceptions import TransportError
from streamchat.common.protocol import DEFAULT_PROTOCOL, QUIT_COMMAND, ProtocolConfig, Role, SessionState
from streamchat.common.utils import format_u64
from streamchat.crypto.cipher import decrypt, encrypt
from streamchat.crypto.keystream import derive_keystream_pair
from streamchat.transport.framing import recv_frame, send_frame


class ConsoleIO:
    """
    Operator console: input lines, peer messages and diagnostics.
    """

    def __init__(self, stdin=None, stdout=None, stderr=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def lines(self) -> Iterator[str]:
        """Fresh lazy iterator over input lines; ends at EOF."""
        return iter(self.stdin.readline, '')

    def prompt(self):
        print("> ", end="", file=self.stdout, flush=True)

    def show(self, text: str):
        """Display a message received from the peer."""
        print(f"\n[PEER] {text}", file=self.stdout)
        self.prompt()

    def info(self, text: str):
        print(text, file=self.stdout, flush=True)

    def error(self, text: str):
        print(text, file=self.stderr, flush=True)


class DuplexSession:
    """
    One live connection after a completed handshake.

    ACTIVE from construction until either loop exits, then CLOSED. The
    session is torn down once both loops have exited; neither loop cancels
    the other.
    """

    def __init__(
        self,
        sock,
        secret: int,
        role: Role,
        console: Optional[ConsoleIO] = None,
        config: ProtocolConfig = DEFAULT_PROTOCOL
    ):
        """
        Initialize the session.

        Args:
            sock: Connected socket, owned by the session from now on
            secret: DH shared secret
            role: Local role, selects the send/receive keystreams
            console: Operator I/O (defaults to stdin/stdout/stderr)
            config: Protocol parameters
        """
        self.sock = sock
        self.secret = secret
        self.role = role
        self.console = console or ConsoleIO()

        self._send_keystream, self._recv_keystream = derive_keystream_pair(secret, role, config)
        self._loop_exited = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def state(self) -> SessionState:
        if self._loop_exited.is_set():
            return SessionState.CLOSED
        return SessionState.ACTIVE

    def inbound(self):
        """
        Receive loop: read frames, decrypt, display.

        Zero-length frames are consumed silently. Exits on the first read
        error or when the peer closes the connection.
        """
        try:
            while True:
                try:
                    payload = recv_frame(self.sock)
                except TransportError as e:
                    self.console.error(f"[CHAT][RECV] Error or connection closed: {e}")
                    break

                if not payload:
                    continue

                self.console.show(decrypt(payload, self._recv_keystream))
        finally:
            self._loop_exited.set()

    def outbound(self):
        """
        Send loop: read operator lines, encrypt, send as frames.

        Blank lines are skipped and /quit stops the loop. The peer is not
        signalled on quit; only the duplicated send handle is closed.
        """
        try:
            send_sock = self.sock.dup()
        except OSError as e:
            self.console.error(f"[CHAT][SEND] Cannot open send handle: {e}")
            self._loop_exited.set()
            return

        try:
            self.console.info(f"[CHAT] Secure channel established! Type messages (or {QUIT_COMMAND}):")
            self.console.prompt()

            for line in self.console.lines():
                text = line.rstrip("\r\n")

                if not text:
                    self.console.prompt()
                    continue

                if text == QUIT_COMMAND:
                    self.console.info("[CHAT] Closing connection...")
                    break

                try:
                    send_frame(send_sock, encrypt(text, self._send_keystream))
                except TransportError as e:
                    self.console.error(f"[CHAT][SEND] Error sending message: {e}")
                    break

                self.console.prompt()

        except (OSError, UnicodeDecodeError) as e:
            self.console.error(f"[CHAT][SEND] Error reading input: {e}")
        finally:
            send_sock.close()
            self._loop_exited.set()

    def start(self):
        """Spawn the receive and send threads."""
        self.console.info(f"[STREAM] Generating keystream from secret {format_u64(self.secret)}...")

        # Daemon threads so Ctrl-C in the main thread can end the process
        self._threads = [
            threading.Thread(target=self.inbound, name="streamchat-recv", daemon=True),
            threading.Thread(target=self.outbound, name="streamchat-send", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for both loops.

        Returns:
            True if both loops have exited
        """
        for thread in self._threads:
            thread.join(timeout)
        return not any(thread.is_alive() for thread in self._threads)

    def run(self):
        """Run both loops until they have exited, then close the connection."""
        self.start()
        # Short join slices keep the main thread responsive to KeyboardInterrupt
        while not self.join(timeout=0.2):
            pass
        self.close()

    def close(self):
        self._loop_exited.set()
        self.sock.close()
        self.console.info("[CHAT] Connection closed.")
