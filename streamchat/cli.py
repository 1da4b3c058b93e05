#!/usr/bin/env python3
"""
StreamChat command line.

Usage:
    streamchat server <port>
    streamchat client <address:port>
"""

import argparse
import sys

from streamchat.client import StreamChatClient
from streamchat.common.exceptions import ConnectionSetupError, HandshakeError
from streamchat.server import StreamChatServer


def port_number(value: str) -> int:
    port = int(value)
    if not 0 <= port < 65536:
        raise argparse.ArgumentTypeError(f"port must be 0-65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamchat",
        description="Stream cipher chat with Diffie-Hellman key generation"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    server = subparsers.add_parser("server", help="Start server")
    server.add_argument("port", type=port_number, help="Port to listen on")

    client = subparsers.add_parser("client", help="Connect to server")
    client.add_argument("addr", help="Server address (ip:port)")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    print("=" * 70)
    print("  STREAMCHAT - LCG stream cipher chat (didactic, NOT secure)")
    print("=" * 70 + "\n")

    try:
        if args.command == "server":
            print(f"[SERVER] Starting on port {args.port}...")
            StreamChatServer(args.port).start()
        else:
            print(f"[CLIENT] Connecting to {args.addr}...")
            StreamChatClient(args.addr).start()

    except (ConnectionSetupError, HandshakeError, ValueError) as e:
        print(f"[!] Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n[*] Interrupted, session ended")

    return 0


if __name__ == "__main__":
    sys.exit(main())
