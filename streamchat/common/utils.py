"""
Utility functions for StreamChat.
"""

from typing import Tuple


def format_u64(value: int) -> str:
    """
    Format an unsigned 64-bit value as 16 uppercase hex digits.

    Args:
        value: Integer in [0, 2^64)

    Returns:
        Zero-padded hex string, e.g. '00000000DEADBEEF'
    """
    return f"{value:016X}"


def format_prime(prime: int) -> str:
    """
    Format a 64-bit prime as four space-separated 16-bit hex groups.

    Args:
        prime: 64-bit modulus

    Returns:
        String such as 'D87F A3E2 91B4 C7F3'
    """
    return " ".join(f"{(prime >> shift) & 0xFFFF:04X}" for shift in (48, 32, 16, 0))


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split a 'host:port' string.

    IPv6 literals may be written in brackets, e.g. '[::1]:5000'.

    Args:
        address: Address string

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the port is missing or out of range
    """
    host, sep, port_str = address.rpartition(':')
    if not sep or not host:
        raise ValueError(f"Expected host:port, got '{address}'")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port in '{address}'")

    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in '{address}'")

    return host, port
