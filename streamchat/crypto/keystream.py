"""
LCG Keystream Generator

A linear congruential generator with 32-bit state, seeded from the DH shared
secret. Each peer derives two generators, one per direction. This is a
teaching cipher, NOT a CSPRNG: the recurrence and constants are part of the
wire format and must not change.
"""

from typing import Tuple

from streamchat.common.protocol import DEFAULT_PROTOCOL, ProtocolConfig, Role


LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0xFFFFFFFF


class Lcg:
    """
    Keystream generator: state = (A * state + C) mod 2^32.

    Only the low 32 bits of the seed are kept. Every call to next_byte()
    consumes one stream position; both peers must stay byte-aligned.
    """

    def __init__(self, seed: int):
        self.state = seed & LCG_MASK

    def next_byte(self) -> int:
        """Advance the state and return its low 8 bits."""
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) & LCG_MASK
        return self.state & 0xFF

    def take(self, count: int) -> bytes:
        """Return the next `count` keystream bytes."""
        return bytes(self.next_byte() for _ in range(count))

    def __repr__(self) -> str:
        return f"Lcg(state=0x{self.state:08X})"


def derive_keystream_seeds(
    secret: int,
    role: Role,
    config: ProtocolConfig = DEFAULT_PROTOCOL
) -> Tuple[int, int]:
    """
    Derive the (send, receive) seeds for one side of a session.

    The server sends on secret ^ S1 and receives on secret ^ S2; the client
    uses the swapped assignment, so one side's send stream is the other
    side's receive stream.

    Args:
        secret: DH shared secret
        role: Local role
        config: Protocol parameters holding S1/S2

    Returns:
        Tuple of (send_seed, recv_seed)
    """
    responder_stream = secret ^ config.responder_send_mask
    initiator_stream = secret ^ config.initiator_send_mask

    if role is Role.RESPONDER:
        return (responder_stream, initiator_stream)
    return (initiator_stream, responder_stream)


def derive_keystream_pair(
    secret: int,
    role: Role,
    config: ProtocolConfig = DEFAULT_PROTOCOL
) -> Tuple[Lcg, Lcg]:
    """
    Build independent (send, receive) generators for one side of a session.
    """
    send_seed, recv_seed = derive_keystream_seeds(secret, role, config)
    return (Lcg(send_seed), Lcg(recv_seed))
