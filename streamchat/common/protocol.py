"""
Protocol definitions using Pydantic.

Holds the public Diffie-Hellman parameters, the keystream seed masks and the
wire layout shared by both peers. Nothing here is negotiated on the wire.
"""

import struct
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator


U64_LIMIT = 1 << 64

# Handshake: one raw big-endian u64 per direction, no framing
PUBLIC_VALUE = struct.Struct("!Q")

# Chat message: u32 big-endian length, then that many ciphertext bytes
FRAME_HEADER = struct.Struct("!I")
MAX_FRAME_PAYLOAD = 0xFFFFFFFF

QUIT_COMMAND = "/quit"


class Role(Enum):
    """Which side of the keystream assignment a peer uses."""
    INITIATOR = "client"
    RESPONDER = "server"


class SessionState(Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class ProtocolConfig(BaseModel):
    """Immutable protocol parameters passed into the handshake."""
    model_config = ConfigDict(frozen=True)

    prime: int = Field(0xD87FA3E291B4C7F3, gt=2, lt=U64_LIMIT, description="64-bit DH prime modulus P")
    generator: int = Field(2, gt=1, lt=U64_LIMIT, description="DH generator G")
    responder_send_mask: int = Field(
        0xAAAAAAAAAAAAAAAA, ge=0, lt=U64_LIMIT,
        description="S1: XORed into the secret for the server->client stream"
    )
    initiator_send_mask: int = Field(
        0x5555555555555555, ge=0, lt=U64_LIMIT,
        description="S2: XORed into the secret for the client->server stream"
    )

    @model_validator(mode="after")
    def check_generator_below_prime(self) -> "ProtocolConfig":
        if self.generator >= self.prime:
            raise ValueError("generator must be smaller than the prime")
        return self


class KeyPair(BaseModel):
    """DH key pair. The private half never leaves the process."""
    model_config = ConfigDict(frozen=True)

    private: int = Field(..., ge=0, lt=U64_LIMIT, repr=False)
    public: int = Field(..., ge=0, lt=U64_LIMIT)


DEFAULT_PROTOCOL = ProtocolConfig()
