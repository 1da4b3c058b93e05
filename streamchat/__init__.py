"""
StreamChat

A console two-party chat implementing:
- Diffie-Hellman key exchange over a 64-bit prime
- LCG keystream XOR cipher (didactic, NOT secure)
- Length-prefixed message framing over TCP
- Concurrent duplex send/receive loops
"""

__version__ = "1.0.0"
