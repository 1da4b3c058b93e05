"""
Cryptographic primitives for StreamChat.

This package provides implementations of:
- Diffie-Hellman key exchange over a 64-bit prime
- LCG keystream generation with per-direction seeds
- XOR stream encryption/decryption
"""

from .dh import mod_pow, generate_keypair, compute_shared_secret
from .keystream import Lcg, derive_keystream_seeds, derive_keystream_pair
from .cipher import apply_keystream, encrypt, decrypt

__all__ = [
    'mod_pow',
    'generate_keypair',
    'compute_shared_secret',
    'Lcg',
    'derive_keystream_seeds',
    'derive_keystream_pair',
    'apply_keystream',
    'encrypt',
    'decrypt',
]
