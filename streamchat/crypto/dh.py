"""
Diffie-Hellman Key Exchange

Implements classical DH over a hardcoded 64-bit prime. The resulting shared
secret seeds the keystream generators; it is not hashed into a key.
"""

import secrets

from streamchat.common.protocol import DEFAULT_PROTOCOL, KeyPair, ProtocolConfig


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation by square-and-multiply.

    Args:
        base: Base value
        exponent: Non-negative exponent
        modulus: Positive modulus

    Returns:
        base^exponent mod modulus (0 when modulus is 1)
    """
    if modulus == 1:
        return 0

    result = 1
    base %= modulus

    # Walk the exponent bits from least to most significant
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def generate_keypair(config: ProtocolConfig = DEFAULT_PROTOCOL) -> KeyPair:
    """
    Generate a DH keypair.

    Args:
        config: Protocol parameters (prime p, generator g)

    Returns:
        KeyPair with
        private: uniformly random 64-bit integer
        public: g^private mod p
    """
    private_key = secrets.randbits(64)
    public_key = mod_pow(config.generator, private_key, config.prime)

    return KeyPair(private=private_key, public=public_key)


def compute_shared_secret(
    private_key: int,
    peer_public_key: int,
    config: ProtocolConfig = DEFAULT_PROTOCOL
) -> int:
    """
    Compute the shared secret using peer's public key.

    Args:
        private_key: Own private key
        peer_public_key: Peer's public key
        config: Protocol parameters

    Returns:
        Shared secret K_s = peer_public_key^private_key mod p
    """
    return mod_pow(peer_public_key, private_key, config.prime)


# Test function for development
if __name__ == "__main__":
    print("[*] Testing Diffie-Hellman Key Exchange")

    config = DEFAULT_PROTOCOL
    print(f"\n[1] Parameters:")
    print(f"    p (prime): {config.prime:016X} ({config.prime.bit_length()} bits)")
    print(f"    g (generator): {config.generator}")

    alice = generate_keypair(config)
    bob = generate_keypair(config)
    print(f"\n[2] Public values:")
    print(f"    Alice: {alice.public:016X}")
    print(f"    Bob:   {bob.public:016X}")

    alice_shared = compute_shared_secret(alice.private, bob.public, config)
    bob_shared = compute_shared_secret(bob.private, alice.public, config)

    print(f"\n[3] Shared secrets:")
    print(f"    Alice computed: {alice_shared:016X}")
    print(f"    Bob computed:   {bob_shared:016X}")
    print(f"    Match: {alice_shared == bob_shared}")

    assert alice_shared == bob_shared, "Shared secrets don't match!"

    print("\n[✓] Diffie-Hellman key exchange test passed!")
