"""
XOR stream cipher over an LCG keystream.

Encryption and decryption are the same operation; direction is chosen only by
which generator (send or receive) the caller passes in.
"""

from streamchat.crypto.keystream import Lcg


def apply_keystream(data: bytes, keystream: Lcg) -> bytes:
    """
    XOR each byte of data with the next keystream byte.

    Advances the generator by exactly len(data) positions.

    Args:
        data: Plaintext or ciphertext
        keystream: Generator for this direction (mutated)

    Returns:
        Transformed bytes, same length and order as the input
    """
    return bytes(b ^ keystream.next_byte() for b in data)


def encrypt(plaintext: str, keystream: Lcg) -> bytes:
    """
    Encrypt a text message.

    Args:
        plaintext: Message text (UTF-8 encoded before XOR)
        keystream: Send generator

    Returns:
        Ciphertext bytes
    """
    return apply_keystream(plaintext.encode('utf-8'), keystream)


def decrypt(ciphertext: bytes, keystream: Lcg) -> str:
    """
    Decrypt a text message.

    Invalid UTF-8 (e.g. after a keystream desync) is replaced, not raised.

    Args:
        ciphertext: Received bytes
        keystream: Receive generator

    Returns:
        Decoded message text
    """
    return apply_keystream(ciphertext, keystream).decode('utf-8', errors='replace')
