"""Tests for the LCG keystream and XOR cipher."""
from streamchat.common.protocol import DEFAULT_PROTOCOL, Role
from streamchat.crypto.cipher import apply_keystream, decrypt, encrypt
from streamchat.crypto.keystream import Lcg, derive_keystream_pair, derive_keystream_seeds


def test_lcg_known_sequence():
    """Seed 0 yields the reference recurrence output."""
    lcg = Lcg(0)
    assert [lcg.next_byte() for _ in range(4)] == [0x39, 0x7E, 0xDF, 0x2C]
    assert lcg.state == 3596950572


def test_lcg_keeps_low_32_bits_of_seed():
    assert Lcg(0x1234567890ABCDEF ^ 0x5555555555555555).state == 0xC5FE98BA
    assert Lcg(0xFFFFFFFF00000000).state == 0


def test_lcg_is_deterministic():
    """Same seed, same number of steps, same bytes."""
    a = Lcg(0xCAFEBABE)
    b = Lcg(0xCAFEBABE)
    assert a.take(64) == b.take(64)
    assert a.next_byte() == b.next_byte()


def test_lcg_different_seeds_differ():
    assert Lcg(1).take(32) != Lcg(2).take(32)


def test_seed_derivation_uses_masks():
    secret = 0x1234567890ABCDEF
    send_seed, recv_seed = derive_keystream_seeds(secret, Role.RESPONDER)
    assert send_seed == secret ^ 0xAAAAAAAAAAAAAAAA
    assert recv_seed == secret ^ 0x5555555555555555


def test_role_symmetry():
    """Server's send stream is the client's receive stream and vice versa."""
    for secret in (0, 1, 0x1234_5678_9ABC_DEF0, 2**64 - 1):
        server_send, server_recv = derive_keystream_seeds(secret, Role.RESPONDER)
        client_send, client_recv = derive_keystream_seeds(secret, Role.INITIATOR)
        assert server_send == client_recv
        assert server_recv == client_send
        assert server_send != server_recv


def test_apply_keystream_round_trip():
    """Applying the same keystream positions twice restores the buffer."""
    data = bytes(range(256)) * 3
    ciphertext = apply_keystream(data, Lcg(0xDEADBEEF))
    assert ciphertext != data
    assert apply_keystream(ciphertext, Lcg(0xDEADBEEF)) == data


def test_apply_keystream_advances_by_length():
    lcg = Lcg(99)
    reference = Lcg(99)
    apply_keystream(b"12345", lcg)
    reference.take(5)
    assert lcg.state == reference.state


def test_apply_keystream_empty_buffer():
    lcg = Lcg(7)
    assert apply_keystream(b"", lcg) == b""
    assert lcg.state == 7


def test_conversation_both_directions():
    """Server and client streams decrypt each other's messages in order."""
    secret = 0x1234_5678_9ABC_DEF0
    server_send, server_recv = derive_keystream_pair(secret, Role.RESPONDER)
    client_send, client_recv = derive_keystream_pair(secret, Role.INITIATOR)

    for message in ["Hello Rust!", "second", "héllo ünïcode"]:
        assert decrypt(encrypt(message, server_send), client_recv) == message

    assert decrypt(encrypt("Hi!", client_send), server_recv) == "Hi!"


def test_skipped_position_desynchronizes():
    """A receiver that falls one byte behind no longer decrypts correctly."""
    send, recv = Lcg(42), Lcg(42)
    recv.next_byte()
    assert decrypt(encrypt("hello world", send), recv) != "hello world"


def test_decrypt_replaces_invalid_utf8():
    """Garbage after desync is shown lossily instead of raising."""
    ciphertext = apply_keystream(b"\xff\xfe", Lcg(5))
    assert decrypt(ciphertext, Lcg(5)) == "\ufffd\ufffd"


def test_default_masks():
    assert DEFAULT_PROTOCOL.responder_send_mask == 0xAAAAAAAAAAAAAAAA
    assert DEFAULT_PROTOCOL.initiator_send_mask == 0x5555555555555555
