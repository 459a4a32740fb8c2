import numpy as np
import pytest

from tbox_aes import (
    InvalidBlockSize,
    InvalidKeySize,
    TBoxAES,
    TBoxAESError,
    decrypt_block,
    encrypt_block,
    expand_key,
)

PLAINTEXT = [0x00112233, 0x44556677, 0x8899AABB, 0xCCDDEEFF]
KEY_128 = [0x00010203, 0x04050607, 0x08090A0B, 0x0C0D0E0F]
KEY_192 = KEY_128 + [0x10111213, 0x14151617]
KEY_256 = KEY_192 + [0x18191A1B, 0x1C1D1E1F]

# ---------------------------------------------------------------------
# FIPS-197 Appendix C - Example Vectors

vectors = [
    (KEY_128, [0x69C4E0D8, 0x6A7B0430, 0xD8CDB780, 0x70B4C55A]),
    (KEY_192, [0xDDA97CA4, 0x864CDFE0, 0x6EAF70A0, 0xEC0D7191]),
    (KEY_256, [0x8EA2B7CA, 0x516745BF, 0xEAFC4990, 0x4B496089]),
]


@pytest.mark.parametrize("key,ciphertext", vectors)
def test_known_answer_encrypt(tables, key, ciphertext):
    encrypt, _ = expand_key(key, tables)
    assert encrypt_block(PLAINTEXT, encrypt, tables) == ciphertext


@pytest.mark.parametrize("key,ciphertext", vectors)
def test_known_answer_decrypt(tables, key, ciphertext):
    _, decrypt = expand_key(key, tables)
    assert decrypt_block(ciphertext, decrypt, tables) == PLAINTEXT


def test_fips_appendix_b(tables):
    key = [0x2B7E1516, 0x28AED2A6, 0xABF71588, 0x09CF4F3C]
    encrypt, _ = expand_key(key, tables)
    assert encrypt_block([0x3243F6A8, 0x885A308D, 0x313198A2, 0xE0370734], encrypt, tables) == [
        0x3925841D, 0x02DC09FB, 0xDC118597, 0x196A0B32]


def test_default_tables_are_used_when_omitted():
    encrypt, decrypt = expand_key(KEY_128)
    ciphertext = encrypt_block(PLAINTEXT, encrypt)
    assert ciphertext == vectors[0][1]
    assert decrypt_block(ciphertext, decrypt) == PLAINTEXT


@pytest.mark.parametrize("nk", [4, 6, 8])
def test_round_trip_random_blocks(tables, nk):
    rng = np.random.default_rng(197 + nk)
    for _ in range(20):
        key = [int(w) for w in rng.integers(0, 1 << 32, size=nk, dtype=np.uint64)]
        block = [int(w) for w in rng.integers(0, 1 << 32, size=4, dtype=np.uint64)]
        encrypt, decrypt = expand_key(key, tables)
        ciphertext = encrypt_block(block, encrypt, tables)
        assert ciphertext != block
        assert decrypt_block(ciphertext, decrypt, tables) == block


def test_schedule_reused_across_blocks(tables):
    encrypt, decrypt = expand_key(KEY_256, tables)
    blocks = [[i, i + 1, i + 2, i + 3] for i in range(0, 64, 4)]
    ciphertexts = [encrypt_block(b, encrypt, tables) for b in blocks]
    assert len({tuple(c) for c in ciphertexts}) == len(blocks)
    assert [decrypt_block(c, decrypt, tables) for c in ciphertexts] == blocks


@pytest.mark.parametrize("length", [3, 5])
def test_block_size_validation(tables, length):
    encrypt, decrypt = expand_key(KEY_128, tables)
    with pytest.raises(InvalidBlockSize):
        encrypt_block([0] * length, encrypt, tables)
    with pytest.raises(InvalidBlockSize):
        decrypt_block([0] * length, decrypt, tables)


# ---------------------------------------------------------------------
# Byte-level façade

def test_facade_bytes_key():
    cipher = TBoxAES(bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    ciphertext = cipher.encrypt_block(plaintext)
    assert ciphertext == bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a")
    assert cipher.decrypt_block(ciphertext) == plaintext


@pytest.mark.parametrize("key_hex,ciphertext_hex", [
    ("000102030405060708090a0b0c0d0e0f1011121314151617",
     "dda97ca4864cdfe06eaf70a0ec0d7191"),
    ("000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
     "8ea2b7ca516745bfeafc49904b496089"),
])
def test_facade_longer_keys(key_hex, ciphertext_hex):
    cipher = TBoxAES(bytearray.fromhex(key_hex))
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    assert cipher.encrypt_block(plaintext).hex() == ciphertext_hex
    assert cipher.decrypt_block(bytes.fromhex(ciphertext_hex)) == plaintext


def test_facade_word_key():
    cipher = TBoxAES(KEY_192)
    assert cipher.variant.nr == 12
    assert cipher.encrypt_words(PLAINTEXT) == vectors[1][1]
    assert cipher.decrypt_words(vectors[1][1]) == PLAINTEXT


@pytest.mark.parametrize("key", [b"", b"\x00" * 15, b"\x00" * 20, b"\x00" * 33, [0] * 5])
def test_facade_rejects_bad_keys(key):
    with pytest.raises(InvalidKeySize):
        TBoxAES(key)


@pytest.mark.parametrize("block", [b"", b"\x00" * 15, b"\x00" * 17])
def test_facade_rejects_bad_blocks(block):
    cipher = TBoxAES(b"\x00" * 16)
    with pytest.raises(InvalidBlockSize):
        cipher.encrypt_block(block)
    with pytest.raises(InvalidBlockSize):
        cipher.decrypt_block(block)


def test_errors_share_a_base():
    assert issubclass(InvalidKeySize, TBoxAESError)
    assert issubclass(InvalidBlockSize, TBoxAESError)
    assert issubclass(TBoxAESError, ValueError)


def test_verbose_facade_logs(capsys):
    TBoxAES(b"\x00" * 32, verbose=True)
    out = capsys.readouterr().out
    assert "[MAIN] Deriving AES256 schedules" in out
    assert "[KEY]" in out
