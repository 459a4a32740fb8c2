"""
T-box AES Package

Table-driven AES (FIPS-197) for 128/192/256-bit keys: GF(2^8) arithmetic,
generated S-boxes, fused T/U lookup tables, key schedules and the round engine.
"""

from .block_cipher import TBoxAES, decrypt_block, encrypt_block
from .errors import InvalidBlockSize, InvalidKeySize, TBoxAESError
from .gf_arithmetic import gf_add, gf_inverse, gf_multiply, gf_power
from .key_schedule import (
    AESVariant,
    DecryptSchedule,
    EncryptSchedule,
    KeyScheduler,
    RoundKeySchedule,
    expand_key,
)
from .round_engine import RoundEngine
from .table_construction import TableBuilder, TableSet, build_tables, default_tables
from .word_packing import bytes_from_words, bytes_to_word, word_to_bytes, words_from_bytes

__all__ = [
    'TBoxAES',
    'encrypt_block',
    'decrypt_block',
    'expand_key',
    'build_tables',
    'default_tables',
    'TableBuilder',
    'TableSet',
    'KeyScheduler',
    'RoundKeySchedule',
    'EncryptSchedule',
    'DecryptSchedule',
    'AESVariant',
    'RoundEngine',
    'TBoxAESError',
    'InvalidKeySize',
    'InvalidBlockSize',
    'gf_add',
    'gf_multiply',
    'gf_power',
    'gf_inverse',
    'word_to_bytes',
    'bytes_to_word',
    'words_from_bytes',
    'bytes_from_words',
]
