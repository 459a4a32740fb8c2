"""
Block Cipher API
================
Single-block AES encryption and decryption on top of the T-box tables.

Two layers are offered:

* stateless functions working on 32-bit words –
  ``encrypt_block(plaintext, schedule, tables)`` and
  ``decrypt_block(ciphertext, schedule, tables)`` with schedules from
  ``expand_key``;
* ``TBoxAES``, a façade that validates a key once (bytes or words), keeps both
  schedules, and encrypts/decrypts 16-byte blocks.

Usage
-----
```python
tables = build_tables()
enc, dec = expand_key([0x00010203, 0x04050607, 0x08090a0b, 0x0c0d0e0f], tables)
ct = encrypt_block([0x00112233, 0x44556677, 0x8899aabb, 0xccddeeff], enc, tables)
```
"""

from typing import List, Optional, Sequence, Union

from .constants import BLOCK_BYTES
from .errors import InvalidBlockSize
from .key_schedule import AESVariant, DecryptSchedule, EncryptSchedule, KeyScheduler
from .round_engine import RoundEngine
from .table_construction import TableSet, default_tables
from .word_packing import bytes_from_words, words_from_bytes


def encrypt_block(plaintext: Sequence[int], schedule: EncryptSchedule,
                  tables: Optional[TableSet] = None) -> List[int]:
    """Encrypt one 4-word block. Raises ``InvalidBlockSize`` for any other length."""
    return RoundEngine(tables).encrypt(plaintext, schedule)


def decrypt_block(ciphertext: Sequence[int], schedule: DecryptSchedule,
                  tables: Optional[TableSet] = None) -> List[int]:
    """Decrypt one 4-word block. Raises ``InvalidBlockSize`` for any other length."""
    return RoundEngine(tables).decrypt(ciphertext, schedule)


class TBoxAES:
    """AES-128/192/256 block cipher bound to one key."""

    def __init__(
        self,
        key: Union[bytes, bytearray, Sequence[int]],
        *,
        tables: Optional[TableSet] = None,
        verbose: bool = False,
    ) -> None:
        self.verbose = verbose

        # Key size is validated once, here.
        if isinstance(key, (bytes, bytearray, memoryview)):
            key = bytes(key)
            self.variant = AESVariant.from_key_bytes(len(key))
            key_words = words_from_bytes(key)
        else:
            key_words = list(key)
            self.variant = AESVariant.from_key_words(len(key_words))

        self.tables = tables if tables is not None else default_tables()
        self.engine = RoundEngine(self.tables)

        self._log("Deriving %s schedules …", self.variant.name)
        scheduler = KeyScheduler(self.tables, verbose=verbose)
        self.encrypt_schedule, self.decrypt_schedule = scheduler.schedules(key_words)
        self._log("Ready: %d rounds per block", self.variant.nr)

    def _log(self, fmt: str, *args) -> None:
        if self.verbose:
            print("[MAIN] " + (fmt % args if args else fmt))

    # ---------------------------------------------------------------------
    # Word interface
    # ---------------------------------------------------------------------
    def encrypt_words(self, plaintext: Sequence[int]) -> List[int]:
        return self.engine.encrypt(plaintext, self.encrypt_schedule)

    def decrypt_words(self, ciphertext: Sequence[int]) -> List[int]:
        return self.engine.decrypt(ciphertext, self.decrypt_schedule)

    # ---------------------------------------------------------------------
    # Byte interface
    # ---------------------------------------------------------------------
    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt exactly one 16-byte block."""
        return bytes_from_words(self.encrypt_words(self._block_words(block)))

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt exactly one 16-byte block."""
        return bytes_from_words(self.decrypt_words(self._block_words(block)))

    @staticmethod
    def _block_words(block: bytes) -> List[int]:
        if len(block) != BLOCK_BYTES:
            raise InvalidBlockSize(f"block must be exactly {BLOCK_BYTES} bytes, got {len(block)}")
        return words_from_bytes(block)
