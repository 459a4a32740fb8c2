"""Exceptions raised at the cipher's API boundary."""


class TBoxAESError(ValueError):
    """Base class for malformed cipher input."""


class InvalidKeySize(TBoxAESError):
    """Key is not 4, 6 or 8 words (16, 24 or 32 bytes) long."""


class InvalidBlockSize(TBoxAESError):
    """State is not exactly 4 words (16 bytes) long."""
