"""
GF(2^8) Arithmetic Module

Byte-level arithmetic in the AES field: bytes are polynomials of degree <= 7
over GF(2), multiplied modulo x^8 + x^4 + x^3 + x + 1.
"""

from functools import lru_cache

import numpy as np

from .constants import BYTE_MASK, REDUCTION_BYTE


def gf_add(x: int, y: int) -> int:
    """Field addition (and subtraction): bitwise xor."""
    return (x ^ y) & BYTE_MASK


def gf_multiply(x: int, y: int) -> int:
    """
    Carry-less multiply of two bytes, reduced modulo the AES polynomial.

    Classical double-and-conditionally-reduce: eight iterations, each adding
    ``x`` into the product when the low bit of ``y`` is set, then doubling
    ``x`` (folding 0x1B back in on overflow) and halving ``y``.
    """
    x &= BYTE_MASK
    y &= BYTE_MASK
    product = 0
    for _ in range(8):
        if y & 1:
            product ^= x
        carry = x & 0x80
        x = (x << 1) & BYTE_MASK
        if carry:
            x ^= REDUCTION_BYTE
        y >>= 1
    return product


def gf_power(x: int, k: int) -> int:
    """Square-and-multiply exponentiation. ``gf_power(x, 0) == 1`` for every x, 0 included."""
    if k < 0:
        raise ValueError("exponent must be non-negative")
    result = 1
    base = x & BYTE_MASK
    while k:
        if k & 1:
            result = gf_multiply(result, base)
        base = gf_multiply(base, base)
        k >>= 1
    return result


def gf_inverse(x: int) -> int:
    """
    Multiplicative inverse as x^254.

    Zero has no inverse; x^254 evaluates to 0 there, and the S-box tables rely
    on exactly that value.
    """
    return gf_power(x, 254)


def multiplication_table(constant: int) -> np.ndarray:
    """Return the 256-entry uint8 table of ``constant · x`` for every byte x."""
    table = np.zeros(256, dtype=np.uint8)
    for x in range(256):
        table[x] = gf_multiply(constant, x)
    table.setflags(write=False)
    return table


@lru_cache(maxsize=None)
def round_constant(index: int) -> int:
    """
    Key-schedule round constant rc[index] = 2^(index-1).

    rc[0] is the unused placeholder 0; rc[1] = 0x01, rc[2] = 0x02, ...,
    rc[9] = 0x1B, rc[10] = 0x36.
    """
    if index < 0:
        raise ValueError("round-constant index must be non-negative")
    if index == 0:
        return 0
    return gf_power(0x02, index - 1)
