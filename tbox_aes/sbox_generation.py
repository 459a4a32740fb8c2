"""
S-Box Generation Module

Derives the forward and inverse substitution boxes from the field structure
instead of hard-coding them: the forward box is the affine map applied to the
multiplicative inverse, the inverse box inverts the (inverse) affine map's
output.
"""

import numpy as np

from .constants import (
    BYTE_MASK,
    INV_SBOX_AFFINE_CONSTANT,
    INV_SBOX_AFFINE_ROTATIONS,
    SBOX_AFFINE_CONSTANT,
    SBOX_AFFINE_ROTATIONS,
)
from .gf_arithmetic import gf_inverse


def rotate_byte_right(b: int, n: int) -> int:
    n %= 8
    b &= BYTE_MASK
    return ((b >> n) | (b << (8 - n))) & BYTE_MASK


def affine_transform(b: int) -> int:
    """b ⊕ (b >>> 4) ⊕ (b >>> 5) ⊕ (b >>> 6) ⊕ (b >>> 7) ⊕ 0x63."""
    out = SBOX_AFFINE_CONSTANT
    for n in SBOX_AFFINE_ROTATIONS:
        out ^= rotate_byte_right(b, n)
    return out


def inverse_affine_transform(b: int) -> int:
    """(b >>> 2) ⊕ (b >>> 5) ⊕ (b >>> 7) ⊕ 0x05."""
    out = INV_SBOX_AFFINE_CONSTANT
    for n in INV_SBOX_AFFINE_ROTATIONS:
        out ^= rotate_byte_right(b, n)
    return out


def generate_sbox() -> np.ndarray:
    """Forward S-box: affine transform of the inverse, for all 256 bytes."""
    sbox = np.array([affine_transform(gf_inverse(b)) for b in range(256)],
                    dtype=np.uint8)
    sbox.setflags(write=False)
    return sbox


def generate_inverse_sbox() -> np.ndarray:
    """Inverse S-box: inverse of the inverse-affine transform (note the order)."""
    inv_sbox = np.array([gf_inverse(inverse_affine_transform(b)) for b in range(256)],
                        dtype=np.uint8)
    inv_sbox.setflags(write=False)
    return inv_sbox
