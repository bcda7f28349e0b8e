"""
AES round transformations and their inverses.

State is a flat list of 16 bytes in column-major order:
  [0, 4, 8, 12]
  [1, 5, 9, 13]
  [2, 6, 10, 14]
  [3, 7, 11, 15]

Every function returns a new list and leaves its input untouched.
"""

from .gf import multiply
from .sbox import SBoxTables


def add_round_key(state: list[int], round_key: bytes) -> list[int]:
    """XOR state with round key."""
    return [s ^ k for s, k in zip(state, round_key)]


def sub_bytes(state: list[int], tables: SBoxTables) -> list[int]:
    """Apply S-box to each byte."""
    return [tables.sbox[b] for b in state]


def inv_sub_bytes(state: list[int], tables: SBoxTables) -> list[int]:
    """Apply inverse S-box to each byte."""
    return [tables.inv_sbox[b] for b in state]


def shift_rows(state: list[int]) -> list[int]:
    """Rotate row r left by r positions."""
    result = [0] * 16
    for row in range(4):
        for col in range(4):
            result[col * 4 + row] = state[((col + row) % 4) * 4 + row]
    return result


def inv_shift_rows(state: list[int]) -> list[int]:
    """Rotate row r right by r positions."""
    result = [0] * 16
    for row in range(4):
        for col in range(4):
            result[((col + row) % 4) * 4 + row] = state[col * 4 + row]
    return result


def mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the fixed {02,03,01,01} circulant matrix."""
    c0, c1, c2, c3 = col
    return [
        multiply(2, c0) ^ multiply(3, c1) ^ c2 ^ c3,
        c0 ^ multiply(2, c1) ^ multiply(3, c2) ^ c3,
        c0 ^ c1 ^ multiply(2, c2) ^ multiply(3, c3),
        multiply(3, c0) ^ c1 ^ c2 ^ multiply(2, c3),
    ]


def inv_mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the inverse {0e,0b,0d,09} matrix."""
    c0, c1, c2, c3 = col
    return [
        multiply(14, c0) ^ multiply(11, c1) ^ multiply(13, c2) ^ multiply(9, c3),
        multiply(9, c0) ^ multiply(14, c1) ^ multiply(11, c2) ^ multiply(13, c3),
        multiply(13, c0) ^ multiply(9, c1) ^ multiply(14, c2) ^ multiply(11, c3),
        multiply(11, c0) ^ multiply(13, c1) ^ multiply(9, c2) ^ multiply(14, c3),
    ]


def mix_columns(state: list[int]) -> list[int]:
    """Mix columns."""
    result = []
    for col in range(4):
        result.extend(mix_single_column(state[col * 4:col * 4 + 4]))
    return result


def inv_mix_columns(state: list[int]) -> list[int]:
    """Inverse mix columns."""
    result = []
    for col in range(4):
        result.extend(inv_mix_single_column(state[col * 4:col * 4 + 4]))
    return result
