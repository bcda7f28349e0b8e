"""
AES-128 key expansion.

A 16-byte key becomes 44 four-byte words w[0..43]; round key r is
w[4r..4r+3], so the whole schedule is 176 bytes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .sbox import SBoxTables, default_tables

KEY_SIZE = 16
NUM_ROUNDS = 10
NUM_WORDS = 4 * (NUM_ROUNDS + 1)
SCHEDULE_SIZE = 4 * NUM_WORDS


def round_constant(n: int) -> int:
    """
    Round constant RC(n) for n >= 1.

    RC(1) = 1; each following constant doubles the previous one, reducing
    with 0x1b only when the doubling overflows a byte.
    """
    if n < 1:
        raise ValueError(f"Round constant index must be >= 1, got {n}")
    rc = 1
    for _ in range(n - 1):
        if rc < 128:
            rc = 2 * rc
        else:
            rc = (2 * rc - 256) ^ 0x1B
    return rc


ROUND_CONSTANTS = tuple(round_constant(n) for n in range(1, NUM_ROUNDS + 1))


def rot_word(word: list[int]) -> list[int]:
    """[b0, b1, b2, b3] -> [b1, b2, b3, b0]"""
    return word[1:] + word[:1]


def sub_word(word: list[int], tables: SBoxTables) -> list[int]:
    """Apply the S-box to each byte of a word."""
    return [tables.sbox[b] for b in word]


@dataclass(frozen=True)
class KeySchedule:
    """
    Expanded key: eleven consecutive 16-byte round keys.

    Carries the S-box tables it was built with so block operations need
    nothing else.
    """

    data: bytes
    tables: SBoxTables

    def __post_init__(self) -> None:
        if len(self.data) != SCHEDULE_SIZE:
            raise ValueError(
                f"Key schedule must be {SCHEDULE_SIZE} bytes, got {len(self.data)}"
            )

    def round_key(self, round_num: int) -> bytes:
        """Return round key for round 0..10."""
        if not 0 <= round_num <= NUM_ROUNDS:
            raise ValueError(f"Round must be 0..{NUM_ROUNDS}, got {round_num}")
        return self.data[16 * round_num:16 * round_num + 16]

    def words(self) -> list[bytes]:
        return [self.data[i:i + 4] for i in range(0, SCHEDULE_SIZE, 4)]

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data


def expand(key: bytes, tables: SBoxTables | None = None) -> KeySchedule:
    """
    Expand a 128-bit key into the full key schedule.

    Args:
        key: 16-byte AES key
        tables: S-box tables (shared default tables if omitted)

    Returns:
        KeySchedule holding 176 bytes

    Raises:
        ValueError: If key is not 16 bytes
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    if tables is None:
        tables = default_tables()

    w = [list(key[i:i + 4]) for i in range(0, KEY_SIZE, 4)]

    for i in range(4, NUM_WORDS):
        temp = w[i - 1]
        if i % 4 == 0:
            # RotWord + SubWord + Rcon
            temp = sub_word(rot_word(temp), tables)
            temp[0] ^= ROUND_CONSTANTS[i // 4 - 1]
        w.append([w[i - 4][j] ^ temp[j] for j in range(4)])

    data = bytes(b for word in w for b in word)
    return KeySchedule(data=data, tables=tables)
