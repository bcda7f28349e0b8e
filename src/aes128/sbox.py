"""
S-box generation from field inversion plus the affine transform.

Tables are plain immutable values: build them once and pass them to
whatever needs them.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .gf import inverse, rotl8

AFFINE_CONSTANT = 0x63


def sbox_value(v: int) -> int:
    """Compute S-box output for a single byte."""
    inv = inverse(v)
    return (
        inv
        ^ rotl8(inv, 1)
        ^ rotl8(inv, 2)
        ^ rotl8(inv, 3)
        ^ rotl8(inv, 4)
        ^ AFFINE_CONSTANT
    )


@dataclass(frozen=True)
class SBoxTables:
    """Forward and inverse substitution tables (256 bytes each)."""

    sbox: bytes
    inv_sbox: bytes

    def __post_init__(self) -> None:
        if len(self.sbox) != 256 or len(self.inv_sbox) != 256:
            raise ValueError("S-box tables must have 256 entries")


def build_tables() -> SBoxTables:
    """
    Build the forward S-box and its inverse.

    Every forward output fills its own reverse slot, so the pair is a
    bijection by construction.

    Returns:
        SBoxTables with immutable forward/inverse tables
    """
    sbox = bytearray(256)
    inv_sbox = bytearray(256)
    for v in range(256):
        s = sbox_value(v)
        sbox[v] = s
        inv_sbox[s] = v
    return SBoxTables(sbox=bytes(sbox), inv_sbox=bytes(inv_sbox))


@lru_cache(maxsize=1)
def default_tables() -> SBoxTables:
    """Shared tables for callers that do not build their own."""
    return build_tables()
