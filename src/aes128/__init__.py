"""
AES-128 Block Cipher

A from-scratch FIPS-197 AES-128 implementation:
1. GF(2^8) arithmetic and S-box derivation
2. Key expansion into eleven round keys
3. Forward/inverse round pipeline over one 16-byte block (ECB)
"""

__version__ = "1.0.0"

# FIPS-197 Appendix C.1 test values
DEFAULT_KEY_HEX = "000102030405060708090a0b0c0d0e0f"
DEFAULT_PT_HEX = "00112233445566778899aabbccddeeff"
DEFAULT_CT_HEX = "69c4e0d86a7b0430d8cdb78070b4c55a"

from .sbox import SBoxTables, build_tables, default_tables
from .key_schedule import KeySchedule, expand
from .cipher import encrypt_block, decrypt_block

__all__ = [
    "SBoxTables",
    "build_tables",
    "default_tables",
    "KeySchedule",
    "expand",
    "encrypt_block",
    "decrypt_block",
]
