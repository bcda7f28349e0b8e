"""
Cross-checks of the cipher against PyCryptodome and FIPS-197 known answers.

PyCryptodome's ECB mode is an independent AES implementation, so any
disagreement in either direction points at this package.
"""

from __future__ import annotations

from dataclasses import dataclass

from Crypto.Cipher import AES

from . import DEFAULT_KEY_HEX, DEFAULT_PT_HEX, DEFAULT_CT_HEX
from .cipher import BLOCK_SIZE, encrypt_block, decrypt_block
from .key_schedule import KEY_SIZE, expand
from .sbox import SBoxTables


@dataclass(frozen=True)
class KnownAnswer:
    """One published key/plaintext/ciphertext triple."""

    key: bytes
    plaintext: bytes
    ciphertext: bytes
    source: str

    @classmethod
    def from_hex(cls, key_hex: str, pt_hex: str, ct_hex: str,
                 source: str) -> "KnownAnswer":
        return cls(
            key=bytes.fromhex(key_hex),
            plaintext=bytes.fromhex(pt_hex),
            ciphertext=bytes.fromhex(ct_hex),
            source=source,
        )


KNOWN_ANSWERS = [
    KnownAnswer.from_hex(
        DEFAULT_KEY_HEX, DEFAULT_PT_HEX, DEFAULT_CT_HEX, "FIPS-197 Appendix C.1"
    ),
    KnownAnswer.from_hex(
        "2b7e151628aed2a6abf7158809cf4f3c",
        "3243f6a8885a308d313198a2e0370734",
        "3925841d02dc09fbdc118597196a0b32",
        "FIPS-197 Appendix B",
    ),
    KnownAnswer.from_hex("00" * 16, "00" * 16,
                         "66e94bd4ef8a2c3b884cfa59ca342b2e", "All zeros"),
    KnownAnswer.from_hex("ff" * 16, "00" * 16,
                         "a1f6258c877d5fcd8964484538bfc92c", "All-ones key"),
    KnownAnswer.from_hex("ff" * 16, "ff" * 16,
                         "bcbf217cb280cf30b2517052193ab979", "All ones"),
]


def _library_cipher(key: bytes):
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    return AES.new(key, AES.MODE_ECB)


def golden_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt one block with PyCryptodome."""
    if len(plaintext) != BLOCK_SIZE:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")
    return _library_cipher(key).encrypt(plaintext)


def golden_decrypt(key: bytes, ciphertext: bytes) -> bytes:
    """Decrypt one block with PyCryptodome."""
    if len(ciphertext) != BLOCK_SIZE:
        raise ValueError(f"Ciphertext must be 16 bytes, got {len(ciphertext)}")
    return _library_cipher(key).decrypt(ciphertext)


def cross_check(
    key: bytes,
    plaintext: bytes,
    expected_ciphertext: bytes | None = None,
    tables: SBoxTables | None = None,
) -> tuple[bool, str]:
    """
    Run one block through this cipher in both directions and compare.

    Encryption must match PyCryptodome (and expected_ciphertext when
    given); decrypting that ciphertext must give back the plaintext.

    Returns:
        Tuple of (is_correct, error_detail)
    """
    schedule = expand(key, tables)
    ciphertext = encrypt_block(schedule, plaintext)

    reference = golden_encrypt(key, plaintext)
    if expected_ciphertext is not None and reference != expected_ciphertext:
        return False, (
            f"Library disagrees with known answer: expected "
            f"{expected_ciphertext.hex()}, library gave {reference.hex()}"
        )
    if ciphertext != reference:
        return False, (
            f"Ciphertext mismatch: expected {reference.hex()}, "
            f"got {ciphertext.hex()}"
        )

    recovered = decrypt_block(schedule, ciphertext)
    if recovered != plaintext:
        return False, (
            f"Round trip mismatch: expected {plaintext.hex()}, "
            f"got {recovered.hex()}"
        )
    return True, ""
