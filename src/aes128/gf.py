"""
Arithmetic in Rijndael's field GF(2^8).

Addition is XOR. Multiplication is carry-less binary multiplication
reduced modulo the polynomial x^8 + x^4 + x^3 + x + 1 (0x11b).
"""

REDUCING_POLY = 0x11B


def multiply(a: int, b: int) -> int:
    """
    Multiply two field elements.

    Args:
        a: Byte (0-255)
        b: Byte (0-255)

    Returns:
        Product in GF(2^8)
    """
    result = 0
    for i in range(8):
        if b & (1 << i):
            result ^= a << i

    # Reduce the up-to-15-bit intermediate back into a byte
    for i in range(15, 7, -1):
        if result & (1 << i):
            result ^= REDUCING_POLY << (i - 8)
    return result


def inverse(x: int) -> int:
    """
    Multiplicative inverse as x^254.

    Computed by 254 sequential multiplications seeded at 1. Zero has no
    inverse; the loop yields 0 for it and that value is kept as-is.
    """
    result = 1
    for _ in range(254):
        result = multiply(result, x)
    return result


def rotl8(x: int, n: int) -> int:
    """Rotate a byte left by n bits."""
    n %= 8
    return ((x << n) | (x >> (8 - n))) & 0xFF
