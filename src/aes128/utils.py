"""
Utility functions for byte/state conversions and hex formatting.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

import string

_HEX_DIGITS = set(string.hexdigits)


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) != 16:
        raise ValueError(f"Expected 16 bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def bytes_to_hex(data: bytes) -> str:
    """Lowercase hex, two digits per byte."""
    return data.hex()


def parse_hex(text: str, label: str = "Hex text") -> bytes:
    """
    Parse hex digits, ignoring any whitespace.

    Raises:
        ValueError: On odd length or non-hex characters
    """
    compact = "".join(text.split())
    if len(compact) % 2:
        raise ValueError(f"{label} has odd length {len(compact)}")
    if not set(compact) <= _HEX_DIGITS:
        raise ValueError(f"{label} contains non-hex characters: {compact!r}")
    return bytes.fromhex(compact)


def parse_hex16(hex_str: str, label: str = "Key") -> bytes:
    """
    Parse a 16-byte value (key or block) given as 32 hex characters.

    Raises:
        ValueError: If the string is not exactly 32 hex digits
    """
    hex_str = hex_str.strip()
    if len(hex_str) != 32:
        raise ValueError(
            f"{label} must be 32 hex chars (16 bytes), got {len(hex_str)} chars"
        )
    return parse_hex(hex_str, label)


def format_state_grid(state: list[list[int]]) -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      00 44 88 cc
      11 55 99 dd
      22 66 aa ee
      33 77 bb ff
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_bytes_grid(data: bytes) -> str:
    """Format 16 bytes as a 4x4 grid (column-major view)."""
    return format_state_grid(bytes_to_state(data))


def format_table(table: bytes) -> str:
    """Format a 256-entry lookup table as a 16x16 grid with row/col labels."""
    lines = ["    " + " ".join(f"{col:2x}" for col in range(16))]
    for row in range(16):
        cells = " ".join(f"{table[row * 16 + col]:02x}" for col in range(16))
        lines.append(f"{row:x}0  {cells}")
    return "\n".join(lines)

