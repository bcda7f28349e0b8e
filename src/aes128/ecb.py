"""
Multi-block processing around the block cipher.

Splits data into 16-byte blocks (zero-padding a short final block),
runs each block through the cipher independently, and handles the hex
text format used for ciphertext files. There is no chaining between
blocks: identical plaintext blocks give identical ciphertext blocks.

Files are streamed one block at a time and never read in full.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, TextIO

from .cipher import BLOCK_SIZE, encrypt_block, decrypt_block
from .key_schedule import KeySchedule
from .trace import TraceRecorder
from .utils import bytes_to_hex, parse_hex

HEX_BLOCK_CHARS = 2 * BLOCK_SIZE
READ_CHUNK = 4096


def pad_block(chunk: bytes) -> bytes:
    """Zero-pad a chunk of at most 16 bytes to a full block."""
    if len(chunk) > BLOCK_SIZE:
        raise ValueError(f"Chunk longer than a block: {len(chunk)} bytes")
    return chunk + bytes(BLOCK_SIZE - len(chunk))


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, stopping short only at end of stream."""
    buf = b""
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            break
        buf += chunk
    return buf


def iter_blocks(source: bytes | BinaryIO) -> Iterator[bytes]:
    """
    Yield consecutive 16-byte blocks from bytes or a binary stream.

    The last block is zero-padded if short. Empty input yields nothing.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        for offset in range(0, len(data), BLOCK_SIZE):
            yield pad_block(data[offset:offset + BLOCK_SIZE])
        return

    while True:
        chunk = _read_exact(source, BLOCK_SIZE)
        if not chunk:
            return
        yield pad_block(chunk)
        if len(chunk) < BLOCK_SIZE:
            return


def iter_hex_blocks(stream: TextIO) -> Iterator[bytes]:
    """
    Yield 16-byte blocks parsed from a hex text stream.

    Whitespace anywhere in the text is ignored.

    Raises:
        ValueError: On non-hex characters or a partial final block
    """
    pending = ""
    while True:
        text = stream.read(READ_CHUNK)
        if not text:
            break
        pending += "".join(text.split())
        while len(pending) >= HEX_BLOCK_CHARS:
            yield parse_hex(pending[:HEX_BLOCK_CHARS], "Ciphertext")
            pending = pending[HEX_BLOCK_CHARS:]
    if pending:
        parse_hex(pending, "Ciphertext")
        raise ValueError(
            f"Ciphertext length must be a multiple of {BLOCK_SIZE} bytes, "
            f"{len(pending) // 2} trailing bytes left over"
        )


def strip_zero_padding(data: bytes) -> bytes:
    """Remove trailing NUL bytes added by zero padding."""
    return data.rstrip(b"\x00")


def _run_blocks(
    blocks: Iterable[bytes],
    transform: Callable[[bytes], bytes],
    operation: str,
    tracer: TraceRecorder | None,
) -> Iterator[bytes]:
    for index, block in enumerate(blocks):
        output = transform(block)
        if tracer:
            tracer.record(block=index, operation=operation,
                          input=block, output=output)
        yield output


def encrypt_blocks(
    schedule: KeySchedule,
    source: bytes | BinaryIO,
    tracer: TraceRecorder | None = None,
) -> Iterator[bytes]:
    """Lazily encrypt every block of source."""
    return _run_blocks(
        iter_blocks(source),
        lambda block: encrypt_block(schedule, block),
        "encrypt",
        tracer,
    )


def decrypt_blocks(
    schedule: KeySchedule,
    blocks: Iterable[bytes],
    tracer: TraceRecorder | None = None,
) -> Iterator[bytes]:
    """Lazily decrypt already-aligned ciphertext blocks."""
    return _run_blocks(
        blocks,
        lambda block: decrypt_block(schedule, block),
        "decrypt",
        tracer,
    )


def encrypt_bytes(
    schedule: KeySchedule,
    data: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Encrypt arbitrary-length data block by block.

    Args:
        schedule: Expanded key schedule
        data: Plaintext of any length
        tracer: Optional recorder that receives one entry per block

    Returns:
        Ciphertext, a multiple of 16 bytes long
    """
    return b"".join(encrypt_blocks(schedule, data, tracer))


def decrypt_bytes(
    schedule: KeySchedule,
    data: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Decrypt block-aligned ciphertext block by block.

    Padding is left in place; see strip_zero_padding.

    Raises:
        ValueError: If data is not a multiple of 16 bytes
    """
    if len(data) % BLOCK_SIZE:
        raise ValueError(
            f"Ciphertext length must be a multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    blocks = (data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE))
    return b"".join(decrypt_blocks(schedule, blocks, tracer))


def output_filename(path: str | Path, suffix: str = "_aes") -> Path:
    """
    Derive the output file name by inserting suffix before the first dot.

    "notes.txt" -> "notes_aes.txt", "archive.tar.gz" -> "archive_aes.tar.gz",
    "README" -> "README_aes". The directory part is kept.
    """
    path = Path(path)
    name = path.name
    dot = name.find(".", 1)
    if dot == -1:
        new_name = name + suffix
    else:
        new_name = name[:dot] + suffix + name[dot:]
    return path.with_name(new_name)


def encrypt_file(
    schedule: KeySchedule,
    src: str | Path,
    dst: str | Path,
    tracer: TraceRecorder | None = None,
) -> int:
    """
    Encrypt a file and write the ciphertext as hex text.

    Returns:
        Number of blocks written
    """
    count = 0
    with open(src, "rb") as fin, open(dst, "w") as fout:
        for encrypted in encrypt_blocks(schedule, fin, tracer):
            fout.write(bytes_to_hex(encrypted))
            count += 1
    return count


def decrypt_file(
    schedule: KeySchedule,
    src: str | Path,
    dst: str | Path,
    keep_padding: bool = False,
    tracer: TraceRecorder | None = None,
) -> int:
    """
    Decrypt a hex ciphertext file and write the raw plaintext.

    Zero padding can only sit in the final block, so only that block is
    stripped (unless keep_padding is set).

    Returns:
        Number of blocks read
    """
    count = 0
    last: bytes | None = None
    with open(src, "r") as fin, open(dst, "wb") as fout:
        for decrypted in decrypt_blocks(schedule, iter_hex_blocks(fin), tracer):
            if last is not None:
                fout.write(last)
            last = decrypted
            count += 1
        if last is not None:
            fout.write(last if keep_padding else strip_zero_padding(last))
    return count
