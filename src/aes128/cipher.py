"""
Block cipher facade: encrypt or decrypt one 16-byte block.

Both directions are pure functions of (schedule, block). Blocks never
depend on each other, which makes any multi-block use ECB.

An optional on_step callback sees the state after every transformation
as on_step(round_num, operation, state). It only observes; the result
is the same with or without it.
"""

from __future__ import annotations

from typing import Callable

from .key_schedule import KeySchedule, NUM_ROUNDS
from .rounds import (
    add_round_key,
    sub_bytes,
    inv_sub_bytes,
    shift_rows,
    inv_shift_rows,
    mix_columns,
    inv_mix_columns,
)

BLOCK_SIZE = 16

StepCallback = Callable[[int, str, bytes], None]


def check_block(block: bytes) -> None:
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be 16 bytes, got {len(block)}")


def _noop(round_num: int, operation: str, state: bytes) -> None:
    pass


def encrypt_block(
    schedule: KeySchedule,
    block: bytes,
    on_step: StepCallback | None = None,
) -> bytes:
    """
    Encrypt a single 16-byte block.

    Args:
        schedule: Expanded key schedule
        block: 16-byte plaintext block
        on_step: Optional observer called after each transformation

    Returns:
        16-byte ciphertext block
    """
    check_block(block)
    step = on_step or _noop
    tables = schedule.tables

    state = add_round_key(list(block), schedule.round_key(0))
    step(0, "AddRoundKey", bytes(state))

    for round_num in range(1, NUM_ROUNDS + 1):
        state = sub_bytes(state, tables)
        step(round_num, "SubBytes", bytes(state))
        state = shift_rows(state)
        step(round_num, "ShiftRows", bytes(state))
        if round_num != NUM_ROUNDS:
            state = mix_columns(state)
            step(round_num, "MixColumns", bytes(state))
        state = add_round_key(state, schedule.round_key(round_num))
        step(round_num, "AddRoundKey", bytes(state))

    return bytes(state)


def decrypt_block(
    schedule: KeySchedule,
    block: bytes,
    on_step: StepCallback | None = None,
) -> bytes:
    """
    Decrypt a single 16-byte block.

    Round keys are consumed from 10 down to 0.

    Args:
        schedule: Expanded key schedule
        block: 16-byte ciphertext block
        on_step: Optional observer called after each transformation

    Returns:
        16-byte plaintext block
    """
    check_block(block)
    step = on_step or _noop
    tables = schedule.tables

    state = list(block)

    for round_num in range(1, NUM_ROUNDS + 1):
        state = add_round_key(state, schedule.round_key(NUM_ROUNDS + 1 - round_num))
        step(round_num, "AddRoundKey", bytes(state))
        if round_num != 1:
            state = inv_mix_columns(state)
            step(round_num, "InvMixColumns", bytes(state))
        state = inv_shift_rows(state)
        step(round_num, "InvShiftRows", bytes(state))
        state = inv_sub_bytes(state, tables)
        step(round_num, "InvSubBytes", bytes(state))

    state = add_round_key(state, schedule.round_key(0))
    step(NUM_ROUNDS, "FinalAddRoundKey", bytes(state))
    return bytes(state)
