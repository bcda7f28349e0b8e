"""Command-line interface for the AES-128 cipher."""

from __future__ import annotations

import random
import secrets
import sys
from pathlib import Path

import click

from . import __version__, DEFAULT_KEY_HEX, DEFAULT_PT_HEX
from .config import RunConfig
from .ecb import encrypt_file, decrypt_file
from .key_schedule import KeySchedule, NUM_ROUNDS, expand
from .reference import KNOWN_ANSWERS, cross_check, golden_decrypt, golden_encrypt
from .sbox import build_tables
from .trace import (
    TraceRecorder,
    print_header,
    print_result,
    trace_decrypt,
    trace_encrypt,
)
from .utils import bytes_to_hex, format_bytes_grid, format_table, parse_hex16


class Hex16(click.ParamType):
    """16 bytes given as 32 hex characters.

    A failed conversion while prompting makes click ask again.
    """

    name = "hex32"

    def __init__(self, label: str) -> None:
        self.label = label

    def convert(self, value, param, ctx):
        if isinstance(value, bytes):
            return value
        try:
            return parse_hex16(value, self.label)
        except ValueError as e:
            self.fail(str(e), param, ctx)


KEY_HEX = Hex16("Key")
BLOCK_HEX = Hex16("Block")

_key_prompt_option = click.option(
    "--key",
    type=KEY_HEX,
    prompt="Enter a key - 32 hex characters",
    help="AES-128 key as 32 hex chars (prompted if omitted)",
)
_verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Print one line per processed block",
)
_trace_option = click.option(
    "--trace",
    "trace_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON Lines trace to FILE",
)


@click.group()
@click.version_option(version=__version__, prog_name="aes128")
def main() -> None:
    """AES-128 block cipher (FIPS-197), ECB over files.

    Encrypt files to hex text, decrypt them back, and inspect the
    S-box, key schedule and round pipeline.
    """
    pass


def _run_file(config: RunConfig) -> int:
    """Encrypt or decrypt one file as described by config."""
    schedule = expand(config.key, build_tables())

    trace_file = None
    if config.trace_path is not None:
        trace_file = open(config.trace_path, "w")
    tracer = None
    if config.tracing:
        tracer = TraceRecorder(verbose=config.verbose, trace_file=trace_file)

    try:
        if config.mode == "encrypt":
            return encrypt_file(
                schedule, config.input_path, config.output_path, tracer
            )
        return decrypt_file(
            schedule,
            config.input_path,
            config.output_path,
            keep_padding=config.keep_padding,
            tracer=tracer,
        )
    finally:
        if trace_file:
            trace_file.close()


def _run_and_report(config: RunConfig) -> None:
    verb = "Encrypting" if config.mode == "encrypt" else "Decrypting"
    click.echo(f"{verb} {config.input_path} -> {config.output_path}")
    try:
        blocks = _run_file(config)
    except (OSError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Completed! {blocks} block(s) processed.")


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@_key_prompt_option
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: INPUT with _aes inserted before the extension)",
)
@_verbose_option
@_trace_option
def encrypt(
    input_path: str,
    key: bytes,
    output_path: str | None,
    verbose: bool,
    trace_path: str | None,
) -> None:
    """Encrypt a file; the ciphertext is written as lowercase hex."""
    config = RunConfig(
        mode="encrypt",
        key=key,
        input_path=Path(input_path),
        output_path=output_path,
        verbose=verbose,
        trace_path=trace_path,
    )
    _run_and_report(config)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@_key_prompt_option
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: INPUT with _dec inserted before the extension)",
)
@click.option(
    "--keep-padding",
    is_flag=True,
    help="Keep trailing zero bytes of the final block",
)
@_verbose_option
@_trace_option
def decrypt(
    input_path: str,
    key: bytes,
    output_path: str | None,
    keep_padding: bool,
    verbose: bool,
    trace_path: str | None,
) -> None:
    """Decrypt a hex ciphertext file produced by 'encrypt'."""
    config = RunConfig(
        mode="decrypt",
        key=key,
        input_path=Path(input_path),
        output_path=output_path,
        keep_padding=keep_padding,
        verbose=verbose,
        trace_path=trace_path,
    )
    _run_and_report(config)


@main.command()
@click.option(
    "--key",
    type=KEY_HEX,
    default=DEFAULT_KEY_HEX,
    help="AES-128 key as 32 hex chars (default: FIPS-197 test key)",
)
@click.option(
    "--pt",
    "block",
    type=BLOCK_HEX,
    default=DEFAULT_PT_HEX,
    help="Input block as 32 hex chars (default: FIPS-197 test plaintext)",
)
@click.option(
    "--decrypt",
    "inverse",
    is_flag=True,
    help="Treat the block as ciphertext and decrypt it",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Print the state after every round step",
)
def block(key: bytes, block: bytes, inverse: bool, verbose: bool) -> None:
    """Run a single block and verify it against PyCryptodome."""
    schedule = expand(key, build_tables())
    tracer = TraceRecorder(verbose=verbose)

    print_header(f"AES-128 {'Decryption' if inverse else 'Encryption'}")
    click.echo(f"Key:   {bytes_to_hex(key)}")
    click.echo(f"Input: {bytes_to_hex(block)}")

    if inverse:
        output = trace_decrypt(schedule, block, tracer)
        expected = golden_decrypt(key, block)
        label = "Plaintext"
    else:
        output = trace_encrypt(schedule, block, tracer)
        expected = golden_encrypt(key, block)
        label = "Ciphertext"

    passed = output == expected
    print_result(label, bytes_to_hex(output), passed)

    if not passed:
        click.echo(f"Expected: {bytes_to_hex(expected)}")
        click.echo(f"Got:      {bytes_to_hex(output)}")
        sys.exit(1)


@main.command()
@click.option(
    "--key",
    type=KEY_HEX,
    default=DEFAULT_KEY_HEX,
    help="AES-128 key as 32 hex chars (default: FIPS-197 test key)",
)
@click.option("--grid", is_flag=True, help="Show each round key as a 4x4 grid")
def schedule(key: bytes, grid: bool) -> None:
    """Print the eleven round keys for a key."""
    ks: KeySchedule = expand(key)
    for round_num in range(NUM_ROUNDS + 1):
        round_key = ks.round_key(round_num)
        click.echo(f"Round {round_num:2d}: {bytes_to_hex(round_key)}")
        if grid:
            click.echo(format_bytes_grid(round_key))


@main.command()
@click.option("--inverse", is_flag=True, help="Print the inverse S-box")
def sbox(inverse: bool) -> None:
    """Print the S-box as a 16x16 table."""
    tables = build_tables()
    click.echo(format_table(tables.inv_sbox if inverse else tables.sbox))


@main.command()
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=100,
    help="Number of random test vectors (default: 100)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output",
)
def validate(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate the cipher against FIPS-197 and random tests."""
    tables = build_tables()

    click.echo("Running FIPS-197 KAT tests...")
    fips_passed = 0

    for vec in KNOWN_ANSWERS:
        correct, error_detail = cross_check(
            vec.key, vec.plaintext, vec.ciphertext, tables
        )
        if correct:
            fips_passed += 1
            if verbose:
                click.echo(f"  {vec.source}: PASS")
        else:
            click.echo(f"  {vec.source}: FAIL - {error_detail}")

    click.echo(f"FIPS-197 tests: {fips_passed}/{len(KNOWN_ANSWERS)} passed")

    click.echo(f"\nRunning {num_tests} random tests...")

    if seed is not None:
        rng = random.Random(seed)
        random_bytes = lambda n: bytes(rng.randint(0, 255) for _ in range(n))
    else:
        random_bytes = secrets.token_bytes

    random_passed = 0

    for i in range(num_tests):
        key = random_bytes(16)
        pt = random_bytes(16)

        correct, error_detail = cross_check(key, pt, tables=tables)

        if correct:
            random_passed += 1
        elif verbose:
            click.echo(f"  Random test {i+1}: FAIL - {error_detail}")

    click.echo(f"Random tests: {random_passed}/{num_tests} passed")

    total_passed = fips_passed + random_passed
    total_tests = len(KNOWN_ANSWERS) + num_tests

    click.echo("")
    if total_passed == total_tests:
        click.echo(f"VALIDATION PASSED: All {total_tests} tests passed")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {total_tests - total_passed} failures")
        sys.exit(1)


if __name__ == "__main__":
    main()
