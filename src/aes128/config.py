"""Run configuration for file encryption/decryption."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .ecb import output_filename

MODES = ("encrypt", "decrypt")

# File name suffixes for derived output paths
OUTPUT_SUFFIXES = {
    "encrypt": "_aes",
    "decrypt": "_dec",
}


@dataclass
class RunConfig:
    """Configuration for one file run.

    Built from CLI options and validated on construction.
    """

    mode: str
    key: bytes
    input_path: Path
    output_path: Path | None = None

    # Keep trailing zero padding on decrypted output
    keep_padding: bool = False

    # Print one line per processed block
    verbose: bool = False

    # JSON Lines trace destination
    trace_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters and derive defaults."""
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if len(self.key) != 16:
            raise ValueError(f"Key must be 16 bytes, got {len(self.key)}")
        self.input_path = Path(self.input_path)
        if self.output_path is None:
            self.output_path = output_filename(
                self.input_path, OUTPUT_SUFFIXES[self.mode]
            )
        else:
            self.output_path = Path(self.output_path)
        if self.trace_path is not None:
            self.trace_path = Path(self.trace_path)

    @property
    def tracing(self) -> bool:
        """Whether any per-block trace output is requested."""
        return self.verbose or self.trace_path is not None
