"""
Opt-in tracing for AES block operations.

Contains:
- TraceRecorder: JSON Lines trace file + compact verbose stdout
- trace_encrypt / trace_decrypt: block operations that record every round step
- print_header / print_result: shared formatting helpers

The cipher core never writes anything; callers that want a record of what
happened hand a TraceRecorder to the I/O layer or use the wrappers here.
"""

import json
from typing import Any, TextIO

from .cipher import check_block, encrypt_block, decrypt_block
from .key_schedule import KeySchedule


class TraceRecorder:
    """
    Records and outputs traces of AES execution.

    Supports:
    - JSON Lines file output (when trace_file is set)
    - Compact verbose stdout (when verbose is set)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """Record a trace entry."""
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, (bytes, bytearray)):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        operation = record.get("operation", "unknown")
        if "block" in record:
            print(f"B{record['block']:06d} {operation:10s} "
                  f"IN:{record['input'].hex()} OUT:{record['output'].hex()}")
        elif "state" in record:
            round_num = record.get("round", "?")
            print(f"R{round_num:<2} {operation:15s} STATE:{bytes(record['state']).hex()}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


def _recording(tracer: TraceRecorder):
    def on_step(round_num: int, operation: str, state: bytes) -> None:
        tracer.record(round=round_num, operation=operation, state=state)
    return on_step


def trace_encrypt(schedule: KeySchedule, block: bytes,
                  tracer: TraceRecorder) -> bytes:
    """Encrypt one block, recording the state after every transformation."""
    check_block(block)
    tracer.record(round=0, operation="input", state=bytes(block))
    return encrypt_block(schedule, block, on_step=_recording(tracer))


def trace_decrypt(schedule: KeySchedule, block: bytes,
                  tracer: TraceRecorder) -> bytes:
    """Decrypt one block, recording the state after every transformation."""
    check_block(block)
    tracer.record(round=0, operation="input", state=bytes(block))
    return decrypt_block(schedule, block, on_step=_recording(tracer))


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(label: str, output_hex: str, passed: bool = True) -> None:
    """Print final block result with its verification status."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {output_hex}")

    status = "PASS" if passed else "FAIL"
    marker = "[OK]" if passed else "[ERROR]"
    print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
