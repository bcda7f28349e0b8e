"""Tests for AES-128 key expansion."""

import dataclasses

import pytest

from aes128.key_schedule import (
    KeySchedule,
    ROUND_CONSTANTS,
    expand,
    rot_word,
    round_constant,
    sub_word,
)
from aes128.sbox import build_tables


C1_KEY = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
B_KEY = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")


class TestRoundConstants:
    """Tests for the round-constant sequence."""

    def test_sequence(self) -> None:
        assert ROUND_CONSTANTS == (1, 2, 4, 8, 16, 32, 64, 128, 0x1B, 0x36)

    @pytest.mark.parametrize("n,expected", [(1, 1), (8, 128), (9, 27), (10, 54)])
    def test_single(self, n: int, expected: int) -> None:
        assert round_constant(n) == expected

    def test_continues_past_ten(self) -> None:
        assert round_constant(11) == 0x6C

    def test_invalid_index(self) -> None:
        with pytest.raises(ValueError):
            round_constant(0)


class TestWordHelpers:
    """Tests for RotWord / SubWord."""

    def test_rot_word(self) -> None:
        assert rot_word([0x09, 0xCF, 0x4F, 0x3C]) == [0xCF, 0x4F, 0x3C, 0x09]

    def test_rot_word_leaves_input(self) -> None:
        word = [1, 2, 3, 4]
        rot_word(word)
        assert word == [1, 2, 3, 4]

    def test_sub_word(self) -> None:
        """FIPS-197 Appendix A.1, i = 4."""
        assert sub_word([0xCF, 0x4F, 0x3C, 0x09], build_tables()) == [0x8A, 0x84, 0xEB, 0x01]


class TestExpand:
    """Tests for expand."""

    def test_length(self) -> None:
        ks = expand(C1_KEY)
        assert len(ks) == 176
        assert len(bytes(ks)) == 176
        assert len(ks.words()) == 44

    def test_round_zero_is_key(self) -> None:
        assert expand(C1_KEY).round_key(0) == C1_KEY

    def test_c1_round_keys(self) -> None:
        ks = expand(C1_KEY)
        assert ks.round_key(1).hex() == "d6aa74fdd2af72fadaa678f1d6ab76fe"
        assert ks.round_key(10).hex() == "13111d7fe3944a17f307a78b4d2b30c5"

    def test_appendix_a1_expansion(self) -> None:
        """FIPS-197 Appendix A.1 key expansion."""
        ks = expand(B_KEY)
        words = ks.words()
        assert words[4].hex() == "a0fafe17"
        assert words[5].hex() == "88542cb1"
        assert words[43].hex() == "b6630ca6"
        assert ks.round_key(10).hex() == "d014f9a8c9ee2589e13f0cc8b6630ca6"

    def test_explicit_tables(self) -> None:
        tables = build_tables()
        ks = expand(C1_KEY, tables)
        assert ks.tables is tables
        assert ks == expand(C1_KEY)

    def test_deterministic(self) -> None:
        assert expand(B_KEY).data == expand(B_KEY).data

    def test_key_not_mutated(self) -> None:
        key = bytearray(C1_KEY)
        expand(bytes(key))
        assert bytes(key) == C1_KEY

    @pytest.mark.parametrize("length", [0, 15, 17, 24, 32])
    def test_invalid_key_length(self, length: int) -> None:
        with pytest.raises(ValueError, match="Key must be 16 bytes"):
            expand(bytes(length))


class TestKeyScheduleValue:
    """KeySchedule is an immutable value."""

    def test_frozen(self) -> None:
        ks = expand(C1_KEY)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ks.data = bytes(176)

    def test_wrong_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="176 bytes"):
            KeySchedule(data=bytes(160), tables=build_tables())

    @pytest.mark.parametrize("round_num", [-1, 11])
    def test_round_out_of_range(self, round_num: int) -> None:
        with pytest.raises(ValueError, match="Round must be"):
            expand(C1_KEY).round_key(round_num)
