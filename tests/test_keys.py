"""Tests for termmon.keys -- splitting raw input and matching keys."""

from __future__ import annotations

import pytest

from termmon.keys import Key, matches_key, raw_ctrl_char, split_keys


class TestSplitKeys:
    def test_single_char(self) -> None:
        assert split_keys("k") == ["k"]

    def test_batched_chars(self) -> None:
        assert split_keys("12 3") == ["1", "2", " ", "3"]

    def test_empty(self) -> None:
        assert split_keys("") == []

    def test_csi_sequence_kept_whole(self) -> None:
        assert split_keys("\x1b[A") == ["\x1b[A"]

    def test_csi_with_params(self) -> None:
        assert split_keys("\x1b[1;5C5") == ["\x1b[1;5C", "5"]

    def test_mixed(self) -> None:
        assert split_keys("1\x1b[B 2") == ["1", "\x1b[B", " ", "2"]

    def test_ss3_sequence(self) -> None:
        assert split_keys("\x1bOP") == ["\x1bOP"]

    def test_lone_escape(self) -> None:
        assert split_keys("\x1b") == ["\x1b"]

    def test_meta_key(self) -> None:
        assert split_keys("\x1bk") == ["\x1bk"]

    def test_osc_terminated_by_bel(self) -> None:
        assert split_keys("\x1b]0;x\x07a") == ["\x1b]0;x\x07", "a"]

    def test_control_chars(self) -> None:
        assert split_keys("\x03") == ["\x03"]

    def test_grapheme_clusters(self) -> None:
        assert split_keys("e\u0301x") == ["e\u0301", "x"]


class TestMatchesKey:
    def test_ctrl_c(self) -> None:
        assert matches_key("\x03", Key.ctrl("c"))
        assert not matches_key("c", Key.ctrl("c"))

    def test_space(self) -> None:
        assert matches_key(" ", Key.space)
        assert not matches_key("  ", Key.space)

    def test_plain_char(self) -> None:
        assert matches_key("k", "k")
        assert not matches_key("K", "k")

    def test_case_insensitive_id(self) -> None:
        assert matches_key("\x03", "CTRL+C")


class TestHelpers:
    @pytest.mark.parametrize("key,expected", [("a", "\x01"), ("c", "\x03"), ("Z", "\x1a")])
    def test_raw_ctrl_char(self, key: str, expected: str) -> None:
        assert raw_ctrl_char(key) == expected

    def test_raw_ctrl_char_rejects_non_letters(self) -> None:
        assert raw_ctrl_char("1") is None
        assert raw_ctrl_char("ab") is None
