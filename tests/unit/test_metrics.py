"""Unit tests for fsmviz.metrics."""

import pytest

from fsmviz.metrics import state_font_size, text_width


class TestTextWidth:
    def test_empty_uses_minimum(self) -> None:
        assert text_width("") == 60

    def test_short_uses_minimum(self) -> None:
        assert text_width("a") == 60

    def test_ascii(self) -> None:
        assert text_width("hello world!!") == 13 * 8 + 20

    def test_non_ascii(self) -> None:
        assert text_width("こんにちは") == 5 * 16 + 20

    def test_mixed(self) -> None:
        assert text_width("hello世界") == 5 * 8 + 2 * 16 + 20


class TestStateFontSize:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("q0", 20),
            ("abcdefg", 17),
            ("状態", 20),
            ("状態遷移図", 15),
            ("very_long_state_name", 12),
            ("", 20),
        ],
    )
    def test_sizes(self, name: str, expected: int) -> None:
        assert state_font_size(name) == expected

    def test_larger_radius_fits_more(self) -> None:
        assert state_font_size("abcdefg", radius=80) == 20
