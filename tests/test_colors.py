import pytest

from reframe.imaging.colors import hex_to_rgba
from reframe.models.errors import ConfigError


def test_six_digit_hex():
    assert hex_to_rgba("#0A0F1C") == (10, 15, 28, 255)
    assert hex_to_rgba("0a0f1c") == (10, 15, 28, 255)


def test_three_digit_hex_expands_each_digit():
    for short in ("fff", "#abc", "09F", "#123"):
        digits = short.lstrip("#")
        expanded = int("".join(c + c for c in digits), 16)
        r, g, b, _ = hex_to_rgba(short)
        assert (r, g, b) == ((expanded >> 16) & 255, (expanded >> 8) & 255, expanded & 255)


def test_alpha_fraction_maps_to_byte():
    assert hex_to_rgba("#000000", 0.0)[3] == 0
    assert hex_to_rgba("#000000", 0.5)[3] == 128
    assert hex_to_rgba("#000000")[3] == 255


@pytest.mark.parametrize("bad", ["", "#", "#12", "#1234", "#12345", "#1234567", "zzzzzz", "#ggg"])
def test_malformed_hex_is_rejected(bad):
    with pytest.raises(ConfigError):
        hex_to_rgba(bad)


def test_alpha_out_of_range_is_rejected():
    with pytest.raises(ConfigError):
        hex_to_rgba("#fff", 1.5)
