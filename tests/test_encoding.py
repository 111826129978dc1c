"""Tests for field encoding rules."""

import pytest

from pmvmanager.exceptions import (
    InvalidAddressError,
    InvalidModeError,
    InvalidPageDurationError,
    InvalidRowIndexError,
    InvalidStyleError,
)
from pmvmanager.protocol.constants import MODE_CODES, MODES, STYLE_CODES, STYLES, Mode, Style
from pmvmanager.protocol.encoding import (
    check_address,
    check_duration,
    check_index,
    encode_address,
    encode_mode,
    encode_number,
    encode_style,
    to_mode,
    to_style,
)


class TestNumbers:
    """Tests for fixed-width numeric fields."""

    def test_two_digit_field(self):
        """Test zero padding to two digits."""
        assert encode_number(7, 2) == "07"
        assert encode_number(0, 2) == "00"

    def test_three_digit_field(self):
        """Test zero padding to three digits."""
        assert encode_number(45, 3) == "045"
        assert encode_number(255, 3) == "255"

    def test_check_index_bounds(self):
        """Test index range is inclusive at both ends."""
        assert check_index(0, 9, InvalidRowIndexError) == 0
        assert check_index(9, 9, InvalidRowIndexError) == 9

    @pytest.mark.parametrize("value", [-1, 10, True, "3", 3.0, None])
    def test_check_index_rejects(self, value):
        """Test out-of-range and non-int indices raise the given error."""
        with pytest.raises(InvalidRowIndexError) as exc_info:
            check_index(value, 9, InvalidRowIndexError)
        assert exc_info.value.value == value

    @pytest.mark.parametrize("value", [0, 1, 179, 180, 255])
    def test_check_duration_accepts(self, value):
        """Test valid durations and the 255 sentinel."""
        assert check_duration(value) == value

    @pytest.mark.parametrize("value", [-1, 181, 200, 254, 256, False, "10"])
    def test_check_duration_rejects(self, value):
        """Test invalid durations."""
        with pytest.raises(InvalidPageDurationError):
            check_duration(value)


class TestAddress:
    """Tests for device address encoding."""

    @pytest.mark.parametrize("address", [0x00, 0x05, 0x10, 0xAB, 0xFF])
    def test_address_byte_equals_value(self, address):
        """Test the address byte carries the address value."""
        assert encode_address(address) == bytes([address])

    @pytest.mark.parametrize("address", [-1, 0x100, 0x1234, True, "05"])
    def test_invalid_address(self, address):
        """Test addresses that do not fit one octet are rejected."""
        with pytest.raises(InvalidAddressError):
            encode_address(address)
        with pytest.raises(InvalidAddressError):
            check_address(address)


class TestCodes:
    """Tests for mode and style code tables."""

    def test_mode_codes(self):
        """Test mode code characters."""
        assert encode_mode(Mode.AUTOMATIC) == "0"
        assert encode_mode(Mode.FORCE) == "1"
        assert encode_mode(Mode.OFF) == "2"

    def test_style_codes(self):
        """Test style code characters."""
        assert encode_style(Style.NORMAL) == "0"
        assert encode_style(Style.BLINKING) == "1"
        assert encode_style(Style.BOLD) == "2"

    def test_inverse_tables(self):
        """Test inverse tables map every code back."""
        for mode, code in MODES.items():
            assert MODE_CODES[code] is mode
        for style, code in STYLES.items():
            assert STYLE_CODES[code] is style

    def test_tables_are_read_only(self):
        """Test the code tables cannot be modified."""
        with pytest.raises(TypeError):
            MODES[Mode.OFF] = "9"  # type: ignore[index]

    def test_to_mode(self):
        """Test mode coercion from names."""
        assert to_mode("force") is Mode.FORCE
        assert to_mode("OFF") is Mode.OFF
        assert to_mode(Mode.AUTOMATIC) is Mode.AUTOMATIC

    @pytest.mark.parametrize("value", ["manual", "", 1, None])
    def test_to_mode_invalid(self, value):
        """Test unknown modes raise InvalidModeError."""
        with pytest.raises(InvalidModeError):
            to_mode(value)

    def test_to_style(self):
        """Test style coercion from names."""
        assert to_style("blinking") is Style.BLINKING
        assert to_style("Bold") is Style.BOLD
        assert to_style(Style.NORMAL) is Style.NORMAL

    @pytest.mark.parametrize("value", ["italic", 0, None])
    def test_to_style_invalid(self, value):
        """Test unknown styles raise InvalidStyleError."""
        with pytest.raises(InvalidStyleError):
            to_style(value)
