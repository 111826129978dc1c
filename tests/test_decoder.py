"""Tests for reply decoding."""

import pytest

from pmvmanager.exceptions import CommandRejectedError, ProtocolError
from pmvmanager.models.commands import (
    GetMessageCommand,
    GetModeCommand,
    GetRowsNumberCommand,
    InitPageCommand,
    SwitchToModeCommand,
    TestCommand as AliveCommand,
    WriteMessageCommand,
)
from pmvmanager.models.records import MessageReadback
from pmvmanager.protocol.constants import Mode, ProtocolConstants, Style
from pmvmanager.protocol.decoder import (
    decode_message,
    decode_mode,
    decode_response,
    decode_rows_number,
    decode_status,
)
from pmvmanager.transport.simulator import build_reply

ACK = bytes([0x06] * 5)
NAK = bytes([0x15] * 5)


class TestStatus:
    """Tests for ACK/NAK decoding."""

    def test_sentinels_match_constants(self):
        """Test the sentinel constants."""
        assert ProtocolConstants.ACK == ACK
        assert ProtocolConstants.NAK == NAK

    def test_ack(self):
        """Test ACK decodes to True."""
        assert decode_status(ACK) is True

    def test_nak(self):
        """Test NAK decodes to False."""
        assert decode_status(NAK) is False

    @pytest.mark.parametrize(
        "raw",
        [b"", ACK[:4], ACK + b"\x06", b"\x06\x06\x15\x06\x06", build_reply(0x05, b"RB0")],
    )
    def test_other_replies_are_violations(self, raw):
        """Test anything but a sentinel raises ProtocolError."""
        with pytest.raises(ProtocolError):
            decode_status(raw)


class TestMode:
    """Tests for GetMode reply decoding."""

    @pytest.mark.parametrize(
        ("code", "mode"),
        [(b"0", Mode.AUTOMATIC), (b"1", Mode.FORCE), (b"2", Mode.OFF)],
    )
    def test_mode_codes(self, code, mode):
        """Test each mode code at offset 4."""
        assert decode_mode(build_reply(0x05, b"RB" + code)) is mode

    def test_unknown_code(self):
        """Test an unknown mode code."""
        with pytest.raises(ProtocolError, match="mode code"):
            decode_mode(build_reply(0x05, b"RB7"))

    def test_too_short(self):
        """Test a reply without a mode byte."""
        with pytest.raises(ProtocolError):
            decode_mode(b"\x02\x05RB")

    def test_ack_is_violation(self):
        """Test ACK is not a valid mode reply."""
        with pytest.raises(ProtocolError):
            decode_mode(ACK)

    def test_nak_is_rejection(self):
        """Test NAK raises CommandRejectedError."""
        with pytest.raises(CommandRejectedError):
            decode_mode(NAK)


class TestRowsNumber:
    """Tests for GetRowsNumber reply decoding."""

    def test_leading_zero(self):
        """Test '012' between offset 4 and the trailing 2 bytes gives 12."""
        assert decode_rows_number(b"\x02\x05RC012\x03\x00") == 12

    def test_framing_bytes_not_inspected(self):
        """Test only the payload position matters."""
        assert decode_rows_number(b"xxxx012yy") == 12

    def test_framed_reply(self):
        """Test a reply framed like a device reply."""
        assert decode_rows_number(build_reply(0x05, b"RC03")) == 3

    @pytest.mark.parametrize("payload", [b"1a", b" 3", b"-1", b"\xb2"])
    def test_not_digits(self, payload):
        """Test non-digit counts."""
        with pytest.raises(ProtocolError):
            decode_rows_number(build_reply(0x05, b"RC" + payload))

    def test_empty_count(self):
        """Test a reply with no digits."""
        with pytest.raises(ProtocolError):
            decode_rows_number(build_reply(0x05, b"RC"))

    def test_nak_is_rejection(self):
        """Test NAK raises CommandRejectedError."""
        with pytest.raises(CommandRejectedError):
            decode_rows_number(NAK)


class TestMessage:
    """Tests for GetMessage reply decoding."""

    def test_style_and_text(self):
        """Test style code at offset 4 and text up to the last 3 bytes."""
        result = decode_message(build_reply(0x05, b"RI1QUEUE AHEAD\r"))
        assert result == MessageReadback(style=Style.BLINKING, text="QUEUE AHEAD")

    def test_empty_text(self):
        """Test an empty row."""
        result = decode_message(build_reply(0x05, b"RI0\r"))
        assert result.style is Style.NORMAL
        assert result.text == ""

    def test_latin1_text(self):
        """Test accented text is decoded as Latin-1."""
        result = decode_message(build_reply(0x05, b"RI2citt\xe0\r"))
        assert result.style is Style.BOLD
        assert result.text == "città"

    def test_unknown_style(self):
        """Test an unknown style code."""
        with pytest.raises(ProtocolError, match="style code"):
            decode_message(build_reply(0x05, b"RI9TEXT\r"))

    def test_too_short(self):
        """Test a reply too short to hold style and trailer."""
        with pytest.raises(ProtocolError):
            decode_message(b"\x02\x05RI0\x03\x00")

    def test_nak_is_rejection(self):
        """Test NAK raises CommandRejectedError."""
        with pytest.raises(CommandRejectedError):
            decode_message(NAK)


class TestDispatch:
    """Tests for decoding by command variant."""

    @pytest.mark.parametrize(
        "command",
        [
            AliveCommand(),
            SwitchToModeCommand(mode="force"),
            InitPageCommand(message_index=7),
            WriteMessageCommand(text="X", row_index=0, message_index=0, page_index=0),
        ],
    )
    def test_write_commands(self, command):
        """Test write commands decode ACK/NAK."""
        assert decode_response(command, ACK) is True
        assert decode_response(command, NAK) is False

    def test_get_mode(self):
        """Test GetMode decoding is selected."""
        assert decode_response(GetModeCommand(), build_reply(0x01, b"RB2")) is Mode.OFF

    def test_get_rows_number(self):
        """Test GetRowsNumber decoding is selected."""
        assert decode_response(GetRowsNumberCommand(), bytearray(b"\x02\x01RC012\x03\x00")) == 12

    def test_get_message(self):
        """Test GetMessage decoding is selected."""
        cmd = GetMessageCommand(row_index=0, message_index=0, page_index=0)
        result = decode_response(cmd, build_reply(0x01, b"RI0HELLO\r"))
        assert result.text == "HELLO"

    def test_mismatched_reply(self):
        """Test a structured reply to a write command is a violation."""
        with pytest.raises(ProtocolError) as exc_info:
            decode_response(AliveCommand(), build_reply(0x01, b"RC03"))
        assert exc_info.value.raw == build_reply(0x01, b"RC03")
        assert "raw:" in str(exc_info.value)
