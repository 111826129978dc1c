"""Tests for the PMV device simulator."""

import pytest

from pmvmanager.exceptions import TimeoutError
from pmvmanager.protocol.checksums import validate_checksum
from pmvmanager.protocol.constants import Mode, ProtocolConstants, Style
from pmvmanager.protocol.packet import encode_packet
from pmvmanager.transport.simulator import PmvSimulator, build_reply

ACK = ProtocolConstants.ACK
NAK = ProtocolConstants.NAK


class TestBuildReply:
    """Tests for reply framing."""

    def test_frame(self):
        """Test delimiters, address and checksum."""
        reply = build_reply(0x05, b"RC03")
        assert reply[:2] == b"\x02\x05"
        assert reply[2:6] == b"RC03"
        assert reply[-2] == ProtocolConstants.ETX
        assert validate_checksum(reply)


class TestPmvSimulator:
    """Tests for PmvSimulator class."""

    @pytest.fixture
    def sim(self):
        """Create a simulator answering address 0x05."""
        return PmvSimulator(address=0x05, rows=3)

    def test_test_command(self, sim):
        """Test WT is acknowledged."""
        assert sim.handle(encode_packet(0x05, b"WT")) == ACK

    def test_mode_round_trip(self, sim):
        """Test WB changes the mode reported by RB."""
        assert sim.mode is Mode.AUTOMATIC
        assert sim.handle(encode_packet(0x05, b"WB2")) == ACK
        assert sim.mode is Mode.OFF
        assert sim.handle(encode_packet(0x05, b"RB")) == build_reply(0x05, b"RB2")

    def test_invalid_mode_code(self, sim):
        """Test WB with an unknown code is refused."""
        assert sim.handle(encode_packet(0x05, b"WB9")) == NAK
        assert sim.mode is Mode.AUTOMATIC

    def test_rows_number(self, sim):
        """Test RC reports the configured row count."""
        assert sim.handle(encode_packet(0x05, b"RC")) == build_reply(0x05, b"RC03")

    def test_init_page(self, sim):
        """Test WF stores page durations."""
        assert sim.handle(encode_packet(0x05, b"WF07255000000000000")) == ACK
        assert sim.pages[7] == (255, 0, 0, 0, 0)

    def test_init_page_bad_length(self, sim):
        """Test WF with missing durations is refused."""
        assert sim.handle(encode_packet(0x05, b"WF07255")) == NAK

    def test_message_round_trip(self, sim):
        """Test WI stores text that RI reads back."""
        assert sim.handle(encode_packet(0x05, b"WI0102031FOG\r")) == ACK
        assert sim.messages[(1, 2, 3)] == (Style.BLINKING, "FOG")
        assert sim.handle(encode_packet(0x05, b"RI010203")) == build_reply(0x05, b"RI1FOG\r")

    def test_unwritten_message(self, sim):
        """Test RI on an empty slot returns an empty normal row."""
        assert sim.handle(encode_packet(0x05, b"RI000000")) == build_reply(0x05, b"RI0\r")

    def test_write_without_terminator(self, sim):
        """Test WI without CR is refused."""
        assert sim.handle(encode_packet(0x05, b"WI0000000TEXT")) == NAK

    def test_unknown_operation(self, sim):
        """Test unknown operations are refused."""
        assert sim.handle(encode_packet(0x05, b"WZ")) == NAK

    def test_bad_checksum(self, sim):
        """Test corrupt packets are refused."""
        assert sim.handle(b"\x02\x05WT\x03\x00") == NAK

    def test_other_address_ignored(self, sim):
        """Test packets for another device get no reply."""
        assert sim.handle(encode_packet(0x06, b"WT")) is None

    def test_send_times_out_for_other_address(self, sim):
        """Test send raises TimeoutError when the packet is ignored."""
        with pytest.raises(TimeoutError):
            sim.send(encode_packet(0x06, b"WT"), "sim", 10, 2.0)

    def test_requests_recorded(self, sim):
        """Test every request is kept."""
        sim.handle(encode_packet(0x05, b"WT"))
        sim.handle(encode_packet(0x06, b"RB"))
        assert sim.requests == [encode_packet(0x05, b"WT"), encode_packet(0x06, b"RB")]

    def test_repr(self, sim):
        """Test string representation."""
        assert repr(sim) == "PmvSimulator(address=0x05, mode=automatic)"
