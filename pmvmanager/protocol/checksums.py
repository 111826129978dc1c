"""
XOR checksum calculation and validation.

The PMV protocol closes every packet with a single checksum byte:
- XOR every byte from STX through ETX inclusive
- Append the result as one raw byte

Because XOR is its own inverse, XOR-ing a whole packet including its
checksum byte yields zero.
"""

from __future__ import annotations


def calculate_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the XOR checksum of the given bytes.

    Args:
        data: Bytes to fold (STX through ETX of a packet).

    Returns:
        Checksum value (0-255). Empty input gives 0.

    Example:
        >>> calculate_checksum(b"\\x02\\x05WT\\x03")
        7
    """
    checksum = 0
    for byte in data:
        checksum ^= byte
    return checksum


def append_checksum(data: bytes | bytearray) -> bytes:
    """
    Calculate checksum and append it as a single raw byte.

    Args:
        data: Data to checksum.

    Returns:
        Original data with the checksum byte appended.
    """
    return bytes(data) + bytes([calculate_checksum(data)])


def validate_checksum(frame: bytes | bytearray | memoryview) -> bool:
    """
    Validate that the last byte of a frame is the XOR of the others.

    Args:
        frame: Complete frame including the trailing checksum byte.

    Returns:
        True if checksum is valid, False otherwise (including empty input).
    """
    if len(frame) < 2:
        return False
    return calculate_checksum(frame[:-1]) == frame[-1]
