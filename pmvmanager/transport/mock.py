"""
Mock transports for testing.

These transports let the PMV client be exercised without a device or a
network. Replies can be queued in advance or generated from the request by
a callback, and every request is recorded for verification.

Example:
    >>> from pmvmanager import PmvClient
    >>> from pmvmanager.protocol.constants import ProtocolConstants
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(ProtocolConstants.ACK)
    >>> client = PmvClient(0x05, "10.0.0.21", transport=mock)
    >>> client.test()
    True
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable

from pmvmanager.exceptions import TimeoutError
from pmvmanager.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without a device.

    Each send() consumes one queued response, or asks the response
    callback when one is set. With nothing to answer, send() raises
    TimeoutError just like an unresponsive device.

    Attributes:
        sent_data: All packets sent, in order.
        endpoints: (host, port) of every send, in order.
    """

    def __init__(self) -> None:
        self._responses: deque[bytes] = deque()
        self._sent_data: list[bytes] = []
        self._endpoints: list[tuple[str, int]] = []
        self._timeouts: list[float] = []
        self._response_callback: Callable[[bytes], bytes | None] | None = None

    @property
    def sent_data(self) -> list[bytes]:
        """Get all packets sent through the transport."""
        return self._sent_data.copy()

    @property
    def last_sent(self) -> bytes | None:
        """Get the most recently sent packet."""
        return self._sent_data[-1] if self._sent_data else None

    @property
    def endpoints(self) -> list[tuple[str, int]]:
        """Get the endpoint of every send."""
        return self._endpoints.copy()

    @property
    def timeouts(self) -> list[float]:
        """Get the timeout passed to every send."""
        return self._timeouts.copy()

    def add_response(self, response: bytes) -> None:
        """
        Queue a response.

        Responses are returned in FIFO order, one per send().
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        """Queue several responses."""
        for response in responses:
            self._responses.append(response)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to generate responses from the request.

        If the callback returns None, the next queued response is used.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear sent data and pending responses."""
        self._sent_data.clear()
        self._endpoints.clear()
        self._timeouts.clear()
        self._responses.clear()

    def send(self, data: bytes, host: str, port: int, timeout: float) -> bytes:
        """
        Record the packet and return the next response.

        Raises:
            TimeoutError: If no response is available.
        """
        self._record(data, host, port, timeout)

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                return response

        if self._responses:
            return self._responses.popleft()

        raise TimeoutError("No mock response available", timeout_seconds=timeout)

    def _record(self, data: bytes, host: str, port: int, timeout: float) -> None:
        self._sent_data.append(bytes(data))
        self._endpoints.append((host, port))
        self._timeouts.append(timeout)

    def assert_sent(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that a specific packet was sent.

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._sent_data:
            raise AssertionError("No data sent through mock transport")

        actual = self._sent_data[index]
        if actual != expected:
            raise AssertionError(f"Sent data mismatch: expected {expected!r}, got {actual!r}")

    def assert_send_count(self, expected: int) -> None:
        """
        Assert number of send operations.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._sent_data)
        if actual != expected:
            raise AssertionError(f"Send count mismatch: expected {expected}, got {actual}")


class ScriptedMockTransport(MockTransport):
    """
    Mock transport playing back a fixed device conversation.

    Each step pairs the packet the device should receive with the reply it
    gives. A step with no packet accepts any request. Once the script runs
    out, the transport falls back to MockTransport behaviour.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(ProtocolConstants.ACK, request=encode_packet(0x05, b"WB1"))
        >>> PmvClient(0x05, "10.0.0.21", transport=mock).switch_to_mode("force")
        True
        >>> mock.assert_script_done()
    """

    def __init__(self) -> None:
        super().__init__()
        self._steps: list[tuple[bytes | None, bytes]] = []
        self._position = 0

    @property
    def pending_steps(self) -> int:
        """Get the number of scripted steps not yet played."""
        return len(self._steps) - self._position

    def expect(self, response: bytes, request: bytes | None = None) -> None:
        """
        Append one step to the script.

        Args:
            response: Reply the device gives at this step.
            request: Packet the device must receive (None to accept any).
        """
        self._steps.append((request, response))

    def send(self, data: bytes, host: str, port: int, timeout: float) -> bytes:
        """Play the next scripted step, checking the request against it."""
        if not self.pending_steps:
            return super().send(data, host, port, timeout)

        self._record(data, host, port, timeout)
        request, response = self._steps[self._position]
        if request is not None and bytes(data) != request:
            raise AssertionError(
                f"Script mismatch at step {self._position}: "
                f"expected {request.hex(' ')}, got {bytes(data).hex(' ')}"
            )

        self._position += 1
        return response

    def assert_script_done(self) -> None:
        """
        Assert every scripted step was played.

        Raises:
            AssertionError: If steps remain.
        """
        if self.pending_steps:
            raise AssertionError(f"{self.pending_steps} scripted step(s) not played")

    def reset_script(self) -> None:
        """Replay the script from the first step."""
        self._position = 0

    def clear_script(self) -> None:
        """Drop all scripted steps."""
        self._steps.clear()
        self._position = 0
