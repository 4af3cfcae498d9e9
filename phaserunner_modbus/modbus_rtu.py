"""Modbus RTU framing and a request/response driver over a serial port."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Protocol

__all__ = [
    "ModbusError",
    "FrameError",
    "Response",
    "crc16",
    "build_read_request",
    "build_write_request",
    "parse_response",
    "ModbusDriver",
    "READ_HOLDING_REGISTERS",
    "WRITE_MULTIPLE_REGISTERS",
    "BUFFER_SIZE",
]

#: Reads the contents of holding registers in the slave.
READ_HOLDING_REGISTERS = 0x03
#: Presets values into a sequence of holding registers.
WRITE_MULTIPLE_REGISTERS = 0x10
#: Largest frame, in bytes, sent or received.
BUFFER_SIZE = 128


class ModbusError(Exception):
    """A Modbus transaction failed; ``code`` tells why."""

    class Code(enum.IntFlag):
        NONE = 0
        TX_BUFFER_OVERFLOW = 1 << 0
        RX_BUFFER_OVERFLOW = 1 << 1
        FRAME_TOO_SHORT = 1 << 2
        FRAME_CRC_ERROR = 1 << 3
        FRAME_INVALID_FC = 1 << 4
        FRAME_INVALID_REQUEST = 1 << 5
        FRAME_TRUNCATED_DATA = 1 << 6
        TX_TIMEOUT = 1 << 7
        RX_TIMEOUT = 1 << 8
        TX_TRANSMIT_ERROR = 1 << 9
        RX_RECEIVE_ERROR = 1 << 10
        SLAVE_TIMEOUT = 1 << 11

    def __init__(self, message: str, code: "ModbusError.Code" = Code.NONE) -> None:
        super().__init__(message)
        self.code = ModbusError.Code(code)


class FrameError(ModbusError):
    """A received frame is malformed or reports an error."""


_Code = ModbusError.Code


@dataclass(frozen=True)
class Response:
    """A decoded reply from a slave."""

    slave: int
    function_code: int
    values: tuple[int, ...] = ()
    start_address: int | None = None
    count: int = 0


def crc16(data: bytes) -> int:
    """Modbus CRC-16 (polynomial 0xA001, initial value 0xFFFF)."""
    crc = 0xFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
    return crc


def _check_range(what: str, value: int, maximum: int) -> int:
    if not 0 <= value <= maximum:
        raise ValueError(f"{what} {value} out of range 0..{maximum}")
    return value


def _with_crc(body: bytes) -> bytes:
    crc = crc16(body)
    frame = body + bytes((crc & 0xFF, crc >> 8))
    if len(frame) > BUFFER_SIZE:
        raise ModbusError(
            f"frame of {len(frame)} bytes exceeds {BUFFER_SIZE}", _Code.TX_BUFFER_OVERFLOW
        )
    return frame


def build_read_request(slave: int, start_address: int, count: int) -> bytes:
    """Frame a Read Holding Registers (0x03) request."""
    _check_range("slave", slave, 0xFF)
    _check_range("start address", start_address, 0xFFFF)
    _check_range("register count", count, 0xFFFF)
    body = bytes((slave, READ_HOLDING_REGISTERS)) + start_address.to_bytes(2, "big")
    return _with_crc(body + count.to_bytes(2, "big"))


def build_write_request(slave: int, start_address: int, values: Iterable[int]) -> bytes:
    """Frame a Write Multiple Registers (0x10) request."""
    _check_range("slave", slave, 0xFF)
    _check_range("start address", start_address, 0xFFFF)
    words = [_check_range("register value", int(v), 0xFFFF) for v in values]
    count = len(words)
    body = bytearray((slave, WRITE_MULTIPLE_REGISTERS))
    body += start_address.to_bytes(2, "big")
    body += count.to_bytes(2, "big")
    body.append((count * 2) & 0xFF)
    for word in words:
        body += word.to_bytes(2, "big")
    return _with_crc(bytes(body))


def parse_response(frame: bytes) -> Response:
    """Check and decode a slave's reply; raises FrameError if it is invalid."""
    frame = bytes(frame)
    if len(frame) < 5:
        raise FrameError(f"frame of {len(frame)} bytes is too short", _Code.FRAME_TOO_SHORT)

    received = frame[-1] << 8 | frame[-2]
    if received != crc16(frame[:-2]):
        raise FrameError("CRC mismatch", _Code.FRAME_CRC_ERROR)

    slave, function_code = frame[0], frame[1]
    if function_code & 0x80:
        raise FrameError(
            f"slave {slave} rejected function {function_code & 0x7F:#04x}",
            _Code.FRAME_INVALID_REQUEST,
        )
    if function_code not in (READ_HOLDING_REGISTERS, WRITE_MULTIPLE_REGISTERS):
        raise FrameError(
            f"unsupported function code {function_code:#04x}", _Code.FRAME_INVALID_FC
        )

    if function_code == READ_HOLDING_REGISTERS:
        byte_count = frame[2]
        if len(frame) != 3 + byte_count + 2 or byte_count % 2:
            raise FrameError("register data truncated", _Code.FRAME_TRUNCATED_DATA)
        data = frame[3 : 3 + byte_count]
        values = tuple(int.from_bytes(data[i : i + 2], "big") for i in range(0, byte_count, 2))
        return Response(slave, function_code, values, None, len(values))

    if len(frame) != 8:
        raise FrameError("write reply must be 8 bytes", _Code.FRAME_TOO_SHORT)
    return Response(
        slave,
        function_code,
        (),
        int.from_bytes(frame[2:4], "big"),
        int.from_bytes(frame[4:6], "big"),
    )


class _Port(Protocol):
    def write(self, data: bytes) -> object: ...

    def read(self, size: int) -> bytes: ...


class _State(enum.Enum):
    IDLE = enum.auto()
    WRITE_PREPARATION = enum.auto()


class ModbusDriver:
    """Runs Modbus RTU transactions over a serial-like port.

    The port needs ``write(bytes)`` and ``read(size)``; ``read`` returns
    whatever arrived before its timeout, empty bytes if nothing did. The
    end of a reply is detected by the port going quiet, as with a serial
    port opened with an inter-byte timeout.
    """

    def __init__(self, port: _Port) -> None:
        self._port = port
        self._state = _State.IDLE
        self._slave = 0
        self._start_address = 0
        self._pending: list[int] = []
        self._data: deque[int] = deque()
        self._valid = False
        self._last_error = _Code.NONE

    @property
    def busy(self) -> bool:
        """True while a multiple write is being prepared."""
        return self._state is not _State.IDLE

    def read_holding_registers(self, slave: int, start_address: int, count: int) -> Response:
        """Read ``count`` registers; the values are then available to :meth:`read`."""
        if self.busy:
            raise ModbusError("driver is preparing a write")
        return self._transact(build_read_request(slave, start_address, count))

    def begin_multiple_write(self, slave: int, start_address: int) -> None:
        """Start collecting values for a Write Multiple Registers request."""
        if self.busy:
            raise ModbusError("a multiple write is already in preparation")
        _check_range("slave", slave, 0xFF)
        _check_range("start address", start_address, 0xFFFF)
        self._slave = slave
        self._start_address = start_address
        self._pending = []
        self._state = _State.WRITE_PREPARATION

    def write(self, value: int) -> None:
        """Append one register value to the write in preparation."""
        if self._state is not _State.WRITE_PREPARATION:
            raise ModbusError("no multiple write in preparation")
        self._pending.append(_check_range("register value", int(value), 0xFFFF))

    def end_multiple_write(self) -> Response:
        """Send the prepared write and wait for the slave's acknowledgement."""
        if self._state is not _State.WRITE_PREPARATION:
            raise ModbusError("no multiple write in preparation")
        values, self._pending = self._pending, []
        self._state = _State.IDLE
        try:
            frame = build_write_request(self._slave, self._start_address, values)
        except ModbusError as exc:
            self._fail(exc)
            raise
        return self._transact(frame)

    def available(self) -> int:
        """Number of register values left from the last read."""
        return len(self._data)

    def read(self) -> int:
        """Take the next register value from the last read."""
        if not self._data:
            raise IndexError("no register data available")
        return self._data.popleft()

    def last_request_status(self) -> bool:
        """True if the last transaction got a valid reply."""
        return self._valid

    def last_error(self) -> "ModbusError.Code":
        """The reason the most recent failed transaction failed."""
        return self._last_error

    def _fail(self, exc: ModbusError) -> None:
        self._valid = False
        self._last_error = exc.code

    def _transact(self, frame: bytes) -> Response:
        self._valid = False
        self._data.clear()
        try:
            self._send(frame)
            response = parse_response(self._receive())
        except ModbusError as exc:
            self._fail(exc)
            raise
        self._valid = True
        self._data.extend(response.values)
        return response

    def _send(self, frame: bytes) -> None:
        reset = getattr(self._port, "reset_input_buffer", None)
        if callable(reset):
            reset()
        try:
            self._port.write(frame)
        except OSError as exc:
            raise ModbusError(f"transmit failed: {exc}", _Code.TX_TIMEOUT) from exc

    def _receive(self) -> bytes:
        try:
            first = self._port.read(1)
            if not first:
                raise ModbusError("no reply from slave", _Code.SLAVE_TIMEOUT)
            rest = self._port.read(BUFFER_SIZE - len(first))
        except OSError as exc:
            raise ModbusError(f"receive failed: {exc}", _Code.RX_RECEIVE_ERROR) from exc
        return bytes(first) + bytes(rest)