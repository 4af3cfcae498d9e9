"""Queue of register packets served over a Modbus driver by a worker."""

from __future__ import annotations

import enum
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator

from .modbus_rtu import ModbusDriver, ModbusError
from .registers import Register
from .task import Task

__all__ = ["Direction", "ModbusPacket", "ModbusMaster", "PANIC_FIFO_SIZE"]

#: Queue length at which requests are refused and answers counted as panics.
PANIC_FIFO_SIZE = 12


class Direction(enum.IntEnum):
    """Whether a packet reads registers from, or writes them to, a slave."""

    READ = 0
    WRITE = 1


@dataclass
class ModbusPacket:
    """A set of registers to read from or write to one slave."""

    slave: int
    direction: Direction = Direction.READ
    registers: list[Register] = field(default_factory=list)
    success: bool = False

    def push(self, register: Register) -> None:
        """Add a register to the packet."""
        self.registers.append(register)


def _contiguous_runs(registers: list[Register]) -> Iterator[list[Register]]:
    """Split registers where an address is more than one away from the last."""
    run: list[Register] = []
    for register in registers:
        if run and abs(register.address - run[-1].address) > 1:
            yield run
            run = []
        run.append(register)
    if run:
        yield run


class ModbusMaster(Task):
    """Serves queued packets one after another and queues their answers.

    Each packet is split into runs of adjacent addresses and every run is
    one Modbus transaction. A packet that fails is still answered, with
    ``success`` left False.
    """

    def __init__(self, driver: ModbusDriver, panic_size: int = PANIC_FIFO_SIZE) -> None:
        super().__init__()
        self.driver = driver
        self.panic_size = panic_size
        self.success_requests = 0
        self.failed_requests = 0
        self.request_panic_counter = 0
        self.answer_panic_counter = 0
        self.successive_failures = 0
        self._requests: deque[ModbusPacket] = deque()
        self._answers: deque[ModbusPacket] = deque()
        self._lock = threading.Lock()

    @property
    def pending_requests(self) -> int:
        """Number of packets waiting to be served."""
        with self._lock:
            return len(self._requests)

    @property
    def pending_answers(self) -> int:
        """Number of served packets waiting to be collected."""
        with self._lock:
            return len(self._answers)

    def request(self, packet: ModbusPacket) -> bool:
        """Queue a packet; False if the queue is full or the packet is empty."""
        with self._lock:
            if len(self._requests) >= self.panic_size or not packet.registers:
                self.request_panic_counter += 1
                return False
            self._requests.append(packet)
        self.resume()
        return True

    def response(self, slave: int) -> ModbusPacket | None:
        """Take the oldest answer if it belongs to ``slave``, else None."""
        with self._lock:
            if self._answers and self._answers[0].slave == slave:
                return self._answers.popleft()
        return None

    def available(self, slave: int) -> int:
        """Number of queued answers for ``slave``."""
        with self._lock:
            return sum(1 for packet in self._answers if packet.slave == slave)

    def process(self) -> int:
        """Serve every queued packet; return how many were served."""
        handled = 0
        while True:
            with self._lock:
                if not self._requests:
                    return handled
                packet = self._requests.popleft()
            self._execute(packet)
            with self._lock:
                if len(self._answers) >= self.panic_size:
                    self.answer_panic_counter += 1
                self._answers.append(packet)
            handled += 1

    def run(self) -> None:
        """Serve queued packets, or wait for a request when there are none."""
        with self._lock:
            idle = not self._requests
        if idle:
            self.suspend()
            return
        self.process()

    def _record(self, ok: bool) -> None:
        if ok:
            self.success_requests += 1
            self.successive_failures = 0
        else:
            self.failed_requests += 1
            self.successive_failures += 1

    def _execute(self, packet: ModbusPacket) -> None:
        packet.success = True
        for run in _contiguous_runs(packet.registers):
            try:
                if packet.direction == Direction.WRITE:
                    self._write_run(packet.slave, run)
                    ok = True
                else:
                    ok = self._read_run(packet.slave, run)
            except ModbusError:
                ok = False
            self._record(ok)
            if not ok:
                packet.success = False
                return

    def _write_run(self, slave: int, run: list[Register]) -> None:
        self.driver.begin_multiple_write(slave, run[0].address)
        for register in run:
            self.driver.write(int(register.value) & 0xFFFF)
        self.driver.end_multiple_write()

    def _read_run(self, slave: int, run: list[Register]) -> bool:
        self.driver.read_holding_registers(slave, run[0].address, len(run))
        if self.driver.available() != len(run):
            return False
        for register in run:
            register.value = float(self.driver.read())
        return True