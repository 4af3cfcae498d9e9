"""High level control of one Phaserunner motor controller.

Commands are written into a local register map. The worker loop sends
registers marked for writing and reading to a :class:`ModbusMaster`,
collects the answers, and every heartbeat refreshes the commands and
reads the fault words back.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable

from .faults import (
    CONTROLLER_FAULTS_REGISTER,
    MOTOR_FAULTS_REGISTER,
    ControllerFaults,
    MotorFaults,
)
from .master import Direction, ModbusMaster, ModbusPacket
from .registers import Register, RegisterMap
from .task import Task

__all__ = ["Phaserunner", "HEARTBEAT_RATE_MS", "MotorState"]

#: Period of the heartbeat, in milliseconds.
HEARTBEAT_RATE_MS = 100

# Register addresses used by the controller logic.
_SPEED_REGULATOR_MODE = 11
_COMMAND_TIMEOUT = 32
_AVERAGE_COMMAND_TIMEOUT = 49
_CONTROL_SOURCE = 208
_REMOTE_SPEED = 490
_REMOTE_MOTORING_CURRENT = 491
_REMOTE_BRAKING_CURRENT = 492
_REMOTE_STATE = 493
_REMOTE_TORQUE = 494
_REMOTE_THROTTLE_VOLTAGE = 495
_FAULT_CLEAR = 508


class MotorState:
    """Values of the remote state command (register 493)."""

    OFF = 0
    IDLE = 1
    RUNNING = 2


@dataclass
class _MotorCommands:
    motoring_current_limit: float = 0.0
    braking_current_limit: float = 0.0
    speed: float = 0.0
    torque: float = 0.0
    state: int = MotorState.OFF


class _PeriodicTimer:
    """Continuous timer that reports once per elapsed period."""

    def __init__(self, period_ms: float, clock: Callable[[], float]) -> None:
        self._period = period_ms / 1000.0
        self._clock = clock
        self._last = clock()

    def triggered(self) -> bool:
        now = self._clock()
        if now - self._last >= self._period:
            self._last = now
            return True
        return False


class Phaserunner(Task):
    """One motor controller reached through a shared Modbus master."""

    def __init__(
        self,
        slave_id: int,
        master: ModbusMaster,
        *,
        clock: Callable[[], float] = time.monotonic,
        start_master: bool = True,
    ) -> None:
        super().__init__()
        self.slave = slave_id
        self.master = master
        self.registers = RegisterMap()
        self._start_master = start_master
        self._commands = _MotorCommands()
        self._motor_faults = MotorFaults()
        self._controller_faults = ControllerFaults()
        self._heartbeat_timer = _PeriodicTimer(HEARTBEAT_RATE_MS, clock)

    # ------------------------------------------------------------------ loop

    def setup(self) -> None:
        """Start the master if asked to and put the controller in a safe state."""
        if self._start_master and not self.master.running:
            self.master.start("ModbusMaster")
        self.set_communication_timeout(0)
        self.set_control_source(0)
        self.set_currents_limits(100.0, 100.0)
        self.set_speed_regulator_mode(2)
        self.set_torque_command(50.0)
        self.stop_motor()
        self.clear_faults()

    def run(self) -> None:
        """One pass of the worker loop: heartbeat, exchange, short pause."""
        if self._heartbeat_timer.triggered():
            self.heartbeat()
        self.sync()
        self.sleep(10)

    def sync(self) -> None:
        """Queue pending writes and reads, then handle one answer if any."""
        self._queue_pending("pending_write", Direction.WRITE)
        self._queue_pending("pending_read", Direction.READ)

        answer = self.master.response(self.slave)
        if answer is None or not answer.success:
            return
        for register in answer.registers:
            if register.address == MOTOR_FAULTS_REGISTER:
                self._motor_faults = MotorFaults(int(register.value))
            elif register.address == CONTROLLER_FAULTS_REGISTER:
                self._controller_faults = ControllerFaults(int(register.value))

    def _queue_pending(self, flag: str, direction: Direction) -> None:
        pending: list[Register] = []
        for register in self.registers:
            if getattr(register, flag):
                setattr(register, flag, False)
                pending.append(replace(register))
        if pending:
            self.master.request(ModbusPacket(self.slave, direction, pending))

    # -------------------------------------------------------------- commands

    def start_motor(self) -> None:
        """Put the motor in the running state at zero speed."""
        self.set_speed_command(0)
        self.set_remote_state(MotorState.RUNNING)

    def stop_motor(self) -> None:
        """Put the motor in the idle state at zero speed."""
        self.set_speed_command(0)
        self.set_remote_state(MotorState.IDLE)

    def set_speed(self, speed: float) -> None:
        """Set the speed as a percentage of rated speed."""
        self.set_speed_command(speed)

    def motor_faults(self) -> MotorFaults:
        """The motor fault word as last read."""
        return replace(self._motor_faults)

    def controller_faults(self) -> ControllerFaults:
        """The controller fault word as last read."""
        return replace(self._controller_faults)

    def clear_faults(self) -> None:
        """Ask the controller to clear its faults."""
        self.registers.set(_FAULT_CLEAR, 1)

    def heartbeat(self) -> None:
        """Refresh the commands while running and request the fault words."""
        if self.registers.get(_REMOTE_STATE).value == MotorState.RUNNING:
            commands = self._commands
            self.set_currents_limits(
                commands.motoring_current_limit, commands.braking_current_limit
            )
            self.set_speed_command(commands.speed)
            self.set_torque_command(commands.torque)
            self.set_remote_state(commands.state)

        self.set_communication_timeout(0)
        self.read_controller_faults()
        self.read_motor_faults()

    def set_communication_timeout(self, timeout: int) -> None:
        """Set the command timeout in milliseconds; 0 disables it."""
        self.registers.set(_COMMAND_TIMEOUT, timeout)
        self.registers.set(_AVERAGE_COMMAND_TIMEOUT, timeout)

    def set_control_source(self, source: int) -> None:
        """Select the command source, 0 (serial) to 5."""
        if not 0 <= source <= 5:
            raise ValueError(f"control source {source} out of range 0..5")
        self.registers.set(_CONTROL_SOURCE, source)

    def set_speed_regulator_mode(self, mode: int) -> None:
        """Select 0 speed, 1 torque or 2 speed limit plus torque regulation."""
        if not 0 <= mode <= 2:
            raise ValueError(f"speed regulator mode {mode} out of range 0..2")
        self.registers.set(_SPEED_REGULATOR_MODE, mode)

    def set_speed_command(self, speed: float) -> None:
        """Set the remote speed command as a percentage of rated speed."""
        if speed > 100.0:
            raise ValueError(f"speed {speed} exceeds 100%")
        self._commands.speed = speed
        self.registers.set(_REMOTE_SPEED, 4095 * (speed / 100.0))

    def set_currents_limits(self, motor: float, brake: float) -> None:
        """Set motoring and braking current limits as percentages of nominal."""
        if motor > 100.0 or brake > 100.0:
            raise ValueError(f"current limits {motor}, {brake} exceed 100%")
        self._commands.motoring_current_limit = motor
        self._commands.braking_current_limit = brake
        self.registers.set(_REMOTE_MOTORING_CURRENT, 4096 * (motor / 100.0))
        self.registers.set(_REMOTE_BRAKING_CURRENT, 4096 * (brake / 100.0))

    def set_remote_state(self, state: int) -> None:
        """Set the motor state: 0 off, 1 idle, 2 running."""
        if not 0 <= state <= 2:
            raise ValueError(f"remote state {state} out of range 0..2")
        self._commands.state = state
        self.registers.set(_REMOTE_STATE, state)

    def set_torque_command(self, torque: float) -> None:
        """Set the torque command as a percentage of rated torque."""
        if torque > 100.0:
            raise ValueError(f"torque {torque} exceeds 100%")
        self._commands.torque = torque
        self.registers.set(_REMOTE_TORQUE, 4096 * (torque / 100.0))

    def set_remote_throttle_voltage(self, voltage: int) -> None:
        """Set the voltage of a remote throttle command."""
        self.registers.set(_REMOTE_THROTTLE_VOLTAGE, voltage)

    def read_motor_faults(self) -> None:
        """Mark the motor fault word to be read."""
        self.registers.read(MOTOR_FAULTS_REGISTER)

    def read_controller_faults(self) -> None:
        """Mark the controller fault word to be read."""
        self.registers.read(CONTROLLER_FAULTS_REGISTER)