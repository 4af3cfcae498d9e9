"""Fault words reported by a Phaserunner controller.

Register 258 holds the motor faults and register 299 the controller
faults. Each is a 16-bit word in which every set bit is one active fault.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "MotorFault",
    "ControllerFault",
    "MotorFaults",
    "ControllerFaults",
    "MOTOR_FAULTS_REGISTER",
    "CONTROLLER_FAULTS_REGISTER",
]

#: Register holding the motor fault word.
MOTOR_FAULTS_REGISTER = 258
#: Register holding the controller fault word.
CONTROLLER_FAULTS_REGISTER = 299


class MotorFault(enum.IntFlag):
    """Bits of the motor fault word (register 258)."""

    CONTROLLER_OVER_VOLTAGE = 1 << 0
    FILTERED_PHASE_OVER_CURRENT = 1 << 1
    BAD_CURRENT_SENSOR_CALIBRATION = 1 << 2
    CURRENT_SENSOR_OVER_CURRENT = 1 << 3
    CURRENT_SENSOR_OVER_TEMP = 1 << 4
    MOTOR_HALL_SENSOR_FAULT = 1 << 5
    CONTROLLER_UNDER_VOLTAGE = 1 << 6
    NETWORK_COMM_TIMEOUT = 1 << 8
    INSTANT_PHASE_OVER_CURRENT = 1 << 9
    MOTOR_OVER_TEMP = 1 << 10
    THROTTLE_OVER_VOLTAGE = 1 << 11
    INSTANT_CONTROLLER_OVER_VOLTAGE = 1 << 12
    INTERNAL_ERROR = 1 << 13
    INSTANT_CONTROLLER_UNDER_VOLTAGE = 1 << 15


class ControllerFault(enum.IntFlag):
    """Bits of the controller fault word (register 299)."""

    CURRENT_SCALING = 1 << 1
    VOLTAGE_SCALING = 1 << 2
    HEADLIGHT_UNDERVOLTAGE = 1 << 3
    CANBUS = 1 << 5
    HALL_STALL = 1 << 6
    DYN_TORQUE_SENSOR_VOLTAGE_OUT_OF_RANGE = 1 << 10
    DYN_TORQUE_SENSOR_STATIC_VOLTAGE_FAULT = 1 << 11
    REMOTE_CAN_FAULT = 1 << 12
    OPEN_PHASE_FAULT = 1 << 14
    ANALOG_BRAKE_VOLTAGE_OUT_OF_RANGE = 1 << 15


@dataclass
class MotorFaults:
    """The motor fault word as last read from the controller."""

    faults: int = 0

    def __post_init__(self) -> None:
        self.faults = int(self.faults) & 0xFFFF

    def ready(self) -> bool:
        """True when no fault bit is set."""
        return self.faults == 0

    def active(self) -> list[MotorFault]:
        """The known faults whose bit is set, lowest bit first."""
        return [fault for fault in MotorFault if self.faults & fault]


@dataclass
class ControllerFaults:
    """The controller fault word as last read from the controller."""

    faults: int = 0

    def __post_init__(self) -> None:
        self.faults = int(self.faults) & 0xFFFF

    def ready(self) -> bool:
        """True when no fault bit is set."""
        return self.faults == 0

    def active(self) -> list[ControllerFault]:
        """The known faults whose bit is set, lowest bit first."""
        return [fault for fault in ControllerFault if self.faults & fault]