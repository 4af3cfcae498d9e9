"""Modbus RTU master and command layer for Phaserunner motor controllers."""

__version__ = "0.1.0"

__all__ = [
    "faults",
    "master",
    "modbus_rtu",
    "phaserunner",
    "register_names",
    "registers",
    "task",
]