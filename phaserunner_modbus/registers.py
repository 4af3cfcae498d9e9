"""Working register map of a Phaserunner motor controller.

Only the registers the controller logic uses are kept in the map. Each
register remembers whether it has a value waiting to be written to the
device or is waiting to be read back from it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator

__all__ = ["Register", "RegisterMap", "MAX_BLOCK"]

#: Largest number of registers :meth:`RegisterMap.get_block` returns.
MAX_BLOCK = 16

# (address, scale) of the registers kept in the working map.
_DEFAULT_LAYOUT: tuple[tuple[int, float], ...] = (
    (11, 0),  # speed regulator mode
    (32, 1),  # command timeout threshold
    (49, 1),  # average command timeout threshold
    (208, 0),  # control command source
    (258, 0),  # faults
    (299, 0),  # faults2
    (490, 40.96),  # remote speed command
    (491, 40.96),  # remote maximum motoring current
    (492, 40.96),  # remote maximum braking current
    (493, 0),  # remote state command
    (494, 40.96),  # remote torque command
    (495, 4096),  # remote throttle voltage
    (508, 1),  # fault clear
    (509, 0),  # parameter access code 1
)


@dataclass
class Register:
    """One holding register with its scale, value and pending flags."""

    address: int = 0
    scale: float = 0.0
    value: float = 0.0
    pending_write: bool = False
    pending_read: bool = False


class RegisterMap:
    """The registers of one controller, looked up by address."""

    def __init__(self) -> None:
        self._registers: list[Register] = [
            Register(address, float(scale)) for address, scale in _DEFAULT_LAYOUT
        ]

    def _find(self, address: int) -> Register | None:
        return next((r for r in self._registers if r.address == address), None)

    def set(self, address: int, value: float) -> bool:
        """Store a 16-bit value and mark the register for writing.

        The value is truncated to an unsigned 16-bit integer. Unknown
        addresses are ignored; the result tells whether the register exists.
        """
        register = self._find(address)
        if register is None:
            return False
        register.value = float(int(value) & 0xFFFF)
        register.pending_write = True
        return True

    def read(self, address: int) -> bool:
        """Mark a register to be read back; False if the address is unknown."""
        register = self._find(address)
        if register is None:
            return False
        register.pending_read = True
        return True

    def get(self, address: int) -> Register:
        """Return a copy of a register, or a blank register if unknown."""
        register = self._find(address)
        return Register() if register is None else replace(register)

    def get_block(self, address: int, count: int) -> list[Register]:
        """Return copies of ``count`` consecutive registers from ``address``.

        Nothing is returned when more than :data:`MAX_BLOCK` are asked for.
        """
        if count > MAX_BLOCK:
            return []
        return [self.get(address + offset) for offset in range(count)]

    def __iter__(self) -> Iterator[Register]:
        return iter(self._registers)

    def __len__(self) -> int:
        return len(self._registers)

    def __contains__(self, address: object) -> bool:
        return any(r.address == address for r in self._registers)