import pytest

from phaserunner_modbus.faults import MotorFault
from phaserunner_modbus.master import ModbusMaster
from phaserunner_modbus.modbus_rtu import ModbusDriver, crc16
from phaserunner_modbus.phaserunner import Phaserunner


def _with_crc(body: bytes) -> bytes:
    crc = crc16(body)
    return body + bytes((crc & 0xFF, crc >> 8))


class FakePort:
    """Answers Modbus requests from a table of register values."""

    def __init__(self, values=None, silent=False):
        self.values = dict(values or {})
        self.silent = silent
        self.requests = []
        self._out = b""

    def write(self, data):
        data = bytes(data)
        self.requests.append(data)
        if self.silent:
            return len(data)
        fc = data[1]
        if fc == 0x03:
            start = int.from_bytes(data[2:4], "big")
            count = int.from_bytes(data[4:6], "big")
            payload = b"".join(
                self.values.get(start + i, 0).to_bytes(2, "big") for i in range(count)
            )
            self._out = _with_crc(bytes((data[0], 3, len(payload))) + payload)
        else:
            self._out = _with_crc(data[:6])
        return len(data)

    def read(self, size):
        chunk, self._out = self._out[:size], self._out[size:]
        return chunk


def make(port=None, clock=None):
    port = port or FakePort()
    master = ModbusMaster(ModbusDriver(port))
    kwargs = {"start_master": False}
    if clock is not None:
        kwargs["clock"] = clock
    return Phaserunner(1, master, **kwargs), master, port


def test_start_motor_sets_running_state_at_zero_speed():
    motor, _, _ = make()
    motor.start_motor()
    assert motor.registers.get(493).value == 2
    assert motor.registers.get(490).value == 0
    assert motor.registers.get(493).pending_write


def test_stop_motor_sets_idle_state():
    motor, _, _ = make()
    motor.start_motor()
    motor.stop_motor()
    assert motor.registers.get(493).value == 1
    assert motor.registers.get(490).value == 0


def test_full_speed_uses_4095_scale():
    motor, _, _ = make()
    motor.set_speed(100.0)
    assert motor.registers.get(490).value == 4095


def test_current_limits_full_scale():
    motor, _, _ = make()
    motor.set_currents_limits(100.0, 100.0)
    assert motor.registers.get(491).value == 4096
    assert motor.registers.get(492).value == 4096


def test_speed_above_100_rejected_and_register_untouched():
    motor, _, _ = make()
    with pytest.raises(ValueError):
        motor.set_speed_command(150.0)
    assert not motor.registers.get(490).pending_write


@pytest.mark.parametrize(
    ("method", "args"),
    [
        ("set_remote_state", (3,)),
        ("set_control_source", (6,)),
        ("set_speed_regulator_mode", (3,)),
        ("set_torque_command", (101.0,)),
        ("set_currents_limits", (50.0, 120.0)),
    ],
)
def test_out_of_range_commands_raise(method, args):
    motor, _, _ = make()
    with pytest.raises(ValueError):
        getattr(motor, method)(*args)
    assert not any(r.pending_write for r in motor.registers)


def test_communication_timeout_sets_both_registers():
    motor, _, _ = make()
    motor.set_communication_timeout(250)
    assert motor.registers.get(32).value == 250
    assert motor.registers.get(49).value == 250


def test_throttle_voltage_and_clear_faults():
    motor, _, _ = make()
    motor.set_remote_throttle_voltage(1234)
    motor.clear_faults()
    assert motor.registers.get(495).value == 1234
    assert motor.registers.get(508).value == 1
    assert motor.registers.get(508).pending_write


def test_setup_puts_controller_in_safe_state():
    motor, _, _ = make()
    motor.setup()
    assert motor.registers.get(11).value == 2
    assert motor.registers.get(208).value == 0
    assert motor.registers.get(493).value == 1
    assert motor.registers.get(494).value == 2048
    assert motor.registers.get(508).value == 1


def test_heartbeat_requests_fault_words():
    motor, _, _ = make()
    motor.heartbeat()
    assert motor.registers.get(258).pending_read
    assert motor.registers.get(299).pending_read
    assert motor.registers.get(32).pending_write
    assert not motor.registers.get(491).pending_write


def test_heartbeat_refreshes_commands_while_running():
    motor, _, _ = make()
    motor.set_currents_limits(100.0, 100.0)
    motor.start_motor()
    motor.sync()
    assert not motor.registers.get(491).pending_write
    motor.heartbeat()
    assert motor.registers.get(491).pending_write
    assert motor.registers.get(491).value == 4096
    assert motor.registers.get(493).value == 2


def test_sync_queues_writes_and_reads_and_clears_flags():
    motor, master, _ = make()
    motor.heartbeat()
    motor.sync()
    assert master.pending_requests == 2
    assert not any(r.pending_write or r.pending_read for r in motor.registers)


def test_sync_updates_faults_from_answers():
    motor, master, port = make(FakePort({258: 0x0021, 299: 0}))
    motor.heartbeat()
    motor.sync()
    assert master.process() == 2
    motor.sync()  # write acknowledgement
    motor.sync()  # fault words
    faults = motor.motor_faults()
    assert faults.faults == 0x0021
    assert MotorFault.MOTOR_HALL_SENSOR_FAULT in faults.active()
    assert motor.controller_faults().ready()
    assert port.requests[0][1] == 0x10


def test_failed_answer_leaves_faults_unchanged():
    motor, master, _ = make(FakePort(silent=True))
    motor.read_motor_faults()
    motor.sync()
    master.process()
    motor.sync()
    assert master.pending_answers == 0
    assert motor.motor_faults().ready()


def test_run_triggers_heartbeat_after_period():
    now = [0.0]
    motor, master, _ = make(clock=lambda: now[0])
    motor.run()
    assert master.pending_requests == 0
    now[0] = 0.1
    motor.run()
    assert master.pending_requests == 2