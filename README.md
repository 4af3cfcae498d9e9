# phaserunner_modbus

Talk to a Phaserunner motor controller over a Modbus RTU link.

The package is built in layers, and each layer can be used on its own:

- `phaserunner_modbus.modbus_rtu` — the wire format: `crc16`,
  `build_read_request`, `build_write_request` and `parse_response` for
  function codes 0x03 (read holding registers) and 0x10 (write multiple
  registers), plus `ModbusDriver`, which sends requests over a port object
  and collects the replies. Malformed or rejected frames raise `FrameError`,
  a subclass of `ModbusError`; every `ModbusError` carries a `code` flag
  telling why it failed.
- `phaserunner_modbus.registers` — `Register` and `RegisterMap`, the local
  copy of the controller registers the package works with. `set` stores a
  16-bit value and marks the register to be written; `read` marks it to be
  fetched; `get` and `get_block` return copies.
- `phaserunner_modbus.register_names` — the controller's full register
  dictionary (addresses 0 to 511): `register_info(address)` and
  `find_register(name)` return a `RegisterInfo` with name, address and scale,
  and raise `KeyError` for unknown registers.
- `phaserunner_modbus.faults` — `MotorFaults` and `ControllerFaults` hold the
  fault words (registers 258 and 299); `active()` lists the set
  `MotorFault` / `ControllerFault` flags and `ready()` is true when none is set.
- `phaserunner_modbus.master` — `ModbusMaster` queues `ModbusPacket` requests
  (reads or writes, see `Direction`), splits each packet into runs of adjacent
  addresses, runs them through a `ModbusDriver` and hands the answers back per
  slave through `response` and `available`. A full queue or an empty packet
  makes `request` return `False`.
- `phaserunner_modbus.phaserunner` — `Phaserunner`, the motor-level
  interface: `start_motor`, `stop_motor`, `set_speed`, current, torque and
  throttle commands, fault reading and clearing, and a heartbeat every 100 ms
  that refreshes the commands while running and requests the fault words.
  Out-of-range commands raise `ValueError`.
- `phaserunner_modbus.task` — `Task`, a background-thread base class with
  `setup` / `run` / `cleanup` hooks, `start`, `stop`, `suspend`, `resume`
  and `join`, which the master and the motor interface build on.

## Installation

```
pip install .
```

The package has no runtime dependencies.

## Building frames by hand

```python
from phaserunner_modbus.modbus_rtu import build_read_request, crc16, parse_response

# Read two registers starting at the fault word of slave 1.
frame = build_read_request(1, 258, 2)

# Every RTU frame ends with its CRC, low byte first.
body, tail = frame[:-2], frame[-2:]
assert int.from_bytes(tail, "little") == crc16(body)
```

`parse_response` takes the raw bytes that came back from a slave, checks the
length and CRC, and returns a `Response`; anything it cannot accept raises
`FrameError`.

## Driving a controller

`ModbusDriver` needs a port object with `write(bytes)` and `read(size)`,
where `read` returns whatever arrived before its timeout (empty bytes if
nothing did). The end of a reply is taken to be the moment the port goes
quiet, so a serial port should be opened with a short inter-byte timeout.

```python
from phaserunner_modbus.master import ModbusMaster
from phaserunner_modbus.modbus_rtu import ModbusDriver
from phaserunner_modbus.phaserunner import Phaserunner

driver = ModbusDriver(port)          # port: an already opened serial port
master = ModbusMaster(driver)
motor = Phaserunner(1, master)

motor.start("Phaserunner")           # setup() also starts the master
motor.start_motor()
motor.set_speed(20.0)
...
motor.stop_motor()
print(motor.motor_faults().active())

motor.stop()
master.stop()
```

## Looking up registers

```python
from phaserunner_modbus.register_names import find_register, register_info

info = register_info(490)          # Remote speed command
same = find_register(info.name)
```

## What the package does not do

It does not open serial ports and installs no command-line program: the
caller opens the port, wraps it in a `ModbusDriver`, and runs the motor
sequence from Python as shown above.

## Running the tests

```
pip install .[test]
pytest
```