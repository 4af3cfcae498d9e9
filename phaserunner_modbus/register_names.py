"""Names and scales of every Phaserunner register, 0 to 511."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["RegisterInfo", "register_info", "find_register", "REGISTER_COUNT"]


@dataclass(frozen=True)
class RegisterInfo:
    """Description of one register in the controller's dictionary."""

    name: str
    address: int
    scale: float


# Indexed by register address.
_TABLE: tuple[tuple[str, float], ...] = (
    ("Controller output current rating", 1),
    ("Controller input voltage rating", 1),
    ("Switching frequency", 1),
    ("Dead time", 1),
    ("Baud rate", 0.01),
    ("Slave ID", 1),
    ("HW configuration vector", 0),
    ("Current regulator Kp", 4096),
    ("Current regulator Ki", 16),
    ("Speed regulator Kp", 4096),
    ("Speed regulator Ki", 256),
    ("Speed regulator mode", 0),
    ("Pll Kp old", 1),
    ("Pll Ki old", 1),
    ("Phase A current gain", 64),
    ("Voltage gain", 256),
    ("Phase C current gain", 64),
    ("Throttle gain", 1024),
    ("Brake gain", 1024),
    ("BMS gain", 1024),
    ("DC voltage filter shift", 1),
    ("Temperature filter shift", 1),
    ("DQ axis filter shift", 1),
    ("Flux filter shift", 1),
    ("Flux hpf shift", 1),
    ("Flux frequency filter shift", 1),
    ("Voltage feedback filter cutoff frequency", 1),
    ("Averaged over current trip threshold", 1),
    ("Averaged over current trip sample length", 1),
    ("Instantaneous over current trip threshold", 1),
    ("Phase Current RMS Filter Shift", 1),
    ("Maximum interrupt execution time", 4096),
    ("Command timeout threshold", 1),
    ("DC voltage trip clear hysterisis", 40.96),
    ("Heatsink over temperature trip threshold", 1),
    ("Controller foldback starting temperature", 1),
    ("Controller foldback ending temperature", 1),
    ("Controller temperature feedback V at 0 C", 4096),
    ("Controller temperature feedback V at 25 C", 4096),
    ("Controller temperature feedback V at 50 C", 4096),
    ("Controller temperature feedback V at 75 C", 4096),
    ("Controller temperature feedback V at 100 C", 4096),
    ("Controller temperature feedback V at 125 C", 4096),
    ("SMT Datecode", 1),
    ("SMT Serial Number", 1),
    ("Antitheft enable time", 1),
    ("reserved 46", 1),
    ("Open circuit voltage test window", 4096),
    ("High/Lowside turn on voltage test window", 4096),
    ("Average Command timeout threshold", 1),
    ("Remote comm loss braking current limit", 4096),
    ("Current Regulator bandwidth", 1),
    ("PLL bandwidth", 1),
    ("PLL damping", 256),
    ("Pll Kp", 1),
    ("Pll Ki", 0.03125),
    ("CAN baud rate", 1),
    ("CAN ID", 1),
    ("Communications Configuration Vector", 0),
    ("Battery resistance", 1),
    ("New Phase A current gain", 8),
    ("New Phase C current gain", 8),
    ("Flash parameter read access code 1", 0),
    ("Hall stall fault time", 1),
    ("Baud rate port2", 0.01),
    ("Slave ID port2", 1),
    ("Display protocol", 0),
    ("Saved software revision", 1000),
    ("reserved 68", 1),
    ("Lm", 1),
    ("Rated system voltage", 1),
    ("Rated motor current", 1),
    ("Rated motor speed", 1),
    ("Rated motor power (Race mode Throttle power)", 1),
    ("Ls", 1),
    ("Rs", 1),
    ("Display protocol2", 0),
    ("Motor position sensor type", 0),
    ("# of motor pole pairs", 1),
    ("Hall offset", 91.02222222),
    ("Hall sector[0]", 1),
    ("Hall sector[1]", 1),
    ("Hall sector[2]", 1),
    ("Hall sector[3]", 1),
    ("Hall sector[4]", 1),
    ("Hall sector[5]", 1),
    ("Hall sector[6]", 1),
    ("Hall sector[7]", 1),
    ("Hall interpolation start frequency", 32),
    ("Hall interpolation stop frequency", 32),
    ("Motor over temperature trip threshold", 1),
    ("Motor foldback starting temperature", 1),
    ("Motor foldback ending temperature", 1),
    ("Temperature feedback V at 0 C", 4096),
    ("Temperature feedback V at 25 C", 4096),
    ("Temperature feedback V at 50 C", 4096),
    ("Temperature feedback V at 75 C", 4096),
    ("Temperature feedback V at 100 C", 4096),
    ("Temperature feedback V at 125 C", 4096),
    ("Overload continous current", 40.96),
    ("Overload heating current", 40.96),
    ("Overload heating time", 1),
    ("Overload cooling current", 40.96),
    ("Overload cooling time", 1),
    ("Overload foldback start", 40.96),
    ("Overload foldback end", 40.96),
    ("Sensorless open loop starting current", 4096),
    ("Sensorless open loop injection current ramp time", 1),
    ("Sensorless closed loop enable frequency", 1),
    ("Sensorless open loop freq ramp time ms", 1),
    ("Sensorless open loop dc current hold time", 1),
    ("Battery upper range", 32),
    ("Display language and units", 0),
    ("POD LED Brightness Obsolete", 1),
    ("Single push assist source", 0),
    ("Single push assist boost timer", 1),
    ("Speed mode positive acceleration ramp", 16),
    ("Throttle agressiveness speed threshold", 4096),
    ("Speed mode Regen ramp", 16),
    ("Hall transitions to start free wheel", 1),
    ("Battery lower range", 32),
    ("Rated motor power (Street mode PAS power)", 1),
    ("Rated motor power (Race mode PAS power)", 1),
    ("Vehicle maximum speed (Street mode PAS max speed)", 256),
    ("Vehicle maximum speed (Race mode PAS max speed)", 256),
    ("Customer Parameter version", 1),
    ("Bluetooth Test Parameter", 1),
    ("Motor features", 0),
    ("Hall Interpolation Transitions", 1),
    ("Maximum Field Weakening current", 40.96),
    ("reserved_130", 1),
    ("Rated motor power (Street mode Throttle power)", 1),
    ("Pedalec sensorless open loop starting current", 4096),
    ("Pedalec sensorless open loop freq ramp time ms", 1),
    ("Pedalec sensorless closed loop enable frequency", 1),
    ("High battery state of charge foldback starting capacity", 1),
    ("High battery state of charge foldback end capacity", 1),
    ("Motor temperature source", 0),
    ("Walk mode signal source", 0),
    ("Alternate power switch source", 0),
    ("Alternate speed limit switch source", 0),
    ("Low battery foldback starting voltage", 40.96),
    ("Low battery foldback end voltage", 40.96),
    ("Cold battery foldback starting temperature", 1),
    ("Cold battery foldback ending temperature", 1),
    ("Low battery state of charge foldback starting capacity", 1),
    ("Low battery state of charge foldback end capacity", 1),
    ("Fast over voltage threshold", 40.96),
    ("Fast under voltage threshold", 40.96),
    ("Slow over voltage threshold", 40.96),
    ("Slow under voltage threshold", 40.96),
    ("Throttle deadband threshold", 4096),
    ("Throttle fault range", 4096),
    ("Reserved L1 1", 1),
    ("Maximum braking torque", 40.96),
    ("Battery current limit", 40.96),
    ("Regeneration battery current limit", 40.96),
    ("Power map Watts setpoint 1", 40.96),
    ("Power map Watts setpoint 2", 40.96),
    ("Power map Watts setpoint 3", 40.96),
    ("Power map Watts setpoint 4", 40.96),
    ("Power map Watts setpoint 5", 40.96),
    ("Power map Watts setpoint 6", 40.96),
    ("Power map Watts setpoint 7", 40.96),
    ("Power map Watts setpoint 8", 40.96),
    ("Power map speed setpoint 1", 40.96),
    ("Power map speed setpoint 2", 40.96),
    ("Power map speed setpoint 3", 40.96),
    ("Power map speed setpoint 4", 40.96),
    ("Power map speed setpoint 5", 40.96),
    ("Power map speed setpoint 6", 40.96),
    ("Power map speed setpoint 7", 40.96),
    ("Power map speed setpoint 8", 40.96),
    ("Minimum motoring torque", 4096),
    ("Features2", 0),
    ("Pedal speed map offset", 4096),
    ("Pedal speed map end", 64),
    ("Engine braking torque", 40.96),
    ("Pedalec torque symmetry", 0),
    ("Pedalec power gain", 1024),
    ("Pedalec initial torque", 64),
    ("Pedalec deadband torque", 64),
    ("Torque sensor offset", 4096),
    ("Torque sensor gain", 1),
    ("Datalog channel 1 select", 0),
    ("Datalog channel 2 select", 0),
    ("Datalog channel 3 select", 0),
    ("Datalog channel 4 select", 0),
    ("Datalog trigger level", 1),
    ("Datalog trigger mask", 0),
    ("Datalog hold off", 1),
    ("Datalog timebase", 1),
    ("Datalog trigger mode", 1),
    ("Wheel speed sensor source", 0),
    ("High battery foldback starting voltage", 40.96),
    ("High battery foldback end voltage", 40.96),
    ("Low battery state of charge alarm threshold", 1),
    ("Voltage model battery state of charge gain", 32),
    ("Voltage model battery state of charge offset", 32),
    ("Axle torque sensor 1", 4096),
    ("Axle torque sensor 2", 4096),
    ("Axle torque sensor  3", 4096),
    ("Rolling start speed 1", 256),
    ("Rolling start speed 2", 256),
    ("Rolling start speed 3", 256),
    ("Rolling start speed", 256),
    ("Regen brake speed", 256),
    ("Reserved Parameter for Customer", 0),
    ("Control command source", 0),
    ("Battery management interface type", 0),
    ("Assist mode source", 0),
    ("Pedal sensor type", 0),
    ("Features", 0),
    ("Throttle full voltage", 4096),
    ("Throttle off voltage", 4096),
    ("Analogue brake full voltage", 4096),
    ("Analogue brake off voltage", 4096),
    ("Assist high voltage reading", 4096),
    ("Assist low voltage reading", 4096),
    ("Assist gain 1", 4096),
    ("Positive motoring torque ramp", 1),
    ("Negative motoring torque ramp", 1),
    ("Pedalec positive motoring torque ramp", 1),
    ("Pedalec negative motoring torque ramp", 1),
    ("Positive braking torque ramp", 1),
    ("Negative braking torque ramp", 1),
    ("Gear ratio", 256),
    ("Wheel diameter", 1),
    ("Assist cut out distance", 256),
    ("Vehicle maximum speed (Race mode Throttle max speed)", 256),
    ("Vehicle jog speed", 256),
    ("Wheel speed sensor pulses per revolution", 1),
    ("Pedalec minimum timeout", 1),
    ("Pedalec maximum timeout", 1),
    ("Pedal speed sensor pulses per revolution", 1),
    ("Pedal sense delay", 1),
    ("Vehicle maximum speed (Street mode Throttle max speed)", 256),
    ("MFG_FlowCheck", 1),
    ("MFG Barcode Type", 1),
    ("Model Dictionary Number - Low", 1),
    ("Model Dictionary Number - High", 1),
    ("Assist speed 1", 4096),
    ("Torque sensor voltage source", 0),
    ("voltage threshold for shared digital input + motor temperature source", 4096),
    ("Digital throttle sensor source", 0),
    ("Assist gain 2", 4096),
    ("Assist speed 2", 4096),
    ("Throttle sensor source", 0),
    ("Cutoff brake sensor source", 0),
    ("Regen brake source", 0),
    ("Assist Gain 3", 4096),
    ("Assist Speed 3", 4096),
    ("Vehicle jog speed2", 256),
    ("Assist Gain Walk", 4096),
    ("Speed limit ramp time", 1),
    ("CAN sync loss timeout", 1),
    ("software revision level", 1000),
    ("controller status", 0),
    ("faults", 0),
    ("controller temperature", 1),
    ("vehicle speed", 256),
    ("motor temperature", 1),
    ("motor current", 32),
    ("motor rpm", 1),
    ("motor speed", 40.96),
    ("battery voltage", 32),
    ("battery current", 32),
    ("battery state of charge", 1),
    ("battery power", 1),
    ("last fault", 0),
    ("throttle voltage", 4096),
    ("brake 1 voltage", 4096),
    ("brake 2 voltage", 4096),
    ("raw controller temperature sensor voltage", 4096),
    ("light sensor voltage", 4096),
    ("analog bms soc voltage", 1024),
    ("digital inputs", 0),
    ("warnings", 0),
    ("rotor angle", 182.04444444444444),
    ("battery temperature", 1),
    ("battery power percent", 1),
    ("dsp core temperature", 1),
    ("phase A current", 32),
    ("phase B current", 32),
    ("phase C current", 32),
    ("phase A voltage", 32),
    ("phase B voltage", 32),
    ("phase C voltage", 32),
    ("boot loader software revision", 1000),
    ("twelve volt supply voltage", 1024),
    ("high state of charge foldback gain", 32),
    ("raw battery voltage", 4096),
    ("phase A voltage per unit", 4096),
    ("phase B voltage per unit", 4096),
    ("phase C voltage per unit", 4096),
    ("digital outputs", 0),
    ("ia_pu", 4096),
    ("ic_pu", 4096),
    ("overload accumulator", 40.96),
    ("faults2", 0),
    ("motor phase U high voltage POST", 4096),
    ("motor phase U low voltage POST", 4096),
    ("motor phase V high voltage POST", 4096),
    ("motor phase V low voltage POST", 4096),
    ("motor phase W high voltage POST", 4096),
    ("motor phase W low voltage POST", 4096),
    ("motor phase U open circuit voltage POST", 4096),
    ("motor phase V open circuit voltage POST", 4096),
    ("motor phase W open circuit voltage POST", 4096),
    ("phase regen current power limit", 4096),
    ("high voltage foldback gain", 4096),
    ("wheel RPM (speed sensor based)", 16),
    ("wheel RPM (motor based)", 16),
    ("measured wheel RPM", 16),
    ("local power limit command", 4096),
    ("phase A current sensor offset", 4096),
    ("phase C current sensor offset", 4096),
    ("low voltage foldback gain", 4096),
    ("phase motoring current power limit", 4096),
    ("motor i^2t foldback gain", 4096),
    ("motor temperature foldback gain", 4096),
    ("inverter temperature foldback gain", 4096),
    ("speed limiter output", 4096),
    ("motoring phase current limit", 4096),
    ("low state of charge foldback gain", 4096),
    ("throttle setpoint", 4096),
    ("brake setpoint", 4096),
    ("controller flags", 0),
    ("instantaneous pedal speed", 64),
    ("assist speed limit", 4096),
    ("sensorless state", 0),
    ("average pedal speed", 64),
    ("average pedal torque", 64),
    ("regen phase current limit", 4096),
    ("motor input power", 1),
    ("requested torque command", 4096),
    ("torque reference", 4096),
    ("speed(ref/limit) command", 4096),
    ("pedal speed gain", 4096),
    ("assist level", 4096),
    ("modbus1 CRC error count", 1),
    ("modbus1 HW errors", 1),
    ("modbus2 CRC error count", 1),
    ("modbus2 HW errors", 1),
    ("reserved L4 4", 1),
    ("vd", 4096),
    ("vq", 4096),
    ("d feedback avg", 4096),
    ("q feedback avg", 4096),
    ("axle torque sensor offset voltage", 4096),
    ("current ISR execution time", 60),
    ("peak ISR execution time", 60),
    ("peak 1ms loop time", 15),
    ("average 1ms time", 15),
    ("1ms time", 15),
    ("execution time 4", 60),
    ("autotune encoder offset", 91.02222222),
    ("autotune offset error", 91.02222222),
    ("execution time 7", 60),
    ("warnings2", 0),
    ("remote maximum battery current limit", 8),
    ("remote maximum regen battery current limit", 8),
    ("autotune # pole pairs", 1),
    ("faults3", 0),
    ("last faults3", 0),
    ("custom code execution time", 15),
    ("v integral", 2048),
    ("v output", 4096),
    ("v error", 4096),
    ("v proportional", 4096),
    ("d integral", 256),
    ("q integral", 256),
    ("d output", 4096),
    ("q output", 4096),
    ("d error", 4096),
    ("q error", 4096),
    ("d proportional", 256),
    ("q proportional", 256),
    ("q limit from d", 4096),
    ("battery i^2t foldback gain", 4096),
    ("d feedback", 4096),
    ("q feedback", 4096),
    ("d reference", 4096),
    ("q reference", 4096),
    ("maximum measurable current", 1),
    ("maximum measurable voltage", 1),
    ("positive battery limit", 4096),
    ("negative battery limit", 4096),
    ("stator current alpha", 4096),
    ("stator current beta", 4096),
    ("flux alpha", 4096),
    ("flux beta", 4096),
    ("flux frequency", 1),
    ("flux magnitude", 4096),
    ("flux angle", 65536),
    ("open loop angle", 91.022222),
    ("calculated battery current motoring limit", 8),
    ("calculated battery current braking limit", 8),
    ("motor temperature sensor voltage", 4096),
    ("pu Lm", 4096),
    ("debug1", 1),
    ("debug2", 1),
    ("reserved_402", 1),
    ("pod switch value obsolete", 0),
    ("encoder angle", 65536),
    ("ib rms", 32),
    ("do_not_use_3", 1),
    ("wheel pulse counter", 1),
    ("trip meter", 100),
    ("pedalec_timeout_delay", 1),
    ("pll angle", 65536),
    ("pll error", 65536),
    ("pll PI frequency", 1),
    ("pll proportional", 1),
    ("pll integral", 256),
    ("rotor frequency", 1),
    ("pll reference angle", 65536),
    ("hall angle", 65536),
    ("last fault2", 0),
    ("hall frequency", 1),
    ("q limit", 256),
    ("d limit", 256),
    ("id ref trim", 4096),
    ("id ref fdfwd", 4096),
    ("autotune Lm", 1),
    ("autotune Rs", 1),
    ("autotune Ls", 1),
    ("pu Rs", 4096),
    ("pu Ls", 4096),
    ("rated electrical frequency", 8),
    ("digital inputs 2", 0),
    ("combined motor foldback", 4096),
    ("flash parameter cycle counter", 1),
    ("Ia_rms", 32),
    ("Ic_rms", 32),
    ("Iq_trim_q12", 4096),
    ("modulation index", 4096),
    ("pwm cmd a pwm", 1),
    ("pwm cmd b pwm", 1),
    ("pwm cmd c pwm", 1),
    ("autotune hall sector[0]", 4096),
    ("autotune hall sector[1]", 4096),
    ("autotune hall sector[2]", 4096),
    ("autotune hall sector[3]", 4096),
    ("autotune hall sector[4]", 4096),
    ("autotune hall sector[5]", 4096),
    ("autotune hall sector[6]", 4096),
    ("autotune hall sector[7]", 4096),
    ("parameter CRC32 high word", 0),
    ("parameter CRC32 low word", 0),
    ("user access level", 1),
    ("bootloader CRC32 high word", 0),
    ("bootloader CRC32 low word", 0),
    ("application CRC32 high word", 0),
    ("application CRC32 low word", 0),
    ("silicon revision", 1),
    ("motoring limit pre-foldback", 40.96),
    ("regen limit pre-foldback", 40.96),
    ("peak background period", 15),
    ("avg background period", 15),
    ("autotune hall offset angle", 91.02222222),
    ("depricated autotune Kv always 1", 4096),
    ("autotune rated rpm", 1),
    ("axle torque sensor assist", 4096),
    ("rolling start speed assist mode", 256),
    ("otp serial number0", 0),
    ("otp serial number1", 0),
    ("otp serial number2", 0),
    ("otp serial number3", 0),
    ("otp serial number4", 0),
    ("otp serial number5", 0),
    ("otp serial number6", 0),
    ("otp serial number7", 0),
    ("speed command", 40.96),
    ("Maximum motoring current", 40.96),
    ("Maximum braking current", 40.96),
    ("State command", 0),
    ("Applied Torque command", 40.96),
    ("Running Light PWM (Daylight)", 2.56),
    ("Brake Light PWM (Daylight)", 2.56),
    ("Test mode", 0),
    ("Motor discover mode", 0),
    ("Open loop modulation", 4096),
    ("Open loop current", 1),
    ("Open loop frequency", 16),
    ("Open loop angle", 91.022222),
    ("debug_cmd1", 1),
    ("debug_cmd2", 1),
    ("controller flags2", 0),
    ("do_not_use_4", 1),
    ("Remote speed command", 40.96),
    ("Remote maximum motoring current", 40.96),
    ("Remote maximum braking current", 40.96),
    ("Remote state command", 0),
    ("Remote torque command", 40.96),
    ("Remote Throttle Voltage", 4096),
    ("Remote Digital Commands", 0),
    ("Remote Analog brake voltage", 4096),
    ("Parameter read access code 1", 0),
    ("Bidirectional torque command", 10000),
    ("Display speed limit command", 4096),
    ("Display assist level command", 4096),
    ("Display walk command", 1),
    ("Remote battery SOC", 1),
    ("Remote battery temperature", 1),
    ("Remote light sensor voltage", 4096),
    ("Remote assist mode", 1),
    ("Arm datalogger", 1),
    ("Fault clear", 1),
    ("Parameter access code 1", 0),
    ("Load firmware to flash", 0),
    ("Write parameters to flash", 0),
)

#: Number of registers in the controller's dictionary.
REGISTER_COUNT = len(_TABLE)

_BY_NAME: dict[str, int] = {}
for _address, (_name, _scale) in enumerate(_TABLE):
    _BY_NAME.setdefault(_name, _address)


def register_info(address: int) -> RegisterInfo:
    """Return the description of the register at ``address``.

    Raises KeyError for an address outside the dictionary.
    """
    if not 0 <= address < REGISTER_COUNT:
        raise KeyError(f"no register at address {address}")
    name, scale = _TABLE[address]
    return RegisterInfo(name, address, float(scale))


def find_register(name: str) -> RegisterInfo:
    """Look a register up by its exact name.

    Raises KeyError when no register has that name.
    """
    try:
        address = _BY_NAME[name]
    except KeyError:
        raise KeyError(f"no register named {name!r}") from None
    return register_info(address)