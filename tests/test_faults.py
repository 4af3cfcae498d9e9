import pytest

from phaserunner_modbus.faults import (
    CONTROLLER_FAULTS_REGISTER,
    MOTOR_FAULTS_REGISTER,
    ControllerFault,
    ControllerFaults,
    MotorFault,
    MotorFaults,
)
from phaserunner_modbus.register_names import register_info


def test_fault_registers_match_controller_dictionary():
    assert MOTOR_FAULTS_REGISTER == 258
    assert CONTROLLER_FAULTS_REGISTER == 299
    assert register_info(MOTOR_FAULTS_REGISTER).name == "faults"
    assert register_info(CONTROLLER_FAULTS_REGISTER).name == "faults2"


def test_motor_fault_bits_follow_the_word_layout():
    assert MotorFaults(1 << 0).active() == [MotorFault.CONTROLLER_OVER_VOLTAGE]
    assert MotorFaults(1 << 8).active() == [MotorFault.NETWORK_COMM_TIMEOUT]
    assert MotorFaults(1 << 15).active() == [MotorFault.INSTANT_CONTROLLER_UNDER_VOLTAGE]


def test_controller_fault_bits_follow_the_word_layout():
    assert ControllerFaults(1 << 1).active() == [ControllerFault.CURRENT_SCALING]
    assert ControllerFaults(1 << 14).active() == [ControllerFault.OPEN_PHASE_FAULT]
    assert ControllerFaults(1 << 15).active() == [
        ControllerFault.ANALOG_BRAKE_VOLTAGE_OUT_OF_RANGE
    ]


@pytest.mark.parametrize("cls", [MotorFaults, ControllerFaults])
def test_empty_word_is_ready(cls):
    word = cls()
    assert word.ready() is True
    assert word.active() == []


@pytest.mark.parametrize("cls", [MotorFaults, ControllerFaults])
def test_any_bit_means_not_ready(cls):
    assert cls(1 << 15).ready() is False


def test_motor_active_lists_set_faults_in_bit_order():
    word = MotorFaults(MotorFault.MOTOR_OVER_TEMP | MotorFault.CONTROLLER_OVER_VOLTAGE)
    assert word.active() == [MotorFault.CONTROLLER_OVER_VOLTAGE, MotorFault.MOTOR_OVER_TEMP]


def test_controller_active_lists_set_faults():
    word = ControllerFaults(ControllerFault.HALL_STALL | ControllerFault.CANBUS)
    assert word.active() == [ControllerFault.CANBUS, ControllerFault.HALL_STALL]


def test_undefined_bits_are_not_reported_but_block_ready():
    motor = MotorFaults(1 << 7)
    assert motor.active() == []
    assert motor.ready() is False
    controller = ControllerFaults(1 << 0)
    assert controller.active() == []
    assert controller.ready() is False


def test_every_motor_fault_round_trips_through_the_word():
    for fault in MotorFault:
        assert MotorFaults(int(fault)).active() == [fault]


def test_every_controller_fault_round_trips_through_the_word():
    for fault in ControllerFault:
        assert ControllerFaults(int(fault)).active() == [fault]


def test_word_is_kept_to_sixteen_bits():
    word = MotorFaults((1 << 16) | int(MotorFault.INTERNAL_ERROR))
    assert word.faults == int(MotorFault.INTERNAL_ERROR)
    assert word.active() == [MotorFault.INTERNAL_ERROR]