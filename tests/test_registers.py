import pytest

from phaserunner_modbus.registers import MAX_BLOCK, Register, RegisterMap


@pytest.fixture
def regs():
    return RegisterMap()


def test_default_addresses(regs):
    assert [r.address for r in regs] == [
        11, 32, 49, 208, 258, 299, 490, 491, 492, 493, 494, 495, 508, 509,
    ]


def test_default_scales_and_flags(regs):
    assert regs.get(490).scale == 40.96
    assert regs.get(495).scale == 4096
    assert all(r.value == 0 and not r.pending_write and not r.pending_read for r in regs)


def test_set_marks_pending_write(regs):
    assert regs.set(493, 2) is True
    r = regs.get(493)
    assert r.value == 2
    assert r.pending_write is True
    assert r.pending_read is False


def test_set_truncates_to_integer(regs):
    regs.set(490, 819.7)
    assert regs.get(490).value == 819


def test_set_wraps_to_16_bits(regs):
    regs.set(491, 0x10000 + 5)
    assert regs.get(491).value == 5


def test_set_unknown_address_is_ignored(regs):
    before = [(r.address, r.value, r.pending_write) for r in regs]
    assert regs.set(1, 42) is False
    assert [(r.address, r.value, r.pending_write) for r in regs] == before


def test_read_marks_pending_read(regs):
    assert regs.read(258) is True
    assert regs.get(258).pending_read is True
    assert regs.get(258).pending_write is False


def test_read_unknown_address(regs):
    assert regs.read(7) is False
    assert not any(r.pending_read for r in regs)


def test_get_returns_copy(regs):
    copy = regs.get(11)
    copy.value = 99
    copy.pending_write = True
    assert regs.get(11).value == 0
    assert regs.get(11).pending_write is False


def test_get_unknown_returns_blank(regs):
    assert regs.get(400) == Register()


def test_iteration_yields_live_registers(regs):
    regs.set(508, 1)
    for r in regs:
        r.pending_write = False
    assert regs.get(508).pending_write is False


def test_get_block(regs):
    block = regs.get_block(490, 6)
    assert [r.address for r in block] == [490, 491, 492, 493, 494, 495]


def test_get_block_fills_unknown_with_blank(regs):
    block = regs.get_block(10, 3)
    assert block[0] == Register()
    assert block[1].address == 11
    assert block[2] == Register()


def test_get_block_limit(regs):
    assert len(regs.get_block(490, MAX_BLOCK)) == MAX_BLOCK
    assert regs.get_block(490, MAX_BLOCK + 1) == []


def test_len_and_contains(regs):
    assert len(regs) == len(list(regs))
    assert 299 in regs
    assert 300 not in regs


def test_maps_are_independent():
    first = RegisterMap()
    second = RegisterMap()
    first.set(493, 1)
    assert second.get(493).pending_write is False