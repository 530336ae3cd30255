import pytest

from intcode.common.ops import Dialect
from intcode.runtime.machine import Machine, AddressOutOfBounds

import unit_utils


def test_quine():
    program = unit_utils.load_program('quine')
    (machine, outputs) = unit_utils.run_program(program)

    assert outputs == program
    assert machine.halted


@pytest.mark.parametrize('k, p', [(20, 5), (40, -5), (-3, 40), (0, 33), (55, -45)])
def test_relative_read(k, p):
    memory = [109, k, 204, p, 99] + [1000 + i for i in range(5, 64)]
    (_, outputs) = unit_utils.run_program(memory)

    assert outputs == [1000 + k + p]


@pytest.mark.parametrize('k, p', [(40, -5), (-3, 40), (10, 10)])
def test_relative_write(k, p):
    memory = [109, k, 203, p, 4, k + p, 99] + [0] * 57
    (machine, outputs) = unit_utils.run_program(memory, [-77])

    assert outputs == [-77]
    assert machine.peek_memory(k + p) == -77


def test_relative_base_accumulates():
    memory = [109, 30, 109, -10, 204, 2, 99] + [0] * 20
    memory[22] = 555
    machine = Machine(memory)

    assert machine.run() == [555]
    assert machine.base == 20


def test_negative_relative_address():
    machine = Machine([109, -5, 204, 0, 99])

    with pytest.raises(AddressOutOfBounds) as e:
        machine.run()

    assert e.value.ip == 2


def test_memory_grows_on_write():
    machine = Machine([1101, 2, 3, 10, 4, 10, 99])

    assert machine.run() == [5]
    assert len(machine.snapshot_memory()) == 11
    assert machine.peek_memory(7) == 0


def test_read_beyond_memory_is_zero():
    machine = Machine([4, 1000, 99])

    assert machine.run() == [0]
    assert len(machine.snapshot_memory()) == 3
    assert machine.peek_memory(5000) == 0


def test_fixed_dialect_padding():
    machine = Machine([1101, 2, 3, 10, 4, 10, 99], Dialect.WITH_IO, padding=4)

    assert machine.run() == [5]
    assert len(machine.snapshot_memory()) == 11
