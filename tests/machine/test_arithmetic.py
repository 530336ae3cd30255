import pytest

from intcode.common.ops import Dialect
from intcode.runtime.machine import Machine, Signal


def run_to_halt(machine: Machine):
    while machine.step() == Signal.CONTINUE:
        pass


@pytest.mark.parametrize('program, expected', [
    ([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50], [3500, 9, 10, 70, 2, 3, 11, 0, 99, 30, 40, 50]),
    ([1, 0, 0, 0, 99], [2, 0, 0, 0, 99]),
    ([2, 3, 0, 3, 99], [2, 3, 0, 6, 99]),
    ([2, 4, 4, 5, 99, 0], [2, 4, 4, 5, 99, 9801]),
    ([1, 1, 1, 4, 99, 5, 6, 0, 99], [30, 1, 1, 4, 2, 5, 6, 0, 99]),
])
def test_basic_programs(program, expected):
    machine = Machine(program, Dialect.BASIC)
    run_to_halt(machine)

    assert machine.snapshot_memory() == expected
    assert machine.halted


def test_step_signals():
    machine = Machine([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50], Dialect.BASIC)

    assert machine.step() == Signal.CONTINUE
    assert machine.ip == 4
    assert machine.peek_memory(3) == 70

    assert machine.step() == Signal.CONTINUE
    assert machine.ip == 8

    assert machine.step() == Signal.HALTED
    assert machine.ip == 8
    assert machine.peek_memory(0) == 3500


def test_comparisons():
    # lt 5 < 7 -> [9], eq 3 == 3 -> [10]
    machine = Machine([1107, 5, 7, 9, 1108, 3, 3, 10, 99, -1, -1], Dialect.WITH_IO)
    run_to_halt(machine)

    assert machine.peek_memory(9) == 1
    assert machine.peek_memory(10) == 1


def test_jumps():
    # jt taken skips the first output, jf not taken falls through
    program = [1105, 1, 5, 104, 111, 1106, 1, 0, 104, 222, 99]
    machine = Machine(program, Dialect.WITH_IO)

    assert machine.run() == [222]
    assert machine.halted


def test_big_numbers():
    machine = Machine([1102, 34915192, 34915192, 7, 4, 7, 99, 0])
    assert machine.run() == [1219070632396864]

    machine = Machine([104, 1125899906842624, 99])
    assert machine.run() == [1125899906842624]
