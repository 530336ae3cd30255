import pytest

from intcode.network.chain import run_chain, run_feedback_loop, max_signal, boot_chain

import unit_utils


@pytest.fixture
def forward_program():
    yield unit_utils.load_program('amp_forward')


@pytest.fixture
def feedback_program():
    yield unit_utils.load_program('amp_feedback')


def test_run_chain(forward_program):
    assert run_chain(forward_program, [4, 3, 2, 1, 0]) == 43210
    assert run_chain(forward_program, [0, 1, 2, 3, 4]) == 1234


def test_max_signal_forward(forward_program):
    assert max_signal(forward_program, range(5)) == (43210, (4, 3, 2, 1, 0))


def test_feedback_loop(feedback_program):
    assert run_feedback_loop(feedback_program, [9, 8, 7, 6, 5]) == 139629729


def test_max_signal_feedback(feedback_program):
    (signal, _) = max_signal(feedback_program, range(5, 10), feedback=True)
    assert signal == 139629729


def test_feedback_loop_over_single_shot_amplifiers(forward_program):
    # Every amplifier halts after one output, so the first pass decides
    (signal, phases) = max_signal(forward_program, range(5), feedback=True)
    assert (signal, phases) == (43210, (4, 3, 2, 1, 0))


def test_boot_chain_copies_program(forward_program):
    machines = boot_chain(forward_program, [1, 2])
    machines[0].register_input(0)
    machines[0].run()

    assert machines[1].snapshot_memory() == forward_program
    assert list(machines[1].inputs) == [2]
