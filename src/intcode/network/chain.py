''' Amplifier chains: feed-forward and feedback loop '''

import itertools
import logging as lg
from typing import Sequence

from intcode.common.conf import MachineSettings
from intcode.runtime.machine import Machine, ProtocolError


def boot_chain(
    program: Sequence[int],
    phases: Sequence[int],
    settings: MachineSettings | None = None
) -> list[Machine]:
    machines = []

    for phase in phases:
        machine = Machine(program, settings=settings)
        machine.register_input(phase)
        machines.append(machine)

    return machines


def run_chain(
    program: Sequence[int],
    phases: Sequence[int],
    signal: int = 0,
    settings: MachineSettings | None = None
) -> int:
    for machine in boot_chain(program, phases, settings):
        machine.register_input(signal)
        output = machine.run_until_output()

        if output is None:
            raise ProtocolError(f'Amplifier {machine.last_suspend.name} without output', machine.ip)

        signal = output

    return signal


def run_feedback_loop(
    program: Sequence[int],
    phases: Sequence[int],
    signal: int = 0,
    settings: MachineSettings | None = None
) -> int:
    machines = boot_chain(program, phases, settings)

    while True:
        for i, machine in enumerate(machines):
            machine.register_input(signal)
            output = machine.run_until_output()

            if output is None:
                if machine.halted:
                    lg.debug(f'Amplifier {i} halted, last signal {signal}')
                    return signal

                raise ProtocolError(f'Amplifier {i} blocked in feedback loop', machine.ip)

            signal = output


def max_signal(
    program: Sequence[int],
    phases: Sequence[int],
    feedback: bool = False,
    settings: MachineSettings | None = None
) -> tuple[int, tuple[int, ...]]:
    runner = run_feedback_loop if feedback else run_chain
    best: tuple[int, tuple[int, ...]] | None = None

    for order in itertools.permutations(phases):
        signal = runner(program, order, settings=settings)

        if best is None or signal > best[0]:
            best = (signal, order)

    if best is None:
        raise UserWarning('No phases given')

    lg.info(f'Best signal {best[0]} with phases {best[1]}')
    return best
