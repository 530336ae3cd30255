import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Sequence, TextIO

import click

from intcode.common.conf import MachineSettings, load_settings
from intcode.common.ops import Dialect
from intcode.network.ascii import AsciiSession
from intcode.sasm.loader import load_file, load_program, LoadError
from intcode.runtime.machine import Machine, MachineError, Suspend


EXIT_HALT = 0
EXIT_BLOCKED = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def feed(machine: Machine, line: str, session: AsciiSession | None):
    if session is not None:
        session.send_line(line.rstrip('\n'))
    else:
        machine.register_inputs(load_program(line))


def execute(
    program: Sequence[int],
    inputs: Sequence[int] = (),
    settings: MachineSettings | None = None,
    ascii_mode: bool = False,
    stdin: TextIO | None = None
) -> Suspend:
    ''' Runs a program, asking stdin for more input whenever it blocks '''
    machine = Machine(program, settings=settings)
    machine.register_inputs(inputs)
    session = AsciiSession(machine) if ascii_mode else None

    while True:
        if session is not None:
            (text, extra) = session.read()
            click.echo(text, nl=False)

            for value in extra:
                click.echo(value)
        else:
            for value in machine.run():
                click.echo(value)

        if machine.halted:
            return Suspend.HALTED

        line = stdin.readline() if stdin is not None else ''

        if not line:
            lg.info(f'Blocked on input at IP:{machine.ip}')
            return Suspend.BLOCKED

        feed(machine, line, session)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-i', '--input', 'inputs', type=int, multiple=True, help='Queues an input value')
@click.option('--ascii', 'ascii_mode', is_flag=True, help='Talk to the program in text lines')
@click.option('--pad', type=int, default=None, help='Zero cells appended to the program')
@click.option('--dialect', type=click.Choice([d.value for d in Dialect]), default=None)
@click.option('--trace', is_flag=True, help='Dumps machine state after every step')
@click.option('--config', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('program_filename', type=Path)
def run(
    verbose: bool,
    inputs: tuple[int, ...],
    ascii_mode: bool,
    pad: int | None,
    dialect: str | None,
    trace: bool,
    config: Path | None,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose or trace else lg.INFO)
    lg.info("INTCODE")

    try:
        settings = load_settings(config) if config is not None else MachineSettings()
        settings.update(
            dialect=Dialect(dialect) if dialect is not None else None,
            padding=pad,
            trace=trace or None
        )

        program = load_file(program_filename)
        stdin = click.get_text_stream('stdin')
        state = execute(program, inputs, settings, ascii_mode, stdin)

        if state == Suspend.BLOCKED:
            sys.exit(EXIT_BLOCKED)

        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except MachineError as e:
        lg.error(f'Execution halted on machine error {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except LoadError as e:
        lg.error(f'Cannot load program: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        return sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        return sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
