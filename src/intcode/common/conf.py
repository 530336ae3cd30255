from pathlib import Path
import logging as lg
import tomllib

from intcode.common.ops import Dialect

# Scratch cells appended by front ends when nothing else is requested
DEFAULT_PADDING = 0

# Network
NETWORK_SIZE = 50
NAT_ADDRESS = 255
IDLE_INPUT = -1

# ASCII programs
NEWLINE = 10
ASCII_LIMIT = 128


class MachineSettings:
    dialect: Dialect
    padding: int
    grow_memory: bool | None    # None: dialect decides
    trace: bool

    def __init__(self):
        self.dialect = Dialect.WITH_RELATIVE
        self.padding = DEFAULT_PADDING
        self.grow_memory = None
        self.trace = False

    def update(
        self,
        dialect: Dialect | None = None,
        padding: int | None = None,
        grow_memory: bool | None = None,
        trace: bool | None = None
    ):
        if dialect is not None:
            self.dialect = dialect

        if padding is not None:
            if padding < 0:
                raise UserWarning(f'Negative padding {padding}')

            self.padding = padding

        if grow_memory is not None:
            self.grow_memory = grow_memory

        if trace is not None:
            self.trace = trace

        return self


def load_settings(path: str | Path) -> MachineSettings:
    if isinstance(path, str):
        path = Path(path)

    lg.debug(f'Loading settings from {path}')
    config = tomllib.loads(path.read_text())
    machine = config.get('machine', {})

    dialect = machine.get('dialect')

    return MachineSettings().update(
        dialect=Dialect(dialect) if dialect is not None else None,
        padding=machine.get('padding'),
        grow_memory=machine.get('grow_memory'),
        trace=machine.get('trace')
    )
